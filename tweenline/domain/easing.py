"""
Easing and Interpolation

Pure functions mapping a progress value in [0, 1] to eased progress, and
blending two keyframe property maps at a given progress.
"""
from numbers import Real
from typing import Any, Callable, Dict, List

from tweenline.utils.message import Log

LINEAR = "linear"


def _linear(p: float) -> float:
    return p


def _ease_in_quad(p: float) -> float:
    return p * p


def _ease_out_quad(p: float) -> float:
    return p * (2 - p)


def _ease_in_out_quad(p: float) -> float:
    if p < 0.5:
        return 2 * p * p
    return -1 + (4 - 2 * p) * p


def _ease_in_cubic(p: float) -> float:
    return p ** 3


def _ease_out_cubic(p: float) -> float:
    return (p - 1) ** 3 + 1


def _ease_in_out_cubic(p: float) -> float:
    if p < 0.5:
        return 4 * p ** 3
    return (p - 1) * (2 * p - 2) * (2 * p - 2) + 1


EASING_FUNCTIONS: Dict[str, Callable[[float], float]] = {
    LINEAR: _linear,
    "easeInQuad": _ease_in_quad,
    "easeOutQuad": _ease_out_quad,
    "easeInOutQuad": _ease_in_out_quad,
    "easeInCubic": _ease_in_cubic,
    "easeOutCubic": _ease_out_cubic,
    "easeInOutCubic": _ease_in_out_cubic,
}


def available_easings() -> List[str]:
    """Names accepted by apply_easing, in catalog order."""
    return list(EASING_FUNCTIONS)


def clamp_progress(progress: float) -> float:
    return max(0.0, min(1.0, progress))


def apply_easing(progress: float, easing: str = LINEAR) -> float:
    """
    Apply a named easing function to a progress value.

    Progress is clamped to [0, 1] first. Unknown names fall back to linear.
    """
    func = EASING_FUNCTIONS.get(easing)
    if func is None:
        Log.debug(f"Easing: Unknown easing '{easing}', falling back to linear")
        func = _linear
    return func(clamp_progress(progress))


def is_numeric(value: Any) -> bool:
    """Numbers interpolate; bools are flags and snap like any opaque value."""
    return isinstance(value, Real) and not isinstance(value, bool)


def interpolate_properties(
    start: Dict[str, Any],
    end: Dict[str, Any],
    progress: float,
    easing: str = LINEAR
) -> Dict[str, Any]:
    """
    Blend two property maps.

    For every key present on either side:
    - both values numeric: linear blend by eased progress
    - present on both sides otherwise: start value below eased 0.5, end value from 0.5 on
    - present on one side only: that side's value

    Args:
        start: Properties of the earlier keyframe
        end: Properties of the later keyframe
        progress: Linear progress between the keyframes (clamped to [0, 1])
        easing: Easing name from EASING_FUNCTIONS

    Returns:
        New property dict; inputs are not modified
    """
    eased = apply_easing(progress, easing)
    result: Dict[str, Any] = {}

    for key in list(start) + [k for k in end if k not in start]:
        if key in start and key in end:
            a, b = start[key], end[key]
            if is_numeric(a) and is_numeric(b):
                result[key] = a + (b - a) * eased
            else:
                result[key] = b if eased >= 0.5 else a
        elif key in start:
            result[key] = start[key]
        else:
            result[key] = end[key]

    return result
