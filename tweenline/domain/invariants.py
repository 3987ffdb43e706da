"""
Layer invariants

Checks for the per-layer ordering and uniqueness rules: keyframes strictly
ascending by frame, tweens ascending by start and pairwise disjoint as closed
intervals, folders without keyframes and layers without children.
"""
from typing import List

from tweenline.domain.entities.layer import Layer
from tweenline.domain.entities.timeline import Timeline


def layer_violations(layer: Layer) -> List[str]:
    """Return a description of every invariant ``layer`` breaks (empty if none)."""
    problems: List[str] = []

    if layer.is_folder:
        if layer.keyframes or layer.tweens:
            problems.append(f"Folder '{layer.id}' holds keyframes or tweens")
        return problems

    if layer.children:
        problems.append(f"Layer '{layer.id}' has children but is not a folder")

    frames = [kf.frame for kf in layer.keyframes]
    for previous, current in zip(frames, frames[1:]):
        if current <= previous:
            problems.append(
                f"Layer '{layer.id}' keyframes not strictly ascending at {previous} -> {current}"
            )

    for tween in layer.tweens:
        if tween.start_frame >= tween.end_frame:
            problems.append(f"Layer '{layer.id}' has empty tween {tween.start_frame}-{tween.end_frame}")

    for previous, current in zip(layer.tweens, layer.tweens[1:]):
        if current.start_frame < previous.start_frame:
            problems.append(f"Layer '{layer.id}' tweens not sorted by start frame")
        if previous.overlaps(current.start_frame, current.end_frame):
            problems.append(
                f"Layer '{layer.id}' tweens overlap: "
                f"{previous.start_frame}-{previous.end_frame} and {current.start_frame}-{current.end_frame}"
            )

    return problems


def timeline_violations(timeline: Timeline) -> List[str]:
    """Collect invariant violations over every node of the timeline."""
    problems: List[str] = []
    for node in timeline.iter_depth_first():
        problems.extend(layer_violations(node))
    return problems
