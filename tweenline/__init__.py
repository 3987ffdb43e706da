"""
Tweenline

In-memory keyframe animation timeline: a layer/folder tree carrying
keyframes and motion tweens, frame-indexed editing with ripple semantics,
and continuous-time evaluation of interpolated layer state.

Usage:
    from tweenline import create_timeline

    timeline = create_timeline()
    layer = timeline.add_layer("Box").data
    timeline.insert_keyframe(layer.id, 0, {"x": 0})
    timeline.insert_keyframe(layer.id, 10, {"x": 100})
    timeline.create_motion_tween(layer.id, 0, 10)
    timeline.evaluate_at_time(5)
"""
from tweenline.application.api.result_types import CommandResult, ErrorKind, ResultStatus
from tweenline.application.api.timeline_facade import TimelineFacade
from tweenline.application.bootstrap import ServiceContainer, create_timeline, initialize_services
from tweenline.application.settings import TimelineSettings
from tweenline.domain.entities import FrameType, Keyframe, Layer, LayerType, Timeline, Tween

__version__ = "0.1.0"

__all__ = [
    "CommandResult",
    "ErrorKind",
    "ResultStatus",
    "TimelineFacade",
    "ServiceContainer",
    "create_timeline",
    "initialize_services",
    "TimelineSettings",
    "FrameType",
    "Keyframe",
    "Layer",
    "LayerType",
    "Timeline",
    "Tween",
]
