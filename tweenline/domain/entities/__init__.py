"""
Domain entities
"""
from tweenline.domain.entities.keyframe import (
    Keyframe,
    Frame,
    make_frame_id,
    parse_frame_id,
)
from tweenline.domain.entities.tween import Tween
from tweenline.domain.entities.layer import Layer, LayerType, FrameType
from tweenline.domain.entities.timeline import Timeline

__all__ = [
    'Keyframe',
    'Frame',
    'make_frame_id',
    'parse_frame_id',
    'Tween',
    'Layer',
    'LayerType',
    'FrameType',
    'Timeline',
]
