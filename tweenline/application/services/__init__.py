"""Application services - Timeline editing, evaluation and transfer"""

from tweenline.application.services.service_base import TimelineServiceBase
from tweenline.application.services.layer_tree_service import LayerTreeService
from tweenline.application.services.keyframe_service import KeyframeService
from tweenline.application.services.tween_service import TweenService
from tweenline.application.services.timeline_evaluator import TimelineEvaluator, LayerState
from tweenline.application.services.clipboard_service import ClipboardService, ClipboardEntry
from tweenline.application.services.selection_service import SelectionService
from tweenline.application.services.snapshot_service import SnapshotService, SnapshotError
from tweenline.application.services.time_service import TimeService

__all__ = [
    'TimelineServiceBase',
    'LayerTreeService',
    'KeyframeService',
    'TweenService',
    'TimelineEvaluator',
    'LayerState',
    'ClipboardService',
    'ClipboardEntry',
    'SelectionService',
    'SnapshotService',
    'SnapshotError',
    'TimeService',
]
