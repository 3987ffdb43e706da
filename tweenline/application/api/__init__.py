"""
Application API Layer

Structured results shared by every timeline operation. The facade over one
timeline lives in tweenline.application.api.timeline_facade.
"""
from .result_types import CommandResult, ResultStatus, ErrorKind

__all__ = [
    "CommandResult",
    "ResultStatus",
    "ErrorKind",
]
