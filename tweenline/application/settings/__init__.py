"""
Settings

Dataclass-based settings schemas with validation.
"""
from .base_settings import BaseSettings, ValidationResult, FieldValidator, validated_field
from .timeline_settings import TimelineSettings

__all__ = [
    "BaseSettings",
    "ValidationResult",
    "FieldValidator",
    "validated_field",
    "TimelineSettings",
]
