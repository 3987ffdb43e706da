"""
Timeline Settings

Engine-wide defaults for a timeline instance.

Usage:
    settings = TimelineSettings(default_duration=120.0)
    timeline = create_timeline(settings=settings)
"""
from dataclasses import dataclass

from tweenline.domain.easing import EASING_FUNCTIONS
from .base_settings import BaseSettings, ValidationResult, validated_field


@dataclass
class TimelineSettings(BaseSettings):
    """
    Timeline settings schema.

    All fields have defaults so stored settings from older versions load.
    """

    # Time
    default_duration: float = validated_field(600.0, min_value=0)
    default_time_scale: float = validated_field(1.0, min_value=0.1)
    min_time_scale: float = validated_field(0.1, min_value=0.0)
    auto_extend_padding: float = validated_field(10.0, min_value=0)

    # Evaluation
    exact_hit_tolerance: float = validated_field(0.001, min_value=0)
    keyframes_at_time_tolerance: float = validated_field(0.1, min_value=0)
    default_easing: str = validated_field("linear", choices=list(EASING_FUNCTIONS))

    # New objects
    default_layer_name: str = validated_field("Layer", required=True)
    default_folder_name: str = validated_field("Folder", required=True)
    default_layer_color: str = validated_field(
        "#fff",
        pattern=r"^#([0-9a-fA-F]{3}|[0-9a-fA-F]{6})$",
        pattern_message="Color must be a #rgb or #rrggbb hex string",
    )

    def validate(self) -> ValidationResult:
        result = super().validate()
        if self.default_time_scale < self.min_time_scale:
            result.add_error(
                f"default_time_scale: Value {self.default_time_scale} is below min_time_scale {self.min_time_scale}"
            )
        return result
