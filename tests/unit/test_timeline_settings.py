"""
Tests for TimelineSettings and its field validation.
"""
import pytest

from tweenline import create_timeline
from tweenline.application.settings import FieldValidator, TimelineSettings, ValidationResult


class TestValidationResult:
    """Tests for ValidationResult class."""

    def test_initial_state_is_valid(self):
        result = ValidationResult()
        assert result.valid is True
        assert result.errors == []

    def test_add_error_marks_invalid(self):
        result = ValidationResult()
        result.add_error("bad")
        assert result.valid is False
        assert bool(result) is False

    def test_merge_carries_errors(self):
        target = ValidationResult()
        other = ValidationResult()
        other.add_error("Error 1")

        target.merge(other)

        assert target.valid is False
        assert target.errors == ["Error 1"]


class TestFieldValidator:
    """Tests for the rules TimelineSettings declares."""

    def test_min_value(self):
        validator = FieldValidator(min_value=0.1)
        assert validator.validate(1.0, "time_scale").valid
        assert "below minimum" in validator.validate(0.05, "time_scale").errors[0]

    def test_choices(self):
        validator = FieldValidator(choices=["linear", "easeInQuad"])
        assert validator.validate("linear", "easing").valid
        assert "not in allowed choices" in validator.validate("bounce", "easing").errors[0]

    def test_pattern_message(self):
        validator = FieldValidator(pattern=r"^#[0-9a-f]{3}$", pattern_message="Must be a short hex color")
        assert "Must be a short hex color" in validator.validate("red", "color").errors[0]

    def test_required(self):
        validator = FieldValidator(required=True)
        assert "Required field" in validator.validate("  ", "name").errors[0]
        assert not validator.validate(None, "name").valid
        assert FieldValidator().validate(None, "name").valid


class TestTimelineSettings:
    """Tests for the timeline settings schema."""

    def test_defaults(self):
        settings = TimelineSettings()
        assert settings.default_duration == 600.0
        assert settings.min_time_scale == 0.1
        assert settings.exact_hit_tolerance == 0.001
        assert settings.keyframes_at_time_tolerance == 0.1
        assert settings.auto_extend_padding == 10.0
        assert settings.default_easing == "linear"
        assert settings.is_valid()

    def test_round_trip_through_dict(self):
        settings = TimelineSettings(default_duration=120.0, default_layer_name="Track")
        assert TimelineSettings.from_dict(settings.to_dict()) == settings

    def test_from_dict_defaults_and_ignores_unknown(self):
        settings = TimelineSettings.from_dict({"default_duration": 30.0, "obsolete": 1})
        assert settings.default_duration == 30.0
        assert settings.default_easing == "linear"

    def test_from_dict_does_not_validate(self):
        settings = TimelineSettings.from_dict({"default_duration": -5})
        assert settings.default_duration == -5
        assert settings.is_valid() is False

    @pytest.mark.parametrize("overrides", [
        {"default_duration": -1},
        {"default_time_scale": 0.01},
        {"default_easing": "bounce"},
        {"default_layer_name": ""},
        {"default_layer_color": "blue"},
    ])
    def test_invalid_values(self, overrides):
        assert TimelineSettings(**overrides).is_valid() is False

    def test_time_scale_below_configured_minimum(self):
        settings = TimelineSettings(default_time_scale=0.5, min_time_scale=1.0)
        errors = settings.validate().errors
        assert len(errors) == 1
        assert "min_time_scale" in errors[0]

    def test_create_timeline_rejects_invalid_settings(self):
        with pytest.raises(ValueError, match="default_easing"):
            create_timeline(TimelineSettings(default_easing="bounce"))

    def test_settings_drive_new_timelines(self):
        settings = TimelineSettings(
            default_duration=120.0,
            default_layer_name="Track",
            default_easing="easeInQuad",
            keyframes_at_time_tolerance=0.5,
        )
        timeline = create_timeline(settings)

        layer = timeline.add_layer().data
        timeline.insert_keyframe(layer.id, 0, {"x": 0})
        timeline.insert_keyframe(layer.id, 10, {"x": 100})
        tween = timeline.create_motion_tween(layer.id, 0, 10).data

        assert timeline.duration == 120.0
        assert layer.name == "Track 1"
        assert tween.easing == "easeInQuad"
        assert len(timeline.get_keyframes_at_time(9.6)) == 1
