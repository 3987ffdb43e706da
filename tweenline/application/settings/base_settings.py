"""
Base Settings

Dataclass settings schemas whose fields carry validation rules in their
metadata. Declare fields with validated_field() and call validate() before
wiring a timeline from the values.
"""
from dataclasses import dataclass, asdict, fields, field
from typing import Optional, Dict, Any, List, Union
import re


@dataclass
class ValidationResult:
    """
    Outcome of validating a settings object.

    Attributes:
        valid: True if no rule failed
        errors: One message per failed rule
    """
    valid: bool = True
    errors: List[str] = field(default_factory=list)

    def add_error(self, message: str):
        self.errors.append(message)
        self.valid = False

    def merge(self, other: 'ValidationResult'):
        if not other.valid:
            self.valid = False
        self.errors.extend(other.errors)

    def __bool__(self) -> bool:
        return self.valid


@dataclass
class FieldValidator:
    """
    Rules for one settings field. Unset rules are skipped.

    Example:
        padding: float = field(default=10.0, metadata={
            'validator': FieldValidator(min_value=0)
        })
    """
    min_value: Optional[Union[int, float]] = None
    choices: Optional[List[Any]] = None
    pattern: Optional[str] = None
    pattern_message: Optional[str] = None
    # Rejects None and blank strings
    required: bool = False

    def validate(self, value: Any, field_name: str) -> ValidationResult:
        result = ValidationResult()

        if value is None or (isinstance(value, str) and not value.strip()):
            if self.required:
                result.add_error(f"{field_name}: Required field cannot be empty")
            if value is None:
                return result

        if self.min_value is not None and isinstance(value, (int, float)) and value < self.min_value:
            result.add_error(f"{field_name}: Value {value} is below minimum {self.min_value}")

        if self.choices is not None and value not in self.choices:
            result.add_error(f"{field_name}: Value '{value}' not in allowed choices: {self.choices}")

        if self.pattern is not None and isinstance(value, str) and not re.match(self.pattern, value):
            result.add_error(f"{field_name}: {self.pattern_message or 'Value does not match required pattern'}")

        return result


def validated_field(
    default: Any = None,
    *,
    min_value: Optional[Union[int, float]] = None,
    choices: Optional[List[Any]] = None,
    pattern: Optional[str] = None,
    pattern_message: Optional[str] = None,
    required: bool = False
):
    """
    dataclasses.field() with a FieldValidator in its metadata.

    Example:
        easing: str = validated_field('linear', choices=['linear', 'easeInQuad'])
    """
    validator = FieldValidator(
        min_value=min_value,
        choices=choices,
        pattern=pattern,
        pattern_message=pattern_message,
        required=required,
    )
    return field(default=default, metadata={'validator': validator})


@dataclass
class BaseSettings:
    """Base class for settings dataclasses. Every field needs a default."""

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'BaseSettings':
        """
        Build settings from stored values.

        Missing keys take their defaults and unknown keys are ignored.
        Values are not validated here.
        """
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in known})

    def validate(self) -> ValidationResult:
        """Run every field's validator; fields without one always pass."""
        result = ValidationResult()
        for f in fields(self):
            validator = f.metadata.get('validator')
            if isinstance(validator, FieldValidator):
                result.merge(validator.validate(getattr(self, f.name), f.name))
        return result

    def is_valid(self) -> bool:
        return self.validate().valid
