"""
Result Types for Timeline Commands

Structured return types for all timeline operations.
"""
from dataclasses import dataclass, field
from typing import Optional, List, TypeVar, Generic
from enum import Enum


class ResultStatus(Enum):
    """Status of a command execution"""
    SUCCESS = "success"
    ERROR = "error"
    WARNING = "warning"


class ErrorKind(Enum):
    """
    Why a command failed.

    All kinds are local and recoverable: a failed command performs no
    mutation and the caller decides how to surface it.
    """
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    INVALID_ARGUMENT = "invalid_argument"
    CANCELLED = "cancelled"


# Type variable for generic CommandResult
T = TypeVar('T')


@dataclass
class CommandResult(Generic[T]):
    """
    Structured result from timeline commands.

    Provides rich information about command execution:
    - status: Success, error, or warning
    - message: Human-readable result message
    - data: Structured data (entities, lists, counts, etc.)
    - errors: List of error messages
    - warnings: List of warning messages
    - error_kind: Failure category for ERROR results

    Type Parameters:
        T: Type of data returned (Layer, Keyframe, List[Layer], etc.)

    Examples:
        CommandResult[Layer] - Returns a single Layer entity
        CommandResult[List[Keyframe]] - Returns a list of keyframes
        CommandResult[None] - Returns no data (for operations like delete)
    """
    status: ResultStatus
    message: str
    data: Optional[T] = None
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    error_kind: Optional[ErrorKind] = None

    @property
    def success(self) -> bool:
        """Check if command was successful"""
        return self.status == ResultStatus.SUCCESS

    @property
    def failed(self) -> bool:
        """Check if command failed"""
        return self.status == ResultStatus.ERROR

    @property
    def applied(self) -> bool:
        """True for SUCCESS and WARNING results, i.e. the mutation happened."""
        return self.status != ResultStatus.ERROR

    @classmethod
    def success_result(cls, message: str, data: T = None) -> 'CommandResult[T]':
        """
        Create a success result.

        Args:
            message: Human-readable success message
            data: Result data (entity, list of entities, etc.)

        Returns:
            CommandResult[T] with SUCCESS status
        """
        return cls(
            status=ResultStatus.SUCCESS,
            message=message,
            data=data
        )

    @classmethod
    def error_result(
        cls,
        message: str,
        errors: List[str] = None,
        kind: ErrorKind = ErrorKind.INVALID_ARGUMENT
    ) -> 'CommandResult[T]':
        """
        Create an error result.

        Args:
            message: Human-readable error message
            errors: List of detailed error messages
            kind: Failure category

        Returns:
            CommandResult[T] with ERROR status and no data
        """
        return cls(
            status=ResultStatus.ERROR,
            message=message,
            errors=errors or [message],
            error_kind=kind
        )

    @classmethod
    def not_found(cls, message: str) -> 'CommandResult[T]':
        return cls.error_result(message, kind=ErrorKind.NOT_FOUND)

    @classmethod
    def conflict(cls, message: str, errors: List[str] = None) -> 'CommandResult[T]':
        return cls.error_result(message, errors=errors, kind=ErrorKind.CONFLICT)

    @classmethod
    def invalid(cls, message: str) -> 'CommandResult[T]':
        return cls.error_result(message, kind=ErrorKind.INVALID_ARGUMENT)

    @classmethod
    def cancelled(cls, message: str) -> 'CommandResult[T]':
        return cls.error_result(message, kind=ErrorKind.CANCELLED)

    @classmethod
    def warning_result(cls, message: str, data: T = None, warnings: List[str] = None) -> 'CommandResult[T]':
        """
        Create a warning result.

        Args:
            message: Human-readable warning message
            data: Result data (may be partial)
            warnings: List of warning messages

        Returns:
            CommandResult[T] with WARNING status
        """
        return cls(
            status=ResultStatus.WARNING,
            message=message,
            data=data,
            warnings=warnings or []
        )
