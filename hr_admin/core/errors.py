"""
Domain errors and result values.

Core routines never raise for an expected failure. They return a ``Result``
that carries either a value or one of the ``DomainError`` kinds below, and
the caller decides how to present it (the API layer unwraps and lets the
exception handler translate it to an HTTP response).
"""

from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


class DomainError(Exception):
    """Base class for rejected domain operations."""

    code: str = "domain_error"

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)

    def __eq__(self, other):
        return (
            type(self) is type(other)
            and self.message == other.message
        )

    def __hash__(self):
        return hash((type(self), self.message))


class InvalidInputError(DomainError):
    code = "invalid_input"


class InvalidRangeError(DomainError):
    code = "invalid_range"


class ConflictError(DomainError):
    code = "conflict"


class SelfAssignmentError(DomainError):
    code = "self_assignment"


class CycleError(DomainError):
    code = "cycle"


class NotFoundError(DomainError):
    code = "not_found"


@dataclass(frozen=True)
class Result(Generic[T]):
    value: Optional[T] = None
    error: Optional[DomainError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> T:
        """Return the value, raising the carried error if there is one."""
        if self.error is not None:
            raise self.error
        return self.value

    @classmethod
    def success(cls, value: Optional[T] = None) -> "Result[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: DomainError) -> "Result[T]":
        return cls(error=error)
