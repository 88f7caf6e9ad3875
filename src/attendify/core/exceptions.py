from __future__ import annotations

from typing import Any, Sequence


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class MissingFieldsError(ValidationError):
    """Raised when required form fields are empty."""

    def __init__(self, fields: Sequence[str], message: str | None = None):
        self.fields = tuple(fields)
        super().__init__(message or f"Please fill in all required fields: {', '.join(self.fields)}")


class InvalidRangeError(ValidationError):
    """Raised when a time slot does not end after it starts."""


class ConflictError(ValidationError):
    """Raised when a lecture slot overlaps an existing one for the same section and day."""

    def __init__(self, message: str, *, conflicting: Any = None):
        self.conflicting = conflicting
        super().__init__(message)


class IncompleteAttendanceError(ValidationError):
    """Raised on submit while some students are still pending."""

    def __init__(self, pending: Sequence[str]):
        self.pending = tuple(pending)
        super().__init__(f"Please mark attendance for all students ({len(self.pending)} pending)")


class EmptyRosterError(ValidationError):
    """Raised on submit when the section has no students."""


class SubmissionInProgressError(ValidationError):
    """Raised when a submit for the same section and date is already running."""


class RemoteWriteError(DomainError):
    """Raised when the data store rejects a write."""


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""
