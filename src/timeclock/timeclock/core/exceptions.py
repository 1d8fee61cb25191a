from __future__ import annotations

from typing import Sequence


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class InvalidArgumentError(ValidationError):
    """Raised for out-of-range or malformed arguments (e.g. month 13)."""


class InconsistentStateError(DomainError):
    """Raised when a classified day does not contain the punch it should.

    Indicates a caller bug (e.g. a punch passed with the wrong day's snapshot).
    """


class RecordNotFoundError(DomainError):
    """Raised when a punch does not exist for the requesting user."""


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid or the session is missing."""


class IncompleteMonthError(ValidationError):
    """Raised when a monthly report is requested while clock-outs are missing."""

    def __init__(self, missing_dates: Sequence[str]):
        self.missing_dates = list(missing_dates)
        super().__init__(f"Missing clock-out on: {', '.join(self.missing_dates)}")
