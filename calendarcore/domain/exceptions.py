"""
Domain-specific exception hierarchy for the calendar core.
"""


class CalendarCoreError(Exception):
    """Base class for all application-level errors."""


class UnknownPermissionKeyError(CalendarCoreError, ValueError):
    """Raised when a resource key is not one of the known permission keys."""


class InvalidPermissionActionError(CalendarCoreError, ValueError):
    """Raised when an action level is not NONE, VIEW or EDIT."""


class PermissionDeniedError(CalendarCoreError):
    """Raised by guards when the subject lacks the required permission."""

    def __init__(self, key: str, action: str, reason: str):
        super().__init__(reason)
        self.key = key
        self.action = action
        self.reason = reason


class BlockedDateError(CalendarCoreError):
    """Raised when a date cannot be scheduled (weekend or holiday)."""

    def __init__(self, date, reason: str):
        super().__init__(f"{date.format('YYYY-MM-DD')}: {reason}")
        self.date = date
        self.reason = reason


class DataFileError(CalendarCoreError):
    """Raised when the calendar data file cannot be read."""
