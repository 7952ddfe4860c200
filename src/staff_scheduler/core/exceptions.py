class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class InvalidRange(ValidationError):
    """Raised when a date/time range or weekday selection cannot be used."""


class ClockingError(ValidationError):
    """Raised when a clock-in/clock-out is not allowed at this moment."""


class NotFoundError(DomainError):
    """Raised when a referenced shift, employee or message does not exist."""


class AuthorizationError(DomainError):
    """Raised when an action is not permitted."""


class LockedCalendar(AuthorizationError):
    """Raised when a mutation is attempted while the calendar (or shift) is locked."""


class CapabilityError(AuthorizationError):
    """Raised when the company plan does not include a feature."""


class PersistenceFailure(DomainError):
    """Raised (or reported) when a collaborator write fails."""

    def __init__(self, message: str, *, failed_ids: tuple[str, ...] = ()):
        super().__init__(message)
        self.failed_ids = tuple(failed_ids)
