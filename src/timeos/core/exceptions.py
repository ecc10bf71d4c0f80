class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthenticationError(DomainError):
    """Raised when an access code is unknown or the account is blocked."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class NotFoundError(DomainError):
    """Raised when a referenced user, company or entry does not exist."""


class TimerStateError(DomainError):
    """Raised when start/stop is requested from the wrong timer state."""


class PersistenceError(DomainError):
    """Raised when the backing store fails to create/read/update/delete a record."""


class AIServiceError(DomainError):
    """Raised when the text generation API is unavailable or returns nothing."""


class EmailDeliveryError(DomainError):
    """Raised when a timesheet email could not be handed to the SMTP server."""
