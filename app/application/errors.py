class ApplicationError(Exception):
    """Base application-layer error, independent from transport concerns."""


class NotFoundError(ApplicationError):
    """Raised when an expected entity does not exist."""


class ConflictError(ApplicationError):
    """Raised when a uniqueness or state conflict occurs."""


class ForbiddenError(ApplicationError):
    """Raised when operation is forbidden by business rules."""


class UnauthorizedError(ApplicationError):
    """Raised when the caller cannot be identified from its credentials."""


class ValidationError(ApplicationError):
    """Raised when application-level validation fails."""


class RateLimitExceededError(ApplicationError):
    """Raised when a client exceeds its request quota for the current window."""

    def __init__(self, message: str, retry_after: int) -> None:
        super().__init__(message)
        self.retry_after = retry_after
