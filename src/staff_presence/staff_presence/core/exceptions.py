class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class ConflictError(DomainError):
    """Raised when a concurrent write on the same key collided.

    The whole logical operation is safe to retry.
    """


class StorageUnavailableError(DomainError):
    """Raised when the backing store cannot be reached or failed to persist."""


class RetryExhaustedError(DomainError):
    """Raised when conflict retries ran out; the caller should try again later."""
