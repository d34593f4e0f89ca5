class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is malformed, before anything touches the store."""


class NotFoundError(DomainError):
    """Raised when a referenced child or attendance record does not exist."""


class ConflictError(DomainError):
    """Raised when an operation would break a state invariant.

    Examples: checking in a child who is already present, checking out a
    session that is already closed.
    """
