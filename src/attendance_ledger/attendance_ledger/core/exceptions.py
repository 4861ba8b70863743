class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class PreconditionError(DomainError):
    """Raised when an operation is invoked in a state it forbids.

    E.g. checking in while an entry is already active, or checking out
    without one. These are caller bugs, not recoverable cases.
    """


class StorageError(DomainError):
    """Raised when a stored payload cannot be decoded."""
