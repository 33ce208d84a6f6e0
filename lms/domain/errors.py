class DomainError(Exception):
    """Base class for business-rule violations raised by entities and domain services."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(DomainError):
    """Malformed or out-of-range input."""


class InvalidStateError(DomainError):
    """The entity is not in a state that allows the operation."""


class InvalidOperationError(DomainError):
    """The operation is not allowed right now (deadline passed, timer running, ...)."""


class ConcurrentModificationError(DomainError):
    """A stale version was supplied for a versioned mutation."""
