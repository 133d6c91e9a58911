class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class InvalidTransitionError(ValidationError):
    """Raised when an action is not allowed from the employee's current state."""


class ReconstructionError(DomainError):
    """Raised when a completed shift cannot be rebuilt from the action log."""


class StoreError(Exception):
    """Base exception for failures reported by the storage layer."""


class ConflictError(StoreError):
    """Raised when a concurrent write already claimed the same log position."""


class StoreUnavailableError(StoreError):
    """Raised when the store cannot be reached or fails for infrastructure reasons."""
