"""Base exception classes for domain-level errors."""

from __future__ import annotations


class DomainError(Exception):
    """Base exception for all domain-level errors."""

    def __init__(self, message: str, code: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__


class EntityNotFoundError(DomainError):
    """Raised when a requested entity does not exist."""

    def __init__(self, entity_type: str, identifier: str | int, message: str | None = None) -> None:
        msg = message or f"{entity_type} with id '{identifier}' not found"
        super().__init__(msg, code="ENTITY_NOT_FOUND")
        self.entity_type = entity_type
        self.identifier = identifier


class ConcurrencyError(DomainError):
    """Raised when a concurrent modification conflict occurs."""

    def __init__(self, entity_type: str, message: str | None = None) -> None:
        msg = message or f"Concurrent modification detected for {entity_type}"
        super().__init__(msg, code="CONCURRENCY_ERROR")
        self.entity_type = entity_type


class ConflictError(ConcurrencyError):
    """Raised when the store could not complete a transaction.

    Callers may retry; the core never retries on its own.
    """

    def __init__(self, entity_type: str, message: str | None = None) -> None:
        super().__init__(entity_type, message)
        self.code = "CONFLICT"
        self.retryable = True


class InvalidOperationError(DomainError):
    """Raised when an operation is invalid in the current state."""

    def __init__(self, operation: str, current_state: str, message: str | None = None) -> None:
        msg = message or f"Cannot perform '{operation}' in state '{current_state}'"
        super().__init__(msg, code="INVALID_OPERATION")
        self.operation = operation
        self.current_state = current_state


class InvalidStateError(DomainError):
    """Raised when a track carries a status outside the known set."""

    def __init__(self, state: object, message: str | None = None) -> None:
        msg = message or f"Unknown playback status: {state!r}"
        super().__init__(msg, code="INVALID_STATE")
        self.state = state


class InvariantViolationError(DomainError):
    """Raised when stored data breaks a domain invariant."""

    def __init__(self, invariant: str, message: str | None = None) -> None:
        msg = message or f"Invariant violated: {invariant}"
        super().__init__(msg, code="INVARIANT_VIOLATION")
        self.invariant = invariant
