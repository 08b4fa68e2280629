"""
Shared Domain Kernel

Contains the clock, event bus, value types and exceptions shared across the domain.
"""

from listening_room.domain.shared.exceptions import (
    ConcurrencyError,
    ConflictError,
    DomainError,
    EntityNotFoundError,
    InvalidOperationError,
    InvalidStateError,
    InvariantViolationError,
)

__all__ = [
    "DomainError",
    "EntityNotFoundError",
    "ConcurrencyError",
    "ConflictError",
    "InvalidOperationError",
    "InvalidStateError",
    "InvariantViolationError",
]
