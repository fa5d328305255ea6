from __future__ import annotations

from typing import Optional


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field


class InvalidTransitionError(DomainError):
    """Raised when an operation is illegal for the current state (stale client view)."""


class NotFoundError(DomainError):
    """Raised when a week or record does not exist for the given employee."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""
