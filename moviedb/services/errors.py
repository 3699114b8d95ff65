"""Failure taxonomy raised by the domain services."""

from __future__ import annotations


class CatalogError(Exception):
    """Base exception for movie catalog failures.

    ``details`` carries the underlying cause when a write fails in the store.
    """

    def __init__(self, message: str, details: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details


class NotFoundError(CatalogError):
    """Raised when the requested entity id does not exist."""

    @classmethod
    def for_entity(cls, kind: str, entity_id: int) -> "NotFoundError":
        return cls(f"{kind} with ID {entity_id} not found")


class InvalidOperationError(CatalogError):
    """Raised when a request breaks a business rule (duplicate username, unknown director)."""


class UnauthorizedError(CatalogError):
    """Raised for bad credentials or a missing, invalid or expired token."""


class ConfigurationError(CatalogError):
    """Raised when required configuration (e.g. the JWT secret) is missing."""
