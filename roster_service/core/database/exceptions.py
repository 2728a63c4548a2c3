"""Database repository exceptions.

Custom exceptions for repository operations that provide better
error messages and typing than raw SQLAlchemy exceptions.

Datastore failures (``sqlalchemy.exc.SQLAlchemyError``) are never wrapped
here; they reach the caller unchanged so the surrounding transaction can
roll back.
"""
from __future__ import annotations

from typing import Any


class RepositoryError(Exception):
    """Base exception for repository operations.

    Raised when a repository operation fails due to programming
    errors, invalid arguments, or unexpected states.
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        """Initialize repository error.

        Args:
            message: Error description
            details: Additional context about the error
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        """Format error message with details."""
        if self.details:
            details_str = ", ".join(f"{k}={v!r}" for k, v in self.details.items())
            return f"{self.message} ({details_str})"
        return self.message


class NotFoundError(RepositoryError):
    """Entity not found in database.

    Raised when querying for an entity by primary key or unique
    field that doesn't exist.

    Attributes:
        model_name: Name of the model class that wasn't found
        identifier: The key/value that was searched for
    """

    def __init__(self, model_name: str, identifier: dict[str, Any]):
        """Initialize not found error.

        Args:
            model_name: Name of the model (e.g., "Member", "Team")
            identifier: Key-value pairs used in the search (e.g., {"id": 123})
        """
        self.model_name = model_name
        self.identifier = identifier

        id_str = ", ".join(f"{k}={v!r}" for k, v in identifier.items())
        message = f"{model_name} not found with {id_str}"

        super().__init__(message, details={"model": model_name, **identifier})

    def __repr__(self) -> str:
        """Repr for debugging."""
        return f"NotFoundError(model={self.model_name!r}, identifier={self.identifier!r})"


class InvalidFilterError(RepositoryError):
    """Invalid filter or query parameters.

    Raised when filter parameters are malformed, reference non-existent
    fields, or contain invalid values.
    """

    def __init__(self, message: str, filter_name: str | None = None):
        """Initialize invalid filter error.

        Args:
            message: Error description
            filter_name: Name of the problematic filter (if applicable)
        """
        details = {"filter": filter_name} if filter_name else {}
        super().__init__(message, details=details)


class InvalidPageRequestError(RepositoryError, ValueError):
    """Page request violates its preconditions.

    Raised when a page request is built with a negative offset or a
    non-positive limit. Always raised before any statement executes.
    """

    def __init__(self, message: str, *, offset: int, limit: int):
        """Initialize invalid page request error.

        Args:
            message: Error description
            offset: Offset that was requested
            limit: Limit that was requested
        """
        self.offset = offset
        self.limit = limit
        super().__init__(message, details={"offset": offset, "limit": limit})


__all__ = [
    "InvalidFilterError",
    "InvalidPageRequestError",
    "NotFoundError",
    "RepositoryError",
]
