"""Database-specific exception types for the project."""

from __future__ import annotations

import sqlite3
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .results import QueryResult


class DatabaseError(Exception):
    """Base exception for database-related errors.

    Errors raised by ``Database.execute_saved_query`` carry the empty result
    that the call stands for in ``result``; it is ``None`` everywhere else.
    """

    result: QueryResult | None = None


class MalformedQueryError(DatabaseError):
    """Raised when a statement builder is missing a required field."""


class InvalidSavedQueryError(MalformedQueryError):
    """Raised when a saved query ends up without a name or query text."""


class SavedQueryError(DatabaseError):
    """Base exception for named-query registry misuse."""

    def __init__(self, query_name: str, message: str) -> None:
        super().__init__(message)
        self.query_name = query_name


class QueryNotSavedError(SavedQueryError):
    """Raised when a query name has not been saved."""

    def __init__(self, query_name: str) -> None:
        super().__init__(query_name, f'Query "{query_name}" has not been saved')


class QueryNotPreparedError(SavedQueryError):
    """Raised when a saved query is executed before being prepared."""

    def __init__(self, query_name: str) -> None:
        super().__init__(query_name, f'Query "{query_name}" has not been prepared')


class MissingHandlerError(SavedQueryError):
    """Raised when a saved query needs a result handler but has none."""

    def __init__(self, query_name: str) -> None:
        super().__init__(query_name, f'Query "{query_name}" has no result handler')


class GeneratedKeysNotRequestedError(SavedQueryError):
    """Raised when generated keys are requested from a query not flagged for them."""

    def __init__(self, query_name: str) -> None:
        super().__init__(
            query_name, f'Query "{query_name}" was not saved to return created IDs'
        )


class EngineError(DatabaseError):
    """Raised when the SQLite engine rejects an operation."""


class IntegrityError(EngineError):
    """Raised when a constraint violation occurs."""


class DatabaseConnectionError(EngineError):
    """Raised when the connection cannot be opened, closed, or is not open."""


class NotFoundError(DatabaseError):
    """Raised when a requested row cannot be found."""


def from_sqlite_error(error: sqlite3.Error) -> EngineError:
    """Map a raw sqlite3 error to a project-level EngineError.

    Converts sqlite3 exceptions to project-specific exception types.
    IntegrityError is mapped to IntegrityError, all others to EngineError.

    Args:
        error: SQLite exception to convert.

    Returns:
        EngineError or IntegrityError instance with error message.
    """
    if isinstance(error, sqlite3.IntegrityError):
        return IntegrityError(str(error))
    return EngineError(str(error))


def ensure_found(row: Any, message: str = "Row not found") -> Any:
    """Raise NotFoundError if a row is missing, otherwise return it.

    Args:
        row: Row result to check (may be None).
        message: Error message to use if row is None.

    Returns:
        The row value if it's not None.

    Raises:
        NotFoundError: If row is None.
    """
    if row is None:
        raise NotFoundError(message)
    return row
