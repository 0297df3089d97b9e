"""Public interface for the database package.

This module exposes the main primitives needed by the rest of the
project: the ``Database`` connection manager, typed parameter values,
result containers, saved queries, and the error hierarchy. Statement
builders live in ``litequery.database.querybuilders``.
"""

from .connection import Database, get_connection
from .errors import (
    DatabaseConnectionError,
    DatabaseError,
    EngineError,
    GeneratedKeysNotRequestedError,
    IntegrityError,
    InvalidSavedQueryError,
    MalformedQueryError,
    MissingHandlerError,
    NotFoundError,
    QueryNotPreparedError,
    QueryNotSavedError,
    SavedQueryError,
)
from .results import QueryResult, QueryResultBuilder, ResultSetHandler, generated_ids_handler
from .saved import SavedQuery, SavedQueryBuilder
from .values import QueryValue, ValueType, integer, real, text

__all__ = [
    "Database",
    "get_connection",
    "QueryValue",
    "ValueType",
    "integer",
    "real",
    "text",
    "QueryResult",
    "QueryResultBuilder",
    "ResultSetHandler",
    "generated_ids_handler",
    "SavedQuery",
    "SavedQueryBuilder",
    "DatabaseError",
    "MalformedQueryError",
    "InvalidSavedQueryError",
    "SavedQueryError",
    "QueryNotSavedError",
    "QueryNotPreparedError",
    "MissingHandlerError",
    "GeneratedKeysNotRequestedError",
    "EngineError",
    "IntegrityError",
    "DatabaseConnectionError",
    "NotFoundError",
]
