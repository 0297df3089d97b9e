"""Basic query execution helpers.

These wrap low-level sqlite3 operations with logging and are used by the
ad hoc (unprepared) execution paths of ``Database``.
"""

from __future__ import annotations

import logging
import sqlite3

from .querybuilders import QueryBuilder

logger = logging.getLogger(__name__)


def to_sql(query: str | QueryBuilder) -> str:
    """Return query text, rendering a statement builder if one is given.

    Raises:
        MalformedQueryError: If the builder is missing a required field.
    """
    if isinstance(query, QueryBuilder):
        return query.build()
    return query


def execute_query(
    conn: sqlite3.Connection,
    sql: str,
    params: tuple | dict | None = None,
) -> sqlite3.Cursor:
    """Execute a SQL query and return the cursor.

    Args:
        conn: Database connection.
        sql: SQL query string.
        params: Query parameters (tuple or dict). Defaults to empty tuple.

    Returns:
        SQLite cursor with query results.

    Raises:
        sqlite3.Error: If query execution fails.

    Logs:
        - DEBUG: "Executed query: {sql[:80]}" on success.
        - ERROR: "Query execution failed: {exc}" with exception details on failure.
    """
    try:
        cursor = conn.execute(sql, params or ())
        logger.debug("Executed query: %s", sql[:80])
        return cursor
    except sqlite3.Error as exc:
        logger.exception("Query execution failed: %s", exc)
        raise


def execute_update(
    conn: sqlite3.Connection,
    sql: str,
    params: tuple | dict | None = None,
) -> int:
    """Execute INSERT/UPDATE/DELETE or DDL and return number of affected rows.

    Args:
        conn: Database connection.
        sql: SQL statement.
        params: Query parameters (tuple or dict). Defaults to empty tuple.

    Returns:
        Number of rows affected by the operation (-1 for DDL).

    Raises:
        sqlite3.Error: If statement execution fails.

    Logs:
        - DEBUG: "Update affected {rowcount} rows" on success.
    """
    cursor = execute_query(conn, sql, params)
    rowcount = cursor.rowcount
    logger.debug("Update affected %s rows", rowcount)
    return rowcount
