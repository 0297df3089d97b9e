"""Prepared statement handles.

The stdlib sqlite3 module compiles and caches statements internally. Preparing
compiles the statement once through ``EXPLAIN`` so unknown tables or columns
fail at prepare time. A handle then owns the SQL text, a dedicated cursor and
the positional parameters bound so far. Parameters are bound 1-based, like the
engine's own ``sqlite3_bind_*`` API.
"""

from __future__ import annotations

import logging
import sqlite3
from typing import Any

from .errors import EngineError

logger = logging.getLogger(__name__)

GENERATED_KEYS_SQL = "SELECT last_insert_rowid() AS id;"


def _compile(conn: sqlite3.Connection, sql: str) -> None:
    """Compile ``sql`` without running it so unknown tables or columns fail now.

    Raises:
        sqlite3.Error: If the engine rejects the statement.
    """
    try:
        conn.execute(f"EXPLAIN {sql}").close()
    except sqlite3.ProgrammingError as exc:
        # Placeholders with nothing bound yet: the statement already compiled
        if "bindings" not in str(exc):
            raise


class PreparedStatement:
    """A statement compiled against one live connection."""

    def __init__(
        self,
        conn: sqlite3.Connection,
        sql: str,
        *,
        return_generated_keys: bool = False,
    ) -> None:
        if not sqlite3.complete_statement(sql.rstrip().rstrip(";") + ";"):
            msg = f"Incomplete SQL statement: {sql[:80]}"
            raise EngineError(msg)
        _compile(conn, sql)
        self.sql = sql
        self.return_generated_keys = return_generated_keys
        self._conn = conn
        self._cursor: sqlite3.Cursor | None = conn.cursor()
        self._params: list[Any] = []

    @property
    def closed(self) -> bool:
        return self._cursor is None

    def _bind(self, index: int, value: Any) -> None:
        if index < 1:
            msg = f"Parameter index must be 1-based, got {index}"
            raise IndexError(msg)
        missing = index - len(self._params)
        if missing > 0:
            self._params.extend([None] * missing)
        self._params[index - 1] = value

    def set_int(self, index: int, value: int) -> None:
        self._bind(index, int(value))

    def set_float(self, index: int, value: float) -> None:
        self._bind(index, float(value))

    def set_text(self, index: int, value: str) -> None:
        self._bind(index, str(value))

    def clear_parameters(self) -> None:
        self._params.clear()

    def _require_cursor(self) -> sqlite3.Cursor:
        if self._cursor is None:
            msg = "Prepared statement is closed"
            raise EngineError(msg)
        return self._cursor

    def execute_query(self) -> sqlite3.Cursor:
        """Run the statement and return its cursor positioned before the first row."""
        cursor = self._require_cursor()
        cursor.execute(self.sql, tuple(self._params))
        logger.debug("Executed prepared query: %s", self.sql[:80])
        return cursor

    def execute_update(self) -> int:
        """Run the statement and return the number of affected rows."""
        cursor = self._require_cursor()
        cursor.execute(self.sql, tuple(self._params))
        rowcount = cursor.rowcount
        logger.debug("Prepared update affected %s rows", rowcount)
        return rowcount

    def generated_keys(self) -> sqlite3.Cursor:
        """Return a cursor over the key generated by the last insert.

        Raises:
            EngineError: If the statement was not prepared to return keys.
        """
        self._require_cursor()
        if not self.return_generated_keys:
            msg = "Statement was not prepared to return generated keys"
            raise EngineError(msg)
        return self._conn.execute(GENERATED_KEYS_SQL)

    def close(self) -> None:
        if self._cursor is None:
            return
        try:
            self._cursor.close()
        except sqlite3.ProgrammingError:
            logger.debug("Cursor for %s closed with its connection", self.sql[:80])
        self._cursor = None
