"""Database connection helpers and the connection manager.

This module provides a small, synchronous API around one SQLite
connection: ad hoc statement execution, a registry of named ("saved")
queries, prepared statement handles for those queries, and transaction
controls.

A ``Database`` is not safe for concurrent use. Confine each instance to a
single thread.
"""

from __future__ import annotations

import contextlib
import logging
import sqlite3
from collections.abc import Iterator
from pathlib import Path
from typing import Any

from .. import global_config as g
from . import queries
from .errors import (
    DatabaseConnectionError,
    DatabaseError,
    EngineError,
    GeneratedKeysNotRequestedError,
    MissingHandlerError,
    QueryNotPreparedError,
    QueryNotSavedError,
    ensure_found,
    from_sqlite_error,
)
from .querybuilders import QueryBuilder
from .results import QueryResult, ResultSetHandler, generated_ids_handler
from .saved import SavedQuery
from .statements import GENERATED_KEYS_SQL, PreparedStatement
from .values import QueryValue, ValueType

logger = logging.getLogger(__name__)


def _ensure_parent_dir(db_path: Path) -> None:
    """Ensure the parent directory for a database file exists."""
    db_path.parent.mkdir(parents=True, exist_ok=True)


def _configure_connection(conn: sqlite3.Connection) -> None:
    """Apply standard pragmas and row factory to a new connection.

    Configures the connection for use with the project by:
    - Setting row_factory to sqlite3.Row for dict-like access
    - Enabling foreign key constraints

    Args:
        conn: SQLite connection to configure.
    """
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys = ON")


def get_connection(
    db_path: Path | str | None = None,
    *,
    auto_commit: bool = True,
) -> sqlite3.Connection:
    """Return a configured SQLite connection.

    Args:
        db_path: Path to SQLite database file, or ``global_config.IN_MEMORY``
            for a private in-memory database. Defaults to
            ``global_config.DEFAULT_DB_PATH``.
        auto_commit: If True, every statement commits on its own
            (``isolation_level=None``). If False, the sqlite3 module opens
            transactions implicitly and the caller commits.

    Returns:
        Configured SQLite connection ready for use.

    Raises:
        sqlite3.Error: If the database cannot be opened.

    Logs:
        - DEBUG: "Opening SQLite database at {path}" when creating connection.

    Side Effects:
        - Creates parent directory and database file if they don't exist.
    """
    resolved = db_path or g.DEFAULT_DB_PATH
    if resolved != g.IN_MEMORY:
        resolved = Path(resolved)
        _ensure_parent_dir(resolved)

    logger.debug("Opening SQLite database at %s", resolved)
    conn = sqlite3.connect(str(resolved), isolation_level=None if auto_commit else "DEFERRED")
    _configure_connection(conn)
    return conn


class Database:
    """Owns one SQLite connection, its saved queries and prepared handles.

    Lifecycle is explicit: ``open_connection()``, any number of operations,
    ``close_connection()``. Closing discards every prepared handle; saved
    queries survive and can be prepared again after reopening. The instance
    is also a context manager that opens on enter and closes on exit.

    Error policy:
        - Malformed statements raise ``MalformedQueryError`` before any
          engine call.
        - Unknown, unprepared or misconfigured saved queries raise a
          ``SavedQueryError`` subclass before any engine call.
        - Engine failures roll back an open transaction (best effort), then
          raise ``EngineError`` (or ``IntegrityError``) chained from the
          ``sqlite3`` exception. The connection stays open.

    Example:
        >>> db = Database()
        >>> db.open_connection()
        >>> db.execute_update("CREATE TABLE t (id INTEGER PRIMARY KEY, name TEXT);")
        -1
    """

    def __init__(self, file_name: Path | str = g.IN_MEMORY) -> None:
        self.file_name = file_name
        self._saved_queries: dict[str, SavedQuery] = {}
        self._prepared: dict[str, PreparedStatement] = {}
        self._conn: sqlite3.Connection | None = None

    def __enter__(self) -> Database:
        self.open_connection()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close_connection()

    # ------------------------------------------------------------------
    # Connection lifecycle
    # ------------------------------------------------------------------

    def open_connection(self) -> None:
        """Open the engine connection.

        Raises:
            DatabaseConnectionError: If the database cannot be opened.
        """
        if self._conn is not None:
            logger.debug("Connection to %s already open", self.file_name)
            return
        try:
            self._conn = get_connection(self.file_name)
        except (sqlite3.Error, OSError) as exc:
            logger.error("Failed to connect to database %s: %s", self.file_name, exc)
            msg = f"Failed to connect to database {self.file_name}: {exc}"
            raise DatabaseConnectionError(msg) from exc
        logger.debug("Connected to %s", self.file_name)

    def close_connection(self) -> None:
        """Discard all prepared handles, then close the engine connection.

        Raises:
            DatabaseConnectionError: If the engine refuses to close.
        """
        for statement in self._prepared.values():
            statement.close()
        self._prepared.clear()
        if self._conn is None:
            return
        conn, self._conn = self._conn, None
        try:
            conn.close()
        except sqlite3.Error as exc:
            msg = f"Failed to disconnect from database: {exc}"
            raise DatabaseConnectionError(msg) from exc
        logger.debug("Connection to %s closed", self.file_name)

    def is_connection_open(self) -> bool:
        return self._conn is not None

    @property
    def connection(self) -> sqlite3.Connection:
        """The live sqlite3 connection.

        Raises:
            DatabaseConnectionError: If the connection is not open.
        """
        if self._conn is None:
            msg = "Database connection is not open"
            raise DatabaseConnectionError(msg)
        return self._conn

    def _engine_failure(self, action: str, exc: sqlite3.Error) -> EngineError:
        """Log an engine failure, roll back any open transaction, map the error."""
        logger.error("Failed to %s: %s", action, exc)
        conn = self._conn
        if conn is not None and conn.in_transaction:
            try:
                conn.rollback()
                logger.info("Rolled back open transaction after failure")
            except sqlite3.Error:
                logger.exception("Rollback after failure also failed")
        return from_sqlite_error(exc)

    # ------------------------------------------------------------------
    # Transactions
    # ------------------------------------------------------------------

    def set_auto_commit(self, auto_commit: bool) -> None:
        """Switch auto-commit mode; enabling it commits any open transaction."""
        conn = self.connection
        try:
            if auto_commit:
                if conn.in_transaction:
                    conn.commit()
                conn.isolation_level = None
            else:
                conn.isolation_level = "DEFERRED"
        except sqlite3.Error as exc:
            raise self._engine_failure("set auto commit", exc) from exc

    def is_auto_commit_enabled(self) -> bool:
        return self.connection.isolation_level is None

    def commit(self) -> None:
        try:
            self.connection.commit()
        except sqlite3.Error as exc:
            raise self._engine_failure("commit", exc) from exc

    def rollback(self) -> None:
        try:
            self.connection.rollback()
        except sqlite3.Error as exc:
            raise from_sqlite_error(exc) from exc

    @contextlib.contextmanager
    def transaction(self) -> Iterator[Database]:
        """Context manager for a transactional block.

        Commits on success and rolls back on error. In auto-commit mode an
        explicit ``BEGIN`` opens the transaction.

        Raises:
            EngineError: If the engine refuses to begin (for example inside
                another transaction) or to commit.
            IntegrityError: If a deferred constraint fails at commit.

        Logs:
            - DEBUG: "Beginning transaction" at start
            - DEBUG: "Transaction committed" on success
            - ERROR: "Transaction rolled back due to error" on failure
        """
        conn = self.connection
        logger.debug("Beginning transaction")
        if self.is_auto_commit_enabled():
            try:
                queries.execute_query(conn, "BEGIN")
            except sqlite3.Error as exc:
                raise self._engine_failure("begin transaction", exc) from exc
        try:
            yield self
        except Exception:
            logger.exception("Transaction rolled back due to error")
            self.rollback()
            raise
        self.commit()
        logger.debug("Transaction committed")

    # ------------------------------------------------------------------
    # Ad hoc execution
    # ------------------------------------------------------------------

    def execute_query(self, query: str | QueryBuilder) -> sqlite3.Cursor:
        """Run a one-off query and return its cursor."""
        sql = queries.to_sql(query)
        conn = self.connection
        try:
            return queries.execute_query(conn, sql)
        except sqlite3.Error as exc:
            raise self._engine_failure("execute query", exc) from exc

    def execute_update(self, query: str | QueryBuilder) -> int:
        """Run a one-off update or DDL statement and return affected rows."""
        sql = queries.to_sql(query)
        conn = self.connection
        try:
            return queries.execute_update(conn, sql)
        except sqlite3.Error as exc:
            raise self._engine_failure("execute update", exc) from exc

    def execute_update_and_get_ids(self, query: str | QueryBuilder) -> sqlite3.Cursor:
        """Run a one-off update and return a cursor over the generated key."""
        sql = queries.to_sql(query)
        conn = self.connection
        try:
            queries.execute_update(conn, sql)
            return conn.execute(GENERATED_KEYS_SQL)
        except sqlite3.Error as exc:
            raise self._engine_failure("execute update", exc) from exc

    def execute_update_and_get_int_id(self, query: str | QueryBuilder) -> int:
        return int(_first_key(self.execute_update_and_get_ids(query)))

    def execute_update_and_get_string_id(self, query: str | QueryBuilder) -> str:
        return str(_first_key(self.execute_update_and_get_ids(query)))

    # ------------------------------------------------------------------
    # Saved queries
    # ------------------------------------------------------------------

    def save_query(
        self,
        name: str,
        query: str | QueryBuilder,
        handler: ResultSetHandler | None = None,
        return_created_ids: bool = False,
    ) -> SavedQuery:
        """Register a named query, replacing any query saved under the same name.

        Raises:
            MalformedQueryError: If the builder is invalid or name/query is empty.
        """
        saved = (
            SavedQuery.create_builder()
            .set_name(name)
            .set_query(query)
            .set_handler(handler)
            .return_created_ids(return_created_ids)
            .build()
        )
        self._saved_queries[saved.name] = saved
        logger.debug("Saved query %s: %s", saved.name, saved.query[:80])
        return saved

    def save_queries(self, *saved_queries: SavedQuery) -> None:
        for saved in saved_queries:
            self._saved_queries[saved.name] = saved
        logger.debug("Saved %d queries", len(saved_queries))

    def get_saved_query(self, name: str) -> SavedQuery:
        try:
            return self._saved_queries[name]
        except KeyError:
            raise QueryNotSavedError(name) from None

    def is_prepared(self, name: str) -> bool:
        return name in self._prepared

    def prepare_queries(self, *names: str) -> None:
        """Compile saved queries into prepared handles.

        Every name is checked before anything is prepared. Re-preparing a
        name replaces (and closes) its previous handle.

        Raises:
            QueryNotSavedError: If a name has not been saved.
            DatabaseConnectionError: If the connection is not open.
            EngineError: If the engine rejects a statement.
        """
        saved_queries = [self.get_saved_query(name) for name in names]
        conn = self.connection
        for saved in saved_queries:
            try:
                statement = PreparedStatement(
                    conn, saved.query, return_generated_keys=saved.return_created_ids
                )
            except sqlite3.Error as exc:
                raise self._engine_failure(f"prepare query {saved.name}", exc) from exc
            previous = self._prepared.pop(saved.name, None)
            if previous is not None:
                previous.close()
            self._prepared[saved.name] = statement
        logger.info("Prepared %d queries", len(saved_queries))

    def _prepared_statement(self, name: str) -> tuple[SavedQuery, PreparedStatement]:
        saved = self.get_saved_query(name)
        statement = self._prepared.get(name)
        if statement is None:
            raise QueryNotPreparedError(name)
        return saved, statement

    def execute_saved_query(self, name: str, *values: QueryValue) -> QueryResult:
        """Execute a prepared query and run its cursor through the saved handler.

        On failure the raised DatabaseError carries an empty QueryResult in
        its ``result`` attribute.

        Raises:
            QueryNotSavedError: If the name has not been saved.
            QueryNotPreparedError: If the query has not been prepared.
            MissingHandlerError: If the saved query has no handler.
            EngineError: If execution fails.
        """
        try:
            saved, statement = self._prepared_statement(name)
            if saved.handler is None:
                raise MissingHandlerError(name)
            _bind_values(statement, values)
            try:
                cursor = statement.execute_query()
                return saved.handler(cursor).build()
            except sqlite3.Error as exc:
                raise self._engine_failure(f"execute saved query {name}", exc) from exc
        except DatabaseError as exc:
            exc.result = QueryResult.empty()
            raise

    def execute_saved_update(self, name: str, *values: QueryValue) -> int:
        """Execute a prepared update and return the number of affected rows."""
        _, statement = self._prepared_statement(name)
        _bind_values(statement, values)
        try:
            return statement.execute_update()
        except sqlite3.Error as exc:
            raise self._engine_failure(f"execute saved update {name}", exc) from exc

    def execute_saved_update_and_get_ids(self, name: str, *values: QueryValue) -> QueryResult:
        """Execute a prepared update and pass the generated keys through a handler.

        Uses the saved handler, or ``generated_ids_handler`` when none was
        given.

        Raises:
            GeneratedKeysNotRequestedError: If the query was not saved to
                return created IDs.
        """
        saved = self.get_saved_query(name)
        keys = self._saved_update_keys(name, values)
        handler = saved.handler or generated_ids_handler
        try:
            return handler(keys).build()
        except sqlite3.Error as exc:
            raise self._engine_failure(f"read generated keys of {name}", exc) from exc

    def execute_saved_update_and_get_int_id(self, name: str, *values: QueryValue) -> int:
        return int(_first_key(self._saved_update_keys(name, values)))

    def execute_saved_update_and_get_string_id(self, name: str, *values: QueryValue) -> str:
        return str(_first_key(self._saved_update_keys(name, values)))

    def _saved_update_keys(self, name: str, values: tuple[QueryValue, ...]) -> sqlite3.Cursor:
        saved, statement = self._prepared_statement(name)
        if not saved.return_created_ids:
            raise GeneratedKeysNotRequestedError(name)
        _bind_values(statement, values)
        try:
            statement.execute_update()
            return statement.generated_keys()
        except sqlite3.Error as exc:
            raise self._engine_failure(f"execute saved update {name}", exc) from exc


def _bind_values(statement: PreparedStatement, values: tuple[QueryValue, ...]) -> None:
    """Bind values 1-based into statement using each value's tag."""
    statement.clear_parameters()
    for index, value in enumerate(values, start=1):
        if not isinstance(value, QueryValue):
            msg = f"Parameter {index} must be a QueryValue, got {type(value).__name__}"
            raise TypeError(msg)
        if value.type is ValueType.INTEGER:
            statement.set_int(index, value.value)
        elif value.type is ValueType.REAL:
            statement.set_float(index, value.value)
        elif value.type is ValueType.TEXT:
            statement.set_text(index, value.value)
        else:
            msg = f"Unknown value type: {value.type!r}"
            raise TypeError(msg)


def _first_key(cursor: sqlite3.Cursor) -> Any:
    row = ensure_found(cursor.fetchone(), "No generated key returned")
    return row[0]
