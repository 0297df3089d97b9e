"""CLI commands for running statements against a database file."""

from pathlib import Path
from typing import Annotated, Any

import typer

from ..base import BaseCLI
from ...database import Database
from ...database.querybuilders import DropTableBuilder
from ... import global_config as g

db_app = typer.Typer(help="Database statement commands.")

DbPathOption = Annotated[
    Path | None,
    typer.Option(
        "--db-path",
        help="Path to SQLite database file (defaults to global config)",
    ),
]


class DatabaseCLI(BaseCLI):
    """CLI helpers for ad hoc statements."""

    def __init__(self) -> None:
        super().__init__("db")

    def exec_sql(self, *, sql: str, db_path: Path | None) -> dict[str, Any]:
        """Run an update or DDL statement and report affected rows."""
        return self.handle_cli_operation(
            operation="db exec",
            op_callable=lambda: self._exec_operation(sql=sql, db_path=db_path),
        )

    def query_sql(self, *, sql: str, db_path: Path | None) -> dict[str, Any]:
        """Run a query and report its rows."""
        return self.handle_cli_operation(
            operation="db query",
            op_callable=lambda: self._query_operation(sql=sql, db_path=db_path),
        )

    def drop_table(self, *, table: str, if_exists: bool, db_path: Path | None) -> dict[str, Any]:
        """Drop a table using the DROP TABLE builder."""
        builder = DropTableBuilder.create_builder().set_table_name(table).if_exists(if_exists)
        return self.handle_cli_operation(
            operation="db drop-table",
            op_callable=lambda: self._exec_operation(sql=builder, db_path=db_path),
            pre_message=f"Dropping table {table}...",
        )

    def _exec_operation(self, *, sql: Any, db_path: Path | None) -> dict[str, Any]:
        with Database(db_path or g.DEFAULT_DB_PATH) as db:
            affected = db.execute_update(sql)
        return {"success": True, "affected": max(affected, 0)}

    def _query_operation(self, *, sql: str, db_path: Path | None) -> dict[str, Any]:
        with Database(db_path or g.DEFAULT_DB_PATH) as db:
            rows = [dict(row) for row in db.execute_query(sql)]
        return {"success": True, "total": len(rows), "items": rows}


cli = DatabaseCLI()


@db_app.command("exec")
def exec_command(
    sql: Annotated[str, typer.Argument(help="Statement to execute")],
    db_path: DbPathOption = None,
) -> None:
    """Execute an INSERT/UPDATE/DELETE or DDL statement.

    Exits with code 1 if the statement fails.
    """
    cli.exec_sql(sql=sql, db_path=db_path)


@db_app.command("query")
def query_command(
    sql: Annotated[str, typer.Argument(help="Query to run")],
    db_path: DbPathOption = None,
) -> None:
    """Run a query and print every returned row.

    Exits with code 1 if the query fails.
    """
    cli.query_sql(sql=sql, db_path=db_path)


@db_app.command("drop-table")
def drop_table_command(
    table: Annotated[str, typer.Argument(help="Table to drop")],
    if_exists: Annotated[
        bool,
        typer.Option("--if-exists", help="Do not fail when the table is missing"),
    ] = False,
    db_path: DbPathOption = None,
) -> None:
    """Drop a table.

    Exits with code 1 if the table does not exist (without --if-exists).
    """
    cli.drop_table(table=table, if_exists=if_exists, db_path=db_path)


app = db_app
