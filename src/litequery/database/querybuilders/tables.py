"""CREATE TABLE and DROP TABLE builders."""

from __future__ import annotations

from .base import QueryBuilder, require
from .column import ColumnBuilder


class CreateTableBuilder(QueryBuilder):
    """Builds ``CREATE TABLE [IF NOT EXISTS] <name> (<columns>);``."""

    def __init__(self) -> None:
        self.table_name: str | None = None
        self.if_not_exists_flag = False
        self.columns: list[ColumnBuilder] = []

    def set_table_name(self, table_name: str) -> CreateTableBuilder:
        self.table_name = table_name
        return self

    def if_not_exists(self, if_not_exists: bool = True) -> CreateTableBuilder:
        self.if_not_exists_flag = if_not_exists
        return self

    def add_column(self, column: ColumnBuilder) -> CreateTableBuilder:
        self.columns.append(column)
        return self

    def build(self) -> str:
        require(self.table_name, "Missing table name")
        require(self.columns, "No columns given")

        query = "CREATE TABLE "
        if self.if_not_exists_flag:
            query += "IF NOT EXISTS "
        rendered = "".join(column.build() for column in self.columns)
        # Last column's trailing separator gives way to the terminator
        return f"{query}{self.table_name} ({rendered[:-1]});"


class DropTableBuilder(QueryBuilder):
    """Builds ``DROP TABLE [IF EXISTS] <name>;``."""

    def __init__(self) -> None:
        self.table_name: str | None = None
        self.if_exists_flag = False

    def set_table_name(self, table_name: str) -> DropTableBuilder:
        self.table_name = table_name
        return self

    def if_exists(self, if_exists: bool = True) -> DropTableBuilder:
        self.if_exists_flag = if_exists
        return self

    def build(self) -> str:
        require(self.table_name, "Missing table name")
        query = "DROP TABLE "
        if self.if_exists_flag:
            query += "IF EXISTS "
        return f"{query}{self.table_name};"
