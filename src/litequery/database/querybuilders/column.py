"""Column definition builder used by CreateTableBuilder."""

from __future__ import annotations

from .base import QueryBuilder, require

DATA_TYPE_NULL = "NULL"
DATA_TYPE_INTEGER = "INTEGER"
DATA_TYPE_REAL = "REAL"
DATA_TYPE_TEXT = "TEXT"
DATA_TYPE_BLOB = "BLOB"

_QUOTED_DEFAULT_TYPES = frozenset({DATA_TYPE_TEXT, DATA_TYPE_BLOB})


class ColumnBuilder(QueryBuilder):
    """Builds one column definition of a CREATE TABLE statement.

    The rendered form ends with a comma separator, e.g.
    ``"id INTEGER PRIMARY KEY,"``; the enclosing CreateTableBuilder replaces the
    last column's separator with the statement terminator.
    """

    DATA_TYPE_NULL = DATA_TYPE_NULL
    DATA_TYPE_INTEGER = DATA_TYPE_INTEGER
    DATA_TYPE_REAL = DATA_TYPE_REAL
    DATA_TYPE_TEXT = DATA_TYPE_TEXT
    DATA_TYPE_BLOB = DATA_TYPE_BLOB

    def __init__(self) -> None:
        self.name: str | None = None
        self.data_type: str | None = None
        self.default_value: str | None = None
        self.not_null = False
        self.primary_key = False

    def set_name(self, name: str) -> ColumnBuilder:
        self.name = name
        return self

    def set_data_type(self, data_type: str) -> ColumnBuilder:
        self.data_type = data_type
        return self

    def set_default_value(self, default_value: int | float | str | None) -> ColumnBuilder:
        if default_value is None or isinstance(default_value, str):
            self.default_value = default_value
        else:
            self.default_value = str(default_value)
        return self

    def is_not_null(self, not_null: bool = True) -> ColumnBuilder:
        self.not_null = not_null
        return self

    def is_primary_key(self, primary_key: bool = True) -> ColumnBuilder:
        self.primary_key = primary_key
        return self

    def build(self) -> str:
        require(self.name, "Missing column name")
        require(self.data_type, "Missing data type")

        parts = [self.name, self.data_type]
        if self.default_value:
            parts.append("DEFAULT")
            if self.data_type.upper() in _QUOTED_DEFAULT_TYPES:
                parts.append(f'"{self.default_value}"')
            else:
                parts.append(self.default_value)
        if self.not_null:
            parts.append("NOT NULL")
        if self.primary_key:
            parts.append("PRIMARY KEY")
        return " ".join(parts) + ","
