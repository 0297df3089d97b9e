"""Fluent builders that render SQL statement strings."""

from .base import QueryBuilder
from .column import ColumnBuilder
from .modify import DeleteBuilder, InsertBuilder, UpdateBuilder
from .select import SelectBuilder
from .tables import CreateTableBuilder, DropTableBuilder

__all__ = [
    "QueryBuilder",
    "ColumnBuilder",
    "CreateTableBuilder",
    "DropTableBuilder",
    "InsertBuilder",
    "UpdateBuilder",
    "DeleteBuilder",
    "SelectBuilder",
]
