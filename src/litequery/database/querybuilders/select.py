"""SELECT statement builder."""

from __future__ import annotations

from .base import QueryBuilder, require

JOIN_TYPE_INNER = "INNER"
JOIN_TYPE_LEFT_OUTER = "LEFT OUTER"
JOIN_TYPE_CROSS = "CROSS"


class SelectBuilder(QueryBuilder):
    """Builds a SELECT statement.

    Rendered form::

        SELECT [DISTINCT] <cols> FROM <name> [joins...] [WHERE ..] [ORDER BY ..] [LIMIT ..];

    Join, where and order-by text is raw SQL supplied by the caller and is
    inserted verbatim.
    """

    JOIN_TYPE_INNER = JOIN_TYPE_INNER
    JOIN_TYPE_LEFT_OUTER = JOIN_TYPE_LEFT_OUTER
    JOIN_TYPE_CROSS = JOIN_TYPE_CROSS

    def __init__(self) -> None:
        self.columns: list[str] = []
        self.table_name: str | None = None
        self.joins: list[str] = []
        self.where: str | None = None
        self.order_by: str | None = None
        self.limit = 0
        self.distinct = False

    def set_column(self, column: str | None) -> SelectBuilder:
        """Select a single column; empty values leave the columns untouched."""
        if column:
            self.columns = [column]
        return self

    def set_columns(self, *columns: str) -> SelectBuilder:
        self.columns = list(columns)
        return self

    def set_table_name(self, table_name: str) -> SelectBuilder:
        self.table_name = table_name
        return self

    def add_join(
        self,
        join: str,
        table_name: str | None = None,
        column1: str | None = None,
        column2: str | None = None,
    ) -> SelectBuilder:
        """Add a join clause.

        Called with one argument, ``join`` is a raw join clause. Called with
        four, ``join`` is the join type (e.g. ``JOIN_TYPE_INNER``) and the
        clause is rendered as ``<type> JOIN <table> ON <column1> = <column2>``.
        """
        if table_name is None and column1 is None and column2 is None:
            self.joins.append(join)
        elif table_name and column1 and column2:
            self.joins.append(f"{join} JOIN {table_name} ON {column1} = {column2}")
        else:
            msg = "add_join needs either a raw clause or a join type, table and two columns"
            raise TypeError(msg)
        return self

    def set_where(self, where: str | None) -> SelectBuilder:
        self.where = where
        return self

    def set_order_by(self, order_by: str | None) -> SelectBuilder:
        self.order_by = order_by
        return self

    def set_limit(self, limit: int) -> SelectBuilder:
        self.limit = limit
        return self

    def is_distinct(self, distinct: bool = True) -> SelectBuilder:
        self.distinct = distinct
        return self

    def build(self) -> str:
        require(self.columns, "No columns given")
        require(self.table_name, "Missing table name")

        parts = ["SELECT"]
        if self.distinct:
            parts.append("DISTINCT")
        parts.append(",".join(self.columns))
        parts.append(f"FROM {self.table_name}")
        parts.extend(self.joins)
        if self.where:
            parts.append(f"WHERE {self.where}")
        if self.order_by:
            parts.append(f"ORDER BY {self.order_by}")
        if self.limit > 0:
            parts.append(f"LIMIT {self.limit}")
        return " ".join(parts) + ";"
