"""INSERT, UPDATE and DELETE builders."""

from __future__ import annotations

from .base import QueryBuilder, ValuesBuilder, require


def _append_where_and_limit(parts: list[str], where: str | None, limit: int) -> None:
    if where:
        parts.append(f"WHERE {where}")
    if limit > 0:
        parts.append(f"LIMIT {limit}")


class InsertBuilder(ValuesBuilder):
    """Builds ``INSERT INTO <name> (<cols>) VALUES (<vals>);``.

    Example:
        >>> InsertBuilder().set_table_name("t").add_value("x", 5).add_value("y", "hi").build()
        'INSERT INTO t (x,y) VALUES (5,"hi");'
    """

    def build(self) -> str:
        self._validate()
        columns = ",".join(self.values_map)
        values = ",".join(self.values_map.values())
        return f"INSERT INTO {self.table_name} ({columns}) VALUES ({values});"


class UpdateBuilder(ValuesBuilder):
    """Builds ``UPDATE <name> SET <col> = <val>,... [WHERE ..] [LIMIT ..];``."""

    def __init__(self) -> None:
        super().__init__()
        self.where: str | None = None
        self.limit = 0

    def set_where(self, where: str | None) -> UpdateBuilder:
        self.where = where
        return self

    def set_limit(self, limit: int) -> UpdateBuilder:
        self.limit = limit
        return self

    def build(self) -> str:
        self._validate()
        assignments = ",".join(f"{column} = {value}" for column, value in self.values_map.items())
        parts = [f"UPDATE {self.table_name} SET {assignments}"]
        _append_where_and_limit(parts, self.where, self.limit)
        return " ".join(parts) + ";"


class DeleteBuilder(QueryBuilder):
    """Builds ``DELETE FROM <name> [WHERE ..] [LIMIT ..];``."""

    def __init__(self) -> None:
        self.table_name: str | None = None
        self.where: str | None = None
        self.limit = 0

    def set_table_name(self, table_name: str) -> DeleteBuilder:
        self.table_name = table_name
        return self

    def set_where(self, where: str | None) -> DeleteBuilder:
        self.where = where
        return self

    def set_limit(self, limit: int) -> DeleteBuilder:
        self.limit = limit
        return self

    def build(self) -> str:
        require(self.table_name, "Missing table name")
        parts = [f"DELETE FROM {self.table_name}"]
        _append_where_and_limit(parts, self.where, self.limit)
        return " ".join(parts) + ";"
