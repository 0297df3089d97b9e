"""Result containers and the handlers that fill them.

A handler receives the live cursor of an executed statement and returns a
``QueryResultBuilder`` it populated while consuming the cursor. The caller
freezes the builder into an immutable ``QueryResult``.
"""

from __future__ import annotations

import sqlite3
from dataclasses import dataclass, field
from typing import Any, Protocol


@dataclass(frozen=True)
class QueryResult:
    """Zero-or-one single value plus zero-or-more row values.

    Attributes:
        value: Single value set by the handler, or None.
        values: Row values in cursor iteration order.
    """

    value: Any = None
    values: tuple[Any, ...] = field(default_factory=tuple)

    @property
    def is_empty(self) -> bool:
        """True when no single value was set and no row values were added."""
        return self.value is None and not self.values

    @classmethod
    def empty(cls) -> QueryResult:
        return cls()

    @staticmethod
    def create_builder() -> QueryResultBuilder:
        return QueryResultBuilder()


class QueryResultBuilder:
    """Mutable accumulator a handler populates before it is frozen."""

    def __init__(self) -> None:
        self._value: Any = None
        self._values: list[Any] = []

    def set_value(self, value: Any) -> QueryResultBuilder:
        self._value = value
        return self

    def add_value(self, value: Any) -> QueryResultBuilder:
        self._values.append(value)
        return self

    def build(self) -> QueryResult:
        return QueryResult(value=self._value, values=tuple(self._values))


class ResultSetHandler(Protocol):
    """Converts an executed statement's cursor into a result accumulator."""

    def __call__(self, cursor: sqlite3.Cursor) -> QueryResultBuilder: ...


def generated_ids_handler(cursor: sqlite3.Cursor) -> QueryResultBuilder:
    """Collect every generated key column as a text row value.

    Used for saved updates flagged to return created IDs when no handler was
    given. Produces one row value per key column of every cursor row.
    """
    builder = QueryResult.create_builder()
    for row in cursor:
        for key in row:
            builder.add_value(str(key))
    return builder
