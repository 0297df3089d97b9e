"""Shared machinery for the fluent SQL statement builders.

Builders accumulate configuration through chained setters and render a
statement string on ``build()``. Rendering is a pure function of the current
state; a missing required field raises ``MalformedQueryError`` before any
engine call can happen.
"""

from __future__ import annotations

import copy
from abc import ABC, abstractmethod
from typing import Any, TypeVar

from ..errors import MalformedQueryError

PLACEHOLDER = "?"

B = TypeVar("B", bound="QueryBuilder")


class QueryBuilder(ABC):
    """Base class for every statement builder."""

    @classmethod
    def create_builder(cls: type[B]) -> B:
        return cls()

    @abstractmethod
    def build(self) -> str:
        """Validate the current configuration and render it as SQL.

        Raises:
            MalformedQueryError: If a required field is missing or empty.
        """

    def duplicate(self: B) -> B:
        """Return an independent deep copy of this builder."""
        return copy.deepcopy(self)


def require(value: Any, cause: str) -> None:
    """Raise MalformedQueryError with cause when value is empty or unset."""
    if not value:
        raise MalformedQueryError(cause)


def format_literal(value: int | float | str, *, include_quotes: bool = True) -> str:
    """Render a Python scalar as a SQL literal.

    Strings are wrapped in double quotes unless include_quotes is False, in
    which case they are inserted verbatim (e.g. a SQL expression). Numbers
    are rendered with str().

    Raises:
        TypeError: If value is not a str, int or float.
    """
    if isinstance(value, str):
        return f'"{value}"' if include_quotes else value
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        msg = f"Unsupported literal type: {type(value).__name__}"
        raise TypeError(msg)
    return str(value)


class ValuesBuilder(QueryBuilder):
    """Builder holding an ordered column -> rendered value mapping.

    Re-adding a column overwrites its value but keeps its original position.
    """

    def __init__(self) -> None:
        self.table_name: str | None = None
        self.values_map: dict[str, str] = {}

    def set_table_name(self: B, table_name: str) -> B:
        self.table_name = table_name
        return self

    def add_value(self: B, column: str, value: int | float | str, include_quotes: bool = True) -> B:
        self.values_map[column] = format_literal(value, include_quotes=include_quotes)
        return self

    def add_prepared_value(self: B, column: str) -> B:
        """Add a positional ``?`` placeholder bound at execution time."""
        self.values_map[column] = PLACEHOLDER
        return self

    def _validate(self) -> None:
        require(self.table_name, "Missing table name")
        require(self.values_map, "No values given")
