"""Typed values bound into prepared statement slots.

A ``QueryValue`` tags a Python scalar with the SQL type it is bound as, so
the binding code can choose the engine bind path from the tag alone.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ValueType(Enum):
    """SQL storage classes a value can be bound as."""

    INTEGER = "INTEGER"
    REAL = "REAL"
    TEXT = "TEXT"


@dataclass(frozen=True)
class QueryValue:
    """Immutable (scalar, tag) pair.

    Use the ``integer``, ``real`` and ``text`` constructors rather than
    building instances directly; they reject scalars whose runtime type does
    not match the tag.
    """

    value: int | float | str
    type: ValueType

    def __post_init__(self) -> None:
        if not isinstance(self.type, ValueType):
            msg = f"Unknown value type: {self.type!r}"
            raise TypeError(msg)
        expected = _EXPECTED_TYPES[self.type]
        if isinstance(self.value, bool) or not isinstance(self.value, expected):
            msg = (
                f"{self.type.value} value must be {expected.__name__}, "
                f"got {type(self.value).__name__}"
            )
            raise TypeError(msg)

    @classmethod
    def integer_value(cls, value: int) -> QueryValue:
        return cls(value, ValueType.INTEGER)

    @classmethod
    def real_value(cls, value: float) -> QueryValue:
        # ints widen to float the way a double parameter would accept them
        if isinstance(value, int) and not isinstance(value, bool):
            value = float(value)
        return cls(value, ValueType.REAL)

    @classmethod
    def text_value(cls, value: str) -> QueryValue:
        return cls(value, ValueType.TEXT)


_EXPECTED_TYPES: dict[ValueType, type] = {
    ValueType.INTEGER: int,
    ValueType.REAL: float,
    ValueType.TEXT: str,
}


def integer(value: int) -> QueryValue:
    """Return a value bound as an INTEGER parameter."""
    return QueryValue.integer_value(value)


def real(value: float) -> QueryValue:
    """Return a value bound as a REAL parameter."""
    return QueryValue.real_value(value)


def text(value: str) -> QueryValue:
    """Return a value bound as a TEXT parameter."""
    return QueryValue.text_value(value)
