"""Named queries registered on a Database and prepared on demand."""

from __future__ import annotations

from dataclasses import dataclass

from .errors import InvalidSavedQueryError
from .querybuilders import QueryBuilder
from .results import ResultSetHandler


@dataclass(frozen=True)
class SavedQuery:
    """Immutable named query.

    Attributes:
        name: Registry key.
        query: Rendered SQL text.
        handler: Optional result handler for query execution.
        return_created_ids: Whether the statement is prepared to expose
            generated keys.
    """

    name: str
    query: str
    handler: ResultSetHandler | None = None
    return_created_ids: bool = False

    @property
    def has_handler(self) -> bool:
        return self.handler is not None

    @staticmethod
    def create_builder() -> SavedQueryBuilder:
        return SavedQueryBuilder()


class SavedQueryBuilder:
    """Accumulates SavedQuery fields; ``build()`` validates them."""

    def __init__(self) -> None:
        self._name: str | None = None
        self._query: str | None = None
        self._query_builder: QueryBuilder | None = None
        self._handler: ResultSetHandler | None = None
        self._return_created_ids = False

    def set_name(self, name: str) -> SavedQueryBuilder:
        self._name = name
        return self

    def set_query(self, query: str | QueryBuilder) -> SavedQueryBuilder:
        if isinstance(query, QueryBuilder):
            self._query, self._query_builder = None, query
        else:
            self._query, self._query_builder = query, None
        return self

    def set_handler(self, handler: ResultSetHandler | None) -> SavedQueryBuilder:
        self._handler = handler
        return self

    def return_created_ids(self, return_created_ids: bool = True) -> SavedQueryBuilder:
        self._return_created_ids = return_created_ids
        return self

    def build(self) -> SavedQuery:
        """Render any statement builder and return the frozen SavedQuery.

        Raises:
            MalformedQueryError: If the statement builder is invalid.
            InvalidSavedQueryError: If name or query text is empty.
        """
        query = self._query
        if self._query_builder is not None:
            query = self._query_builder.build()
        if not self._name:
            msg = "SavedQuery missing name"
            raise InvalidSavedQueryError(msg)
        if not query:
            msg = "SavedQuery missing query"
            raise InvalidSavedQueryError(msg)
        return SavedQuery(
            name=self._name,
            query=query,
            handler=self._handler,
            return_created_ids=self._return_created_ids,
        )
