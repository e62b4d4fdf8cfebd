"""Common paginator shape."""

from abc import ABC, abstractmethod
from typing import List

from sqlalchemy import RowMapping, Select

from ..db.executor import QueryExecutor
from ..result import PaginationResult


class BasePaginator(ABC):
    """Paginates a select template through a query executor.

    The template is never modified; each call derives its own statements from
    it.
    """

    def __init__(self, query: Select, executor: QueryExecutor):
        self.query = query
        self.executor = executor
        self._items: List[RowMapping] = []

    @abstractmethod
    async def paginate(self, *args, **kwargs) -> PaginationResult:
        """Fetch a page and describe it."""

    def items(self) -> List[RowMapping]:
        """Rows of the most recent paginate() call."""
        return list(self._items)
