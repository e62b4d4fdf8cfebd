"""Pass-through paginator."""

from ..result import PaginationResult
from .base import BasePaginator


class NullPaginator(BasePaginator):
    """Runs the template as is and returns every row."""

    async def paginate(self) -> PaginationResult:
        self._items = list(await self.executor.fetch(self.query))
        return PaginationResult(0, None, None, None)
