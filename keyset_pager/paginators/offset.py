"""Page-number paginator."""

import logging
from typing import Optional

from sqlalchemy import Select

from ..config import Settings, get_settings
from ..db.executor import QueryExecutor
from ..result import PaginationResult
from .base import BasePaginator

logger = logging.getLogger(__name__)


class OffsetPaginator(BasePaginator):
    """Paginates with LIMIT/OFFSET, looking one row ahead to detect a next page.

    The cursors of its results are page numbers. Invalid page numbers fall back
    to 1 and invalid page sizes to the configured default page size.
    """

    def __init__(
        self,
        query: Select,
        executor: QueryExecutor,
        page: int = 1,
        per_page: Optional[int] = None,
        *,
        settings: Optional[Settings] = None,
    ):
        super().__init__(query, executor)
        settings = settings or get_settings()
        self.page = page if page is not None and page >= 1 else 1
        self.per_page = per_page if per_page is not None and per_page >= 1 else settings.default_page_size

    async def paginate(self) -> PaginationResult:
        offset = (self.page - 1) * self.per_page
        query = self.query.offset(offset).limit(self.per_page + 1)

        rows = list(await self.executor.fetch(query))
        has_next = len(rows) > self.per_page
        self._items = rows[:self.per_page]

        logger.debug(f"Fetched page {self.page} ({len(self._items)} rows, has_next={has_next})")

        return PaginationResult(
            results_count=len(self._items),
            previous_cursor=self.page - 1 if self.page >= 2 else None,
            current_cursor=self.page,
            next_cursor=self.page + 1 if has_next else None,
        )
