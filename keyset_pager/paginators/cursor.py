"""Keyset (cursor) paginator."""

import logging
from typing import Any, Callable, Optional, Tuple

from sqlalchemy import RowMapping, Select

from ..config import Settings, get_settings
from ..cursor import CursorCodec, CursorMode, KeyTuple
from ..db.executor import QueryExecutor
from ..errors import ConfigError, DecodeError, ValidationError
from ..predicates import PredicateBuilder, coerce_value, order_by, resolve_column
from ..result import PaginationResult
from ..sorting import SortSpec
from .base import BasePaginator

logger = logging.getLogger(__name__)

KeyNormalizer = Callable[[Any, Any], Tuple[Any, Any]]


class CursorPaginator(BasePaginator):
    """Paginates a select by sort-key values instead of offsets.

    Each call runs one fetch plus up to two limit-1 existence probes, one per
    page edge, all derived from the untouched template.

    Example:
        spec = SortSpec().set_primary("created_at").set_backup("id")
        paginator = CursorPaginator(select(events), executor, spec)

        page = await paginator.paginate(limit=20)
        rows = paginator.items()
        page = await paginator.paginate(after=page.next_cursor, limit=20)

    Args:
        query: Select template; its filters are kept, its ORDER BY and LIMIT
            are replaced
        executor: Query executor running the statements
        sort: Sort specification; the primary key must be set
        encode_cursors: Emit and accept encoded cursors (plain ones are
            readable, for debugging); defaults to the settings
        key_normalizer: Pure function mapping decoded cursor values
            ``(primary, backup)`` to the values compared against the columns
        default_limit: Page size used when no positive limit is requested;
            defaults to the settings, 0 disables the fallback
        max_limit: Upper bound for requested limits; defaults to the settings
        settings: Settings to read defaults from
    """

    def __init__(
        self,
        query: Select,
        executor: QueryExecutor,
        sort: SortSpec,
        *,
        encode_cursors: Optional[bool] = None,
        key_normalizer: Optional[KeyNormalizer] = None,
        default_limit: Optional[int] = None,
        max_limit: Optional[int] = None,
        settings: Optional[Settings] = None,
    ):
        super().__init__(query, executor)
        settings = settings or get_settings()
        if encode_cursors is None:
            encode_cursors = settings.encode_cursors

        # own copy; later set_* calls on the caller's spec do not reach this paginator
        self.sort = SortSpec(sort.primary, sort.backup)
        self.key_normalizer = key_normalizer
        self.default_limit = settings.default_page_size if default_limit is None else default_limit
        self.max_limit = settings.max_page_size if max_limit is None else max_limit
        self.codec = CursorCodec(CursorMode.ENCODED if encode_cursors else CursorMode.PLAIN)
        self.predicates = PredicateBuilder(self.sort)

    async def paginate(
        self,
        after: Optional[str] = None,
        before: Optional[str] = None,
        limit: Optional[int] = None,
        reverse_results: bool = False,
    ) -> PaginationResult:
        """Fetch the page after or before a cursor, or the first page.

        Args:
            after: Cursor to continue forward from
            before: Cursor to continue backward from
            limit: Page size
            reverse_results: Deliver the rows in reverse of the sort order

        Returns:
            Cursors of the page; the rows are available from items()

        Raises:
            ConfigError: If the sort spec or the template is unusable
            ValidationError: If both cursors are given or no limit applies
            DecodeError: If the cursor is malformed
        """
        self.sort.require_primary()
        if after is not None and before is not None:
            raise ValidationError("Only one of 'after' and 'before' may be set")
        limit = self._resolve_limit(limit)

        backward = before is not None
        cursor_in = before if backward else after
        spec = self.sort.inverted() if backward else self.sort

        query = self.query.order_by(None).order_by(*order_by(self.query, spec)).limit(limit)
        if cursor_in is not None:
            keys = self._parse_cursor(cursor_in)
            query = query.where(self.predicates.build(self.query, keys, forward=not backward))

        rows = list(await self.executor.fetch(query))
        if backward:
            # fetched nearest-first; restore the sort order
            rows.reverse()

        previous_cursor = next_cursor = None
        if rows:
            if await self._has_rows(rows[0], forward=False):
                previous_cursor = self._build_cursor(rows[0])
            if await self._has_rows(rows[-1], forward=True):
                next_cursor = self._build_cursor(rows[-1])

        if reverse_results:
            rows.reverse()
        self._items = rows

        logger.debug(
            f"Paginated {len(rows)} rows (backward={backward}, limit={limit}, "
            f"has_previous={previous_cursor is not None}, has_next={next_cursor is not None})"
        )

        return PaginationResult(
            results_count=len(rows),
            previous_cursor=previous_cursor,
            current_cursor=cursor_in,
            next_cursor=next_cursor,
        )

    def _resolve_limit(self, limit: Optional[int]) -> int:
        if limit is None or limit <= 0:
            if not self.default_limit or self.default_limit <= 0:
                logger.warning(f"Rejected pagination request with limit {limit!r} and no default page size")
                raise ValidationError("A positive limit is required when no default page size is configured")
            limit = self.default_limit
        if self.max_limit is not None and limit > self.max_limit:
            limit = self.max_limit
        return limit

    def _parse_cursor(self, cursor: str) -> KeyTuple:
        primary, backup = self.codec.decode(cursor)
        if self.key_normalizer is not None:
            primary, backup = self.key_normalizer(primary, backup)
        if primary is None:
            raise DecodeError("Cursor carries no primary sort value")

        primary = coerce_value(resolve_column(self.query, self.sort.primary_name), primary)
        if self.sort.backup is not None:
            backup = coerce_value(resolve_column(self.query, self.sort.backup_name), backup)
        return KeyTuple(primary, backup)

    def _keys_of(self, row: RowMapping) -> KeyTuple:
        try:
            primary = row[self.sort.primary_name]
            backup = row[self.sort.backup_name] if self.sort.backup is not None else None
        except KeyError as e:
            raise ConfigError(f"Row has no value for sort column {e}") from None
        return KeyTuple(primary, backup)

    def _build_cursor(self, row: RowMapping) -> str:
        return self.codec.encode(self._keys_of(row))

    async def _has_rows(self, row: RowMapping, forward: bool) -> bool:
        """Probe for a row beyond ``row`` in the given direction."""
        probe = self.query.where(self.predicates.build(self.query, self._keys_of(row), forward))
        return await self.executor.exists(probe)
