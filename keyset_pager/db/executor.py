"""Query execution for paginators."""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Protocol, Sequence, Union

from sqlalchemy import RowMapping, Select, select
from sqlalchemy.ext.asyncio import AsyncConnection, AsyncEngine

logger = logging.getLogger(__name__)


class QueryExecutor(Protocol):
    """What a paginator needs from the query layer.

    Errors raised by implementations reach the paginator's caller unchanged.
    """

    async def fetch(self, query: Select) -> Sequence[RowMapping]:
        """Run a select and return its rows in order."""
        ...

    async def exists(self, query: Select) -> bool:
        """Tell whether a select matches at least one row."""
        ...


class EngineExecutor:
    """QueryExecutor over a SQLAlchemy async engine or connection.

    Given an engine, every call checks out its own pooled connection. Given a
    connection, calls run on it, inside whatever transaction the caller holds.
    """

    def __init__(self, bind: Union[AsyncEngine, AsyncConnection]):
        self.bind = bind

    @asynccontextmanager
    async def _connect(self) -> AsyncIterator[AsyncConnection]:
        if isinstance(self.bind, AsyncConnection):
            yield self.bind
        else:
            async with self.bind.connect() as conn:
                yield conn

    async def fetch(self, query: Select) -> Sequence[RowMapping]:
        async with self._connect() as conn:
            result = await conn.execute(query)
            rows = result.mappings().all()
        logger.debug(f"Fetched {len(rows)} rows")
        return rows

    async def exists(self, query: Select) -> bool:
        async with self._connect() as conn:
            found = await conn.scalar(select(query.limit(1).exists()))
        return bool(found)
