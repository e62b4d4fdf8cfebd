"""Integration tests for engine management and query execution."""

import pytest
from sqlalchemy import select, table
from sqlalchemy.exc import OperationalError

from keyset_pager.config import get_settings
from keyset_pager.db import DatabaseManager, EngineExecutor
from keyset_pager.paginators import CursorPaginator
from keyset_pager.sorting import SortSpec


class TestEngineExecutor:
    """Test EngineExecutor over engines and connections."""

    @pytest.mark.asyncio
    async def test_fetch_returns_mappings(self, executor, events_table, five_events):
        rows = await executor.fetch(select(events_table).order_by(events_table.c.id).limit(2))

        assert [row["id"] for row in rows] == [1, 2]
        assert rows[0]["title"] == "Event 1"

    @pytest.mark.asyncio
    async def test_exists(self, executor, events_table, five_events):
        query = select(events_table)

        assert await executor.exists(query.where(events_table.c.id > 4)) is True
        assert await executor.exists(query.where(events_table.c.id > 5)) is False

    @pytest.mark.asyncio
    async def test_bound_to_connection(self, engine, events_table, event_rows, test_settings):
        """Test paginating inside a caller's transaction sees its uncommitted rows."""
        async with engine.connect() as conn:
            await conn.execute(events_table.insert(), event_rows(3))
            executor = EngineExecutor(conn)
            spec = SortSpec().set_primary("created_at").set_backup("id")
            paginator = CursorPaginator(select(events_table), executor, spec, settings=test_settings)

            result = await paginator.paginate(limit=2)

            assert [row["id"] for row in paginator.items()] == [1, 2]
            assert result.next_cursor is not None
            await conn.rollback()

    @pytest.mark.asyncio
    async def test_errors_propagate(self, executor):
        with pytest.raises(OperationalError):
            await executor.fetch(select(1).select_from(table("missing")))


class TestDatabaseManager:
    """Test engine lifecycle."""

    @pytest.mark.asyncio
    async def test_initialize_and_close(self, test_settings):
        manager = DatabaseManager(test_settings)

        engine = manager.initialize()

        assert manager.initialize() is engine
        assert isinstance(manager.executor(), EngineExecutor)
        assert manager.executor().bind is engine
        assert await manager.executor().exists(select(1)) is True

        await manager.close()
        assert manager.engine is None

    @pytest.mark.asyncio
    async def test_close_without_engine(self, test_settings):
        manager = DatabaseManager(test_settings)
        await manager.close()
        assert manager.engine is None

    def test_settings_default_to_global(self):
        assert DatabaseManager().settings is get_settings()
