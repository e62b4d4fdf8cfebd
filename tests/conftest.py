"""Pytest configuration and shared fixtures for the keyset-pager tests."""

import logging
from datetime import datetime, timedelta
from typing import Any, AsyncGenerator, Dict, List

import pytest
import pytest_asyncio
from sqlalchemy import Column, DateTime, Integer, MetaData, String, Table, insert, select
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.pool import StaticPool

from keyset_pager.config import Settings
from keyset_pager.db.executor import EngineExecutor


# Disable logging for cleaner test output
logging.getLogger("asyncio").setLevel(logging.WARNING)
logging.getLogger("aiosqlite").setLevel(logging.WARNING)

BASE_TIME = datetime(2024, 1, 15, 10, 30, 0)

metadata = MetaData()

events = Table(
    "events",
    metadata,
    Column("id", Integer, primary_key=True),
    Column("created_at", DateTime, nullable=False),
    Column("title", String(100), nullable=False),
    Column("category", String(50), nullable=False, server_default="news"),
)


def make_events(count: int, category: str = "news", start_id: int = 1) -> List[Dict[str, Any]]:
    """Rows with consecutive ids and strictly increasing timestamps."""
    return [
        {
            "id": start_id + i,
            "created_at": BASE_TIME + timedelta(seconds=start_id + i),
            "title": f"Event {start_id + i}",
            "category": category,
        }
        for i in range(count)
    ]


@pytest.fixture
def test_settings() -> Settings:
    """Settings for tests, independent of the environment."""
    return Settings(
        database_url="sqlite+aiosqlite:///:memory:",
        default_page_size=50,
        max_page_size=None,
        encode_cursors=True,
        log_level="ERROR",
    )


@pytest_asyncio.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """In-memory SQLite engine with an empty events table."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def executor(engine: AsyncEngine) -> EngineExecutor:
    """Executor bound to the test engine."""
    return EngineExecutor(engine)


async def insert_events(engine: AsyncEngine, rows: List[Dict[str, Any]]) -> None:
    async with engine.begin() as conn:
        await conn.execute(insert(events), rows)


@pytest_asyncio.fixture
async def five_events(engine: AsyncEngine) -> List[Dict[str, Any]]:
    """Five rows, ids 1..5, strictly increasing created_at."""
    rows = make_events(5)
    await insert_events(engine, rows)
    return rows


@pytest_asyncio.fixture
async def tied_events(engine: AsyncEngine) -> List[Dict[str, Any]]:
    """Eleven rows where most timestamps are shared by several ids."""
    stamps = [0, 0, 0, 1, 2, 2, 3, 3, 3, 3, 4]
    rows = [
        {
            "id": i + 1,
            "created_at": BASE_TIME + timedelta(minutes=stamp),
            "title": f"Tied {i + 1}",
            "category": "news",
        }
        for i, stamp in enumerate(stamps)
    ]
    # insert out of order so physical order does not match the sort
    await insert_events(engine, list(reversed(rows)))
    return rows


@pytest.fixture
def events_table() -> Table:
    """The events table."""
    return events


@pytest.fixture
def events_query():
    """Unordered select template over all event columns."""
    return select(events)


@pytest.fixture
def event_rows():
    """Factory for event rows, see make_events."""
    return make_events


@pytest.fixture
def seed_events(engine: AsyncEngine):
    """Insert event rows into the test engine."""
    async def seed(rows: List[Dict[str, Any]]) -> None:
        await insert_events(engine, rows)
    return seed


# Pytest markers for test categorization
def pytest_configure(config):
    """Register custom pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests (fast, no database)")
    config.addinivalue_line("markers", "integration: Integration tests (in-memory SQLite)")


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their location."""
    for item in items:
        if "integration" in str(item.fspath):
            item.add_marker(pytest.mark.integration)

        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)
