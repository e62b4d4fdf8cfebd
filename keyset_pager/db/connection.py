"""Database engine management for keyset-pager."""

import logging
from typing import Optional

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from ..config import Settings, get_settings
from .executor import EngineExecutor

logger = logging.getLogger(__name__)


class DatabaseManager:
    """Manages the async engine and its connection pool."""

    def __init__(self, settings: Optional[Settings] = None):
        self.engine: Optional[AsyncEngine] = None
        self._settings = settings

    @property
    def settings(self) -> Settings:
        return self._settings or get_settings()

    def initialize(self) -> AsyncEngine:
        """Create the engine if it does not exist yet."""
        if self.engine is None:
            settings = self.settings
            url = make_url(settings.database_url)
            options = {"echo": settings.db_echo, "pool_pre_ping": True}
            if url.get_backend_name() == "postgresql":
                options.update(
                    pool_size=settings.db_pool_min_size,
                    max_overflow=settings.db_pool_max_size - settings.db_pool_min_size,
                )
                if url.get_driver_name() == "asyncpg":
                    options["connect_args"] = {"command_timeout": settings.db_command_timeout}
            self.engine = create_async_engine(url, **options)
            logger.info(f"Database engine created for {url.render_as_string(hide_password=True)}")
        return self.engine

    async def close(self) -> None:
        """Dispose of the engine and its pool."""
        if self.engine is not None:
            await self.engine.dispose()
            self.engine = None
            logger.info("Database engine disposed")

    def executor(self) -> EngineExecutor:
        """Executor bound to the managed engine."""
        return EngineExecutor(self.initialize())


# Global database manager instance
db_manager = DatabaseManager()


def get_engine() -> AsyncEngine:
    """Get the shared async engine."""
    return db_manager.initialize()


def get_executor() -> EngineExecutor:
    """Get an executor over the shared engine."""
    return db_manager.executor()
