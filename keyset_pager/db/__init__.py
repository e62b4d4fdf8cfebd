"""Database access for keyset-pager."""

from .connection import DatabaseManager, db_manager, get_engine, get_executor
from .executor import EngineExecutor, QueryExecutor

__all__ = [
    "DatabaseManager",
    "EngineExecutor",
    "QueryExecutor",
    "db_manager",
    "get_engine",
    "get_executor"
]
