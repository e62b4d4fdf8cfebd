"""Keyset (cursor) pagination for SQLAlchemy selects."""

from .config import Settings, configure_logging, get_settings
from .cursor import CursorCodec, CursorMode, KeyTuple
from .db import DatabaseManager, EngineExecutor, QueryExecutor, get_engine, get_executor
from .errors import (
    ConfigError,
    DecodeError,
    ExecutorError,
    PaginationError,
    ValidationError,
    register_exception_handlers
)
from .paginators import BasePaginator, CursorPaginator, NullPaginator, OffsetPaginator
from .predicates import PredicateBuilder
from .result import PaginationResult
from .sorting import Order, SortKey, SortSpec

__all__ = [
    "BasePaginator",
    "ConfigError",
    "CursorCodec",
    "CursorMode",
    "CursorPaginator",
    "DatabaseManager",
    "DecodeError",
    "EngineExecutor",
    "ExecutorError",
    "KeyTuple",
    "NullPaginator",
    "OffsetPaginator",
    "Order",
    "PaginationError",
    "PaginationResult",
    "PredicateBuilder",
    "QueryExecutor",
    "Settings",
    "SortKey",
    "SortSpec",
    "ValidationError",
    "configure_logging",
    "get_engine",
    "get_executor",
    "get_settings",
    "register_exception_handlers"
]
