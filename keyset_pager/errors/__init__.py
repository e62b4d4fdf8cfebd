"""Error handling module for keyset-pager."""

from .problem_details import (
    ProblemDetail,
    ProblemDetailException,
    PaginationError,
    ConfigError,
    ValidationError,
    DecodeError,
    ExecutorError,
    create_problem_response
)
from .handlers import register_exception_handlers

__all__ = [
    "ProblemDetail",
    "ProblemDetailException",
    "PaginationError",
    "ConfigError",
    "ValidationError",
    "DecodeError",
    "ExecutorError",
    "create_problem_response",
    "register_exception_handlers"
]
