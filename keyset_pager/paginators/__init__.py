"""Paginators over SQLAlchemy selects."""

from .base import BasePaginator
from .cursor import CursorPaginator, KeyNormalizer
from .null import NullPaginator
from .offset import OffsetPaginator

__all__ = [
    "BasePaginator",
    "CursorPaginator",
    "KeyNormalizer",
    "NullPaginator",
    "OffsetPaginator"
]
