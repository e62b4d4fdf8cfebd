"""Outcome of a single pagination call."""

from dataclasses import dataclass
from typing import Any, Optional


@dataclass(frozen=True)
class PaginationResult:
    """Cursors and item count of one page.

    Cursor paginators store cursor strings here; the offset paginator stores
    page numbers.
    """

    results_count: int = 0
    previous_cursor: Optional[Any] = None
    current_cursor: Optional[Any] = None
    next_cursor: Optional[Any] = None

    def is_first(self) -> bool:
        """True for a non-empty (or explicitly addressed) page with nothing before it."""
        return (self.results_count > 0 or self.current_cursor is not None) and self.previous_cursor is None

    def has_pages(self) -> bool:
        """True when there is a page before or after this one."""
        return self.previous_cursor is not None or self.next_cursor is not None
