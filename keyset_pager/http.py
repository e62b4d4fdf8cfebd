"""HTTP helpers for exposing paginated listings from FastAPI."""

from typing import Any, Dict, List, Optional
from urllib.parse import urlencode

from fastapi import Query
from pydantic import BaseModel, Field, model_validator

from .result import PaginationResult


class CursorPageParams(BaseModel):
    """Query parameters for cursor pagination."""

    after: Optional[str] = Field(default=None, description="Cursor to continue forward from")
    before: Optional[str] = Field(default=None, description="Cursor to continue backward from")
    limit: Optional[int] = Field(default=None, ge=1, description="Number of items per page")
    reverse: bool = Field(default=False, description="Return items in reverse order")

    @model_validator(mode="after")
    def check_single_cursor(self):
        if self.after is not None and self.before is not None:
            raise ValueError("Only one of 'after' and 'before' may be set")
        return self


class OffsetPageParams(BaseModel):
    """Query parameters for page-number pagination."""

    page: int = Field(default=1, ge=1, description="Page number, starting at 1")
    per_page: Optional[int] = Field(default=None, ge=1, description="Number of items per page")


def cursor_page_params(
    after: Optional[str] = Query(default=None, description="Cursor to continue forward from"),
    before: Optional[str] = Query(default=None, description="Cursor to continue backward from"),
    limit: Optional[int] = Query(default=None, ge=1, description="Number of items per page"),
    reverse: bool = Query(default=False, description="Return items in reverse order"),
) -> CursorPageParams:
    """FastAPI dependency reading cursor page parameters from the query string."""
    return CursorPageParams(after=after, before=before, limit=limit, reverse=reverse)


class CursorPageResponse(BaseModel):
    """Response model for a cursor-paginated listing."""

    items: List[Any] = Field(description="Items of this page")
    results_count: int = Field(description="Number of items on this page")
    previous_cursor: Optional[str] = Field(default=None, description="Cursor for the previous page (pass as 'before')")
    current_cursor: Optional[str] = Field(default=None, description="Cursor this page was requested with")
    next_cursor: Optional[str] = Field(default=None, description="Cursor for the next page (pass as 'after')")
    is_first: bool = Field(description="Whether this is the first page")
    has_pages: bool = Field(description="Whether a previous or next page exists")

    @classmethod
    def from_result(cls, result: PaginationResult, items: List[Any]) -> "CursorPageResponse":
        return cls(
            items=items,
            results_count=result.results_count,
            previous_cursor=result.previous_cursor,
            current_cursor=result.current_cursor,
            next_cursor=result.next_cursor,
            is_first=result.is_first(),
            has_pages=result.has_pages(),
        )


def create_link_header(
    base_url: str,
    params: Dict[str, Any],
    result: PaginationResult
) -> Optional[str]:
    """Create Link header for pagination as per RFC 8288.

    Args:
        base_url: Base URL for the resource
        params: Current query parameters, without cursors
        result: Result of the current page

    Returns:
        Link header value or None if there is no other page
    """
    params = {
        key: value for key, value in params.items()
        if key not in ("after", "before") and value is not None
    }
    links = []

    if result.previous_cursor is not None:
        prev_url = f"{base_url}?" + urlencode({**params, "before": result.previous_cursor})
        links.append(f'<{prev_url}>; rel="prev"')

    if result.next_cursor is not None:
        next_url = f"{base_url}?" + urlencode({**params, "after": result.next_cursor})
        links.append(f'<{next_url}>; rel="next"')

    return ", ".join(links) if links else None
