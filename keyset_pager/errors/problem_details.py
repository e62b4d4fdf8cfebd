"""Problem Details (RFC 9457) errors raised by keyset-pager."""

from typing import Any, ClassVar, Dict, Optional

from fastapi import Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field
from sqlalchemy.exc import SQLAlchemyError

PROBLEM_JSON = "application/problem+json"


class ProblemDetail(BaseModel):
    """RFC 9457 problem document; unknown members are kept as extensions."""

    type: str = Field(default="about:blank", description="Problem type URI")
    title: str = Field(description="Short summary of the problem type")
    status: int = Field(description="HTTP status code")
    detail: Optional[str] = Field(default=None, description="Explanation of this occurrence")
    instance: Optional[str] = Field(default=None, description="URI of this occurrence")

    model_config = {"extra": "allow"}


def create_problem_response(
    status: int,
    title: str,
    detail: Optional[str] = None,
    type_uri: str = "about:blank",
    instance: Optional[str] = None,
    request: Optional[Request] = None,
    **extensions: Any
) -> JSONResponse:
    """Render a problem document as an ``application/problem+json`` response."""
    if instance is None and request is not None:
        instance = str(request.url.path)

    problem = ProblemDetail(
        type=type_uri,
        title=title,
        status=status,
        detail=detail,
        instance=instance,
        **extensions
    )
    return JSONResponse(
        status_code=status,
        content=problem.model_dump(exclude_none=True),
        headers={"Content-Type": PROBLEM_JSON}
    )


class ProblemDetailException(Exception):
    """Exception that knows how to render itself as a problem document."""

    def __init__(
        self,
        status: int,
        title: str,
        detail: Optional[str] = None,
        type_uri: str = "about:blank",
        instance: Optional[str] = None,
        **extensions: Any
    ):
        self.status = status
        self.title = title
        self.detail = detail
        self.type_uri = type_uri
        self.instance = instance
        self.extensions: Dict[str, Any] = extensions
        super().__init__(detail or title)

    def to_problem_detail(self, request: Optional[Request] = None) -> ProblemDetail:
        instance = self.instance
        if instance is None and request is not None:
            instance = str(request.url.path)
        return ProblemDetail(
            type=self.type_uri,
            title=self.title,
            status=self.status,
            detail=self.detail,
            instance=instance,
            **self.extensions
        )

    def to_response(self, request: Optional[Request] = None) -> JSONResponse:
        return create_problem_response(
            self.status,
            self.title,
            self.detail,
            type_uri=self.type_uri,
            instance=self.instance,
            request=request,
            **self.extensions
        )


class PaginationError(ProblemDetailException):
    """Raised by paginators before any query runs.

    Subclasses fix the status and title; callers only supply the detail and
    optional extension members such as the offending cursor.
    """

    status_code: ClassVar[int] = 400
    problem_title: ClassVar[str] = "Bad Request"
    default_detail: ClassVar[Optional[str]] = None

    def __init__(self, detail: Optional[str] = None, **extensions: Any):
        super().__init__(
            status=self.status_code,
            title=self.problem_title,
            detail=detail if detail is not None else self.default_detail,
            **extensions
        )


class ConfigError(PaginationError):
    """Sort spec, limits or query template are unusable (500)."""

    status_code = 500
    problem_title = "Pagination Misconfigured"


class ValidationError(PaginationError):
    """Caller-supplied pagination arguments are invalid (400)."""


class DecodeError(PaginationError):
    """A cursor could not be decoded (400)."""

    problem_title = "Invalid Cursor"
    default_detail = "Invalid cursor"


# Failures of the query layer are passed through untouched; this alias only
# gives callers a stable name to catch them by.
ExecutorError = SQLAlchemyError
