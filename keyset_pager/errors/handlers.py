"""FastAPI exception handlers for pagination errors."""

import logging
from typing import Any, Dict, List

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError as PydanticValidationError

from .problem_details import ProblemDetailException, create_problem_response

logger = logging.getLogger(__name__)


def _clean_errors(errors) -> List[Dict[str, Any]]:
    # ctx may hold the raised exception, which JSON can not carry
    return [
        {key: value for key, value in error.items() if key != "ctx"}
        for error in errors
    ]


def _format_errors(errors: List[Dict[str, Any]]) -> str:
    return "; ".join(
        f"{' -> '.join(str(part) for part in error['loc'])}: {error['msg']}"
        for error in errors
    )


def _validation_problem(request: Request, errors, status: int, prefix: str) -> JSONResponse:
    errors = _clean_errors(errors)
    logger.info(
        f"Rejected {request.method} {request.url.path}: {len(errors)} invalid pagination parameter(s)"
    )
    return create_problem_response(
        status=status,
        title="Validation Error",
        detail=f"{prefix}: {_format_errors(errors)}",
        request=request,
        validation_errors=errors
    )


async def problem_detail_exception_handler(
    request: Request,
    exc: ProblemDetailException
) -> JSONResponse:
    """Render pagination errors (and any other problem exception)."""
    logger.info(
        f"Problem detail exception: {exc.status} - {exc.title}",
        extra={
            "status_code": exc.status,
            "path": str(request.url.path),
            "method": request.method,
            "detail": exc.detail
        }
    )
    return exc.to_response(request)


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError
) -> JSONResponse:
    """Query string values FastAPI rejected, e.g. ``limit=0`` (422)."""
    return _validation_problem(request, exc.errors(), 422, "Validation failed")


async def pydantic_validation_exception_handler(
    request: Request,
    exc: PydanticValidationError
) -> JSONResponse:
    """Page parameter models that failed cross-field checks, e.g. both cursors (400)."""
    return _validation_problem(request, exc.errors(), 400, "Pagination parameters invalid")


def register_exception_handlers(app):
    """Register the pagination exception handlers with a FastAPI app."""
    app.add_exception_handler(ProblemDetailException, problem_detail_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(PydanticValidationError, pydantic_validation_exception_handler)
