"""Global exception handlers for FastAPI application."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from roster_service.core.database.exceptions import (
    InvalidFilterError,
    InvalidPageRequestError,
    NotFoundError,
    RepositoryError,
)
from roster_service.core.exceptions import AppException, default_title
from roster_service.core.schemas.error import (
    FieldError,
    ProblemDetail,
    ValidationProblemDetail,
)

logger = logging.getLogger(__name__)


def _create_problem_detail(
    status_code: int,
    detail: str,
    type_: str = "about:blank",
    title: str | None = None,
    instance: str | None = None,
    extra: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Create RFC 7807 Problem Details response body.

    Args:
        status_code: HTTP status code.
        detail: Human-readable error description.
        type_: Error type identifier.
        title: Short human-readable summary.
        instance: URI identifying this occurrence.
        extra: Additional context information.

    Returns:
        Dictionary representing the problem detail.
    """
    problem = ProblemDetail(
        type=type_,
        title=title or default_title(status_code),
        status=status_code,
        detail=detail,
        instance=instance,
    )

    response_data = problem.model_dump(exclude_none=True)
    if extra:
        response_data.update(extra)

    return response_data


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """Convert AppException instances into Problem Details responses."""
    logger.warning(
        "Application exception occurred",
        extra={
            "path": request.url.path,
            "method": request.method,
            "exception_type": exc.type,
            "status_code": exc.status_code,
            "detail": exc.detail,
        },
    )

    problem_data = _create_problem_detail(
        status_code=exc.status_code,
        detail=exc.detail,
        type_=exc.type,
        title=exc.title,
        instance=exc.instance or str(request.url),
        extra=exc.extra,
    )
    return JSONResponse(status_code=exc.status_code, content=problem_data)


def _repository_error_status(exc: RepositoryError) -> tuple[int, str]:
    if isinstance(exc, NotFoundError):
        return status.HTTP_404_NOT_FOUND, "not-found"
    if isinstance(exc, InvalidPageRequestError):
        return status.HTTP_400_BAD_REQUEST, "invalid-page-request"
    if isinstance(exc, InvalidFilterError):
        return status.HTTP_400_BAD_REQUEST, "invalid-filter"
    return status.HTTP_500_INTERNAL_SERVER_ERROR, "repository-error"


async def repository_exception_handler(request: Request, exc: RepositoryError) -> JSONResponse:
    """Map repository errors raised below the router onto HTTP statuses.

    Not-found maps to 404, rejected page requests and filters to 400, and
    anything else to 500 without exposing its details.
    """
    status_code, type_ = _repository_error_status(exc)

    if status_code >= 500:
        logger.error(
            "Repository error",
            extra={"path": request.url.path, "method": request.method, "error": str(exc)},
            exc_info=exc,
        )
        detail = "An unexpected error occurred while processing your request"
        extra: dict[str, Any] = {}
    else:
        logger.warning(
            "Repository rejected request",
            extra={"path": request.url.path, "method": request.method, "error": str(exc)},
        )
        detail = exc.message
        extra = dict(exc.details)

    problem_data = _create_problem_detail(
        status_code=status_code,
        detail=detail,
        type_=type_,
        instance=str(request.url),
        extra=extra,
    )
    return JSONResponse(status_code=status_code, content=problem_data)


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Convert request validation errors into Problem Details with per-field errors."""
    validation_errors = [
        FieldError(
            field=".".join(str(loc) for loc in error["loc"]),
            message=error["msg"],
            type=error["type"],
            value=error.get("input"),
        )
        for error in exc.errors()
    ]

    logger.warning(
        "Request validation failed",
        extra={
            "path": request.url.path,
            "method": request.method,
            "error_count": len(validation_errors),
        },
    )

    problem = ValidationProblemDetail(
        type="validation-error",
        title="Validation Error",
        status=status.HTTP_422_UNPROCESSABLE_ENTITY,
        detail=f"Request validation failed for {len(validation_errors)} field(s)",
        instance=str(request.url),
        errors=validation_errors,
    )

    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=problem.model_dump(mode="json", exclude_none=True),
    )


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all for unexpected exceptions; logs the traceback, hides the details."""
    logger.error(
        "Unexpected exception occurred",
        extra={
            "path": request.url.path,
            "method": request.method,
            "exception_type": type(exc).__name__,
        },
        exc_info=exc,
    )

    problem_data = _create_problem_detail(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail="An unexpected error occurred while processing your request",
        type_="internal-error",
        title="Internal Server Error",
        instance=str(request.url),
    )
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=problem_data)


def configure_exception_handlers(app: FastAPI) -> None:
    """Register the Problem Details exception handlers on the application."""
    app.add_exception_handler(AppException, app_exception_handler)
    app.add_exception_handler(RepositoryError, repository_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)

    logger.debug("Exception handlers configured")
