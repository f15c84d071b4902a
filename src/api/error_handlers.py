# This file defines the API error taxonomy and the exception handlers that render it.
# Every failure leaves the service as the same JSON shape carrying the request id and a timestamp.
# Authentication failures map to 401, permission failures to 403, missing resources to 404
# and duplicate registrations to 409; anything unexpected becomes a generic 500.

from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import Any

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class APIError(Exception):
    """Domain error type with structured API details."""

    def __init__(
        self,
        *,
        status_code: int,
        error_code: str,
        message: str,
        details: Any | None = None,
        headers: dict[str, str] | None = None,
    ) -> None:
        self.status_code = status_code
        self.error_code = error_code
        self.message = message
        self.details = details
        self.headers = headers
        super().__init__(message)


class AuthenticationError(APIError):
    """Missing, malformed, expired or forged credentials."""

    def __init__(self, message: str = "Invalid or missing bearer token.") -> None:
        super().__init__(
            status_code=401,
            error_code="UNAUTHENTICATED",
            message=message,
            headers={"WWW-Authenticate": "Bearer"},
        )


class ForbiddenError(APIError):
    """Authenticated caller lacks the role or state required for the operation."""

    def __init__(self, message: str) -> None:
        super().__init__(status_code=403, error_code="FORBIDDEN", message=message)


class NotFoundError(APIError):
    def __init__(self, message: str, *, details: Any | None = None) -> None:
        super().__init__(status_code=404, error_code="NOT_FOUND", message=message, details=details)


class ConflictError(APIError):
    def __init__(self, message: str) -> None:
        super().__init__(status_code=409, error_code="CONFLICT", message=message)


def _request_id(request: Request) -> str:
    return str(getattr(request.state, "request_id", "unknown"))


def error_response(
    request: Request,
    status_code: int,
    error_code: str,
    message: str,
    *,
    details: Any | None = None,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    """Render the shared error body; every handler below funnels through here."""

    body = {
        "error_code": error_code,
        "message": message,
        "details": details,
        "request_id": _request_id(request),
        "timestamp": datetime.now(tz=UTC).isoformat(),
    }
    return JSONResponse(status_code=status_code, content=body, headers=headers)


def jsonable_errors(exc: RequestValidationError) -> list[dict[str, Any]]:
    """Strip non-serializable context (for example raised exceptions) from validation errors."""

    cleaned: list[dict[str, Any]] = []
    for error in exc.errors():
        item = {key: value for key, value in error.items() if key != "ctx"}
        if "ctx" in error:
            item["ctx"] = {key: str(value) for key, value in error["ctx"].items()}
        cleaned.append(item)
    return cleaned


async def _on_api_error(request: Request, exc: APIError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s on %s: %s", exc.error_code, request.url.path, exc.message)
    return error_response(
        request, exc.status_code, exc.error_code, exc.message, details=exc.details, headers=exc.headers
    )


async def _on_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    return error_response(
        request, 422, "VALIDATION_ERROR", "Invalid request parameters.", details=jsonable_errors(exc)
    )


async def _on_http_exception(request: Request, exc: HTTPException) -> JSONResponse:
    return error_response(
        request, exc.status_code, "HTTP_ERROR", str(exc.detail), headers=getattr(exc, "headers", None)
    )


async def _on_unexpected(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "Unhandled error on %s %s (request_id=%s)",
        request.method,
        request.url.path,
        _request_id(request),
        exc_info=exc,
    )
    return error_response(
        request, 500, "INTERNAL_SERVER_ERROR", "The server encountered an unexpected error."
    )


def register_error_handlers(app: FastAPI) -> None:
    """Register global exception handlers."""

    app.add_exception_handler(APIError, _on_api_error)
    app.add_exception_handler(RequestValidationError, _on_validation_error)
    app.add_exception_handler(HTTPException, _on_http_exception)
    app.add_exception_handler(Exception, _on_unexpected)
