"""Custom exceptions and centralized FastAPI error handlers."""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from envelope import failure

logger = logging.getLogger(__name__)


class RadioAPIError(Exception):
    """Base exception with HTTP status code."""

    code = "INTERNAL_ERROR"

    def __init__(self, message: str, status_code: int = 500):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class BadRequestError(RadioAPIError):
    code = "BAD_REQUEST"

    def __init__(self, message: str):
        super().__init__(message, status_code=400)


class AuthenticationRequired(RadioAPIError):
    code = "AUTHENTICATION_REQUIRED"

    def __init__(self, message: str = "Authentication required"):
        super().__init__(message, status_code=401)


class InvalidCredentials(RadioAPIError):
    code = "INVALID_TOKEN"

    def __init__(self, message: str = "Invalid or expired token"):
        super().__init__(message, status_code=403)


class PermissionDenied(RadioAPIError):
    code = "FORBIDDEN"

    def __init__(self, message: str = "Administrator permissions required"):
        super().__init__(message, status_code=403)


# ---------------------------------------------------------------------------
# Upstream (AzuraCast) failures
# ---------------------------------------------------------------------------

class UpstreamError(RadioAPIError):
    """A failed call to the station API.

    Raised by the AzuraCast client and propagated untouched through the
    station service; the HTTP boundary renders it as a 5xx.
    """

    code = "UPSTREAM_ERROR"
    default_status = 502

    def __init__(self, operation: str, detail: str, http_status: int | None = None):
        super().__init__(f"AzuraCast {operation} failed: {detail}", status_code=self.default_status)
        self.operation = operation
        self.detail = detail
        self.http_status = http_status


class UpstreamTimeout(UpstreamError):
    code = "UPSTREAM_TIMEOUT"
    default_status = 504


class UpstreamHttpError(UpstreamError):
    code = "UPSTREAM_HTTP_ERROR"


class UpstreamMalformedResponse(UpstreamError):
    code = "UPSTREAM_MALFORMED_RESPONSE"


class UpstreamUnreachable(UpstreamError):
    code = "UPSTREAM_UNREACHABLE"


class SongRequestRejected(UpstreamError):
    code = "SONG_REQUEST_REJECTED"


def register_error_handlers(app: FastAPI) -> None:
    """Register centralized exception handlers on the FastAPI app."""

    @app.exception_handler(RadioAPIError)
    async def handle_radio_error(_request: Request, exc: RadioAPIError):
        return JSONResponse(failure(exc.message, exc.code), status_code=exc.status_code)

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(_request: Request, exc: RequestValidationError):
        return JSONResponse(failure(_describe_validation(exc), "BAD_REQUEST"), status_code=400)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        message = f"Route not found: {request.url.path}" if exc.status_code == 404 else str(exc.detail)
        return JSONResponse(
            failure(message, "HTTP_ERROR"),
            status_code=exc.status_code,
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(ValueError)
    async def handle_value_error(_request: Request, exc: ValueError):
        return JSONResponse(failure(str(exc), "BAD_REQUEST"), status_code=400)

    @app.exception_handler(Exception)
    async def handle_unexpected(_request: Request, exc: Exception):
        logger.exception("Unhandled error: %s", exc)
        return JSONResponse(failure("Internal server error"), status_code=500)


def _describe_validation(exc: RequestValidationError) -> str:
    """Collapse pydantic validation errors into one readable line."""
    parts = []
    for err in exc.errors():
        location = ".".join(str(p) for p in err.get("loc", ()) if p != "body")
        parts.append(f"{location}: {err.get('msg')}" if location else str(err.get("msg")))
    return "Invalid request: " + "; ".join(parts) if parts else "Invalid request"
