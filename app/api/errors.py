"""
Reminder API errors and their translation into JSON error responses.

Every failure raised while handling a request is a ReminderDispatchError subclass.
The handlers registered by register_exception_handlers() turn them (and any
unexpected exception) into {"error": <code>, "detail": <message>} responses.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.middleware.cors import CORS_RESPONSE_HEADERS

logger = logging.getLogger(__name__)


class ReminderDispatchError(Exception):
    """Base class for errors surfaced by the reminder endpoint."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    code: str = "internal_error"

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class InvalidMethod(ReminderDispatchError):
    status_code = status.HTTP_405_METHOD_NOT_ALLOWED
    code = "invalid_method"


class InvalidPath(ReminderDispatchError):
    status_code = status.HTTP_404_NOT_FOUND
    code = "invalid_path"


class UnsupportedContentType(ReminderDispatchError):
    status_code = status.HTTP_415_UNSUPPORTED_MEDIA_TYPE
    code = "unsupported_content_type"


class MalformedBody(ReminderDispatchError):
    status_code = status.HTTP_400_BAD_REQUEST
    code = "malformed_body"


class UnsupportedAction(ReminderDispatchError):
    status_code = status.HTTP_400_BAD_REQUEST
    code = "unsupported_action"


class ProviderDispatchFailure(ReminderDispatchError):
    """Mailgun did not accept the scheduled email."""

    status_code = status.HTTP_502_BAD_GATEWAY
    code = "provider_dispatch_failure"

    def __init__(self, detail: str, provider_status: int | None = None):
        super().__init__(detail)
        self.provider_status = provider_status


# Methods accepted on the reminder route (OPTIONS is answered by the CORS middleware)
ALLOWED_METHODS = "POST, OPTIONS"


def error_response(
    status_code: int, error: str, detail: str, headers: dict[str, str] | None = None
) -> JSONResponse:
    """Build JSONResponse for API errors: {"error": ..., "detail": ...}."""
    return JSONResponse(
        status_code=status_code,
        content={"error": error, "detail": detail},
        headers=headers,
    )


async def reminder_error_handler(request: Request, exc: ReminderDispatchError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(
            f"{request.method} {request.url.path} failed: {exc.code}: {exc.detail}",
            extra={"error_code": exc.code},
        )
    else:
        logger.warning(
            f"{request.method} {request.url.path} rejected: {exc.code}: {exc.detail}",
            extra={"error_code": exc.code},
        )
    headers = {"Allow": ALLOWED_METHODS} if isinstance(exc, InvalidMethod) else None
    return error_response(exc.status_code, exc.code, exc.detail, headers=headers)


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """
    Map router-level 404/405 onto the reminder error taxonomy.

    Unknown paths and wrong methods never reach the route, so Starlette raises them.
    """
    if exc.status_code == status.HTTP_404_NOT_FOUND and request.method != "POST":
        # Method is checked before path
        error = InvalidMethod(f"Only POST requests are supported (got {request.method})")
    elif exc.status_code == status.HTTP_404_NOT_FOUND:
        error = InvalidPath(f"Only POST requests to /addReminder are supported (got {request.url.path})")
    elif exc.status_code == status.HTTP_405_METHOD_NOT_ALLOWED:
        error = InvalidMethod(f"Only POST requests are supported (got {request.method})")
    else:
        return error_response(exc.status_code, "http_error", str(exc.detail), headers=exc.headers)
    return await reminder_error_handler(request, error)


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        f"Unhandled error on {request.method} {request.url.path}: {exc}",
        exc_info=exc,
    )
    # Runs outside the middleware stack, so CORS headers are added here
    return error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "internal_error",
        "Internal server error",
        headers=CORS_RESPONSE_HEADERS,
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ReminderDispatchError, reminder_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
