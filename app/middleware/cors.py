"""
CORS middleware for browser clients.

Answers OPTIONS on any path without touching the routes:
- a full pre-flight (Origin + Access-Control-Request-Method + Access-Control-Request-Headers)
  gets the permissive Access-Control-Allow-* headers
- any other OPTIONS gets a plain Allow header
Every other response gets Access-Control-Allow-Origin so the browser can read it.
"""

import logging
from collections.abc import Callable

from fastapi import Request, Response, status
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger(__name__)

ALLOW_ORIGIN = "*"
ALLOW_METHODS = "GET, HEAD, POST, OPTIONS"
ALLOW_HEADERS = "Content-Type, Client-Key"
MAX_AGE_SECONDS = 86400

CORS_RESPONSE_HEADERS = {"Access-Control-Allow-Origin": ALLOW_ORIGIN}

PREFLIGHT_REQUEST_HEADERS = (
    "Origin",
    "Access-Control-Request-Method",
    "Access-Control-Request-Headers",
)


def is_preflight(request: Request) -> bool:
    return request.method == "OPTIONS" and all(
        request.headers.get(name) is not None for name in PREFLIGHT_REQUEST_HEADERS
    )


def preflight_response() -> Response:
    return Response(
        status_code=status.HTTP_204_NO_CONTENT,
        headers={
            **CORS_RESPONSE_HEADERS,
            "Access-Control-Allow-Methods": ALLOW_METHODS,
            "Access-Control-Allow-Headers": ALLOW_HEADERS,
            "Access-Control-Max-Age": str(MAX_AGE_SECONDS),
        },
    )


def options_response() -> Response:
    return Response(status_code=status.HTTP_204_NO_CONTENT, headers={"Allow": ALLOW_METHODS})


class PreflightMiddleware(BaseHTTPMiddleware):
    """Short-circuit OPTIONS requests and stamp CORS headers on everything else."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        if request.method == "OPTIONS":
            if is_preflight(request):
                logger.debug(f"CORS pre-flight for {request.url.path}")
                return preflight_response()
            return options_response()

        response = await call_next(request)
        response.headers.update(CORS_RESPONSE_HEADERS)
        return response
