"""FastAPI dependencies for API routes."""

from collections.abc import AsyncIterator
from datetime import datetime

import httpx
from fastapi import Depends

from app.core.config import Settings, get_settings
from app.services.integrations.http_client import create_httpx_client
from app.utils.datetime_utils import utc_now


async def get_http_client(
    settings: Settings = Depends(get_settings),
) -> AsyncIterator[httpx.AsyncClient]:
    """Per-request AsyncClient for provider calls, closed when the response is sent."""
    async with create_httpx_client(settings.mailgun_timeout_seconds) as client:
        yield client


def get_request_time() -> datetime:
    """
    Request-receipt time, read once per request.

    Everything derived from "now" during the request uses this value.
    """
    return utc_now()
