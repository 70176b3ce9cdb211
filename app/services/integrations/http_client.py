"""
HTTP client helper with standardized timeout configuration.

Ensures all outbound HTTP calls have explicit timeouts so a slow provider
cannot hold a request open indefinitely.
"""

import httpx

DEFAULT_TIMEOUT_SECONDS = 10.0


def get_httpx_timeout(seconds: float = DEFAULT_TIMEOUT_SECONDS) -> httpx.Timeout:
    """
    Get standardized timeout configuration for HTTP clients.

    Returns:
        httpx.Timeout with `seconds` for reads and a tighter cap on connect/write/pool
    """
    short = min(5.0, seconds)
    return httpx.Timeout(
        seconds,  # Default timeout for all operations
        connect=short,  # Time to establish connection
        read=seconds,  # Time to read response
        write=short,  # Time to write request
        pool=short,  # Time to get connection from pool
    )


def create_httpx_client(
    seconds: float = DEFAULT_TIMEOUT_SECONDS,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """
    Create an httpx.AsyncClient with standardized timeout configuration.

    `transport` lets tests swap in httpx.MockTransport.
    """
    return httpx.AsyncClient(timeout=get_httpx_timeout(seconds), transport=transport)
