"""
Mailgun email service with dry-run mode for development.

Submits a single scheduled email per call. No retries: a non-2xx status or a
transport error is reported as ProviderDispatchFailure and the caller decides.
"""

import logging
from urllib.parse import quote

import httpx

from app.api.errors import ProviderDispatchFailure
from app.constants.providers import MAILGUN_AUTH_USERNAME, PROVIDER_MAILGUN
from app.core.config import Settings
from app.schemas.reminders import OutboundEmail
from app.services.integrations.http_client import create_httpx_client

logger = logging.getLogger(__name__)

# Same unreserved set as JavaScript's encodeURIComponent (quote adds A-Za-z0-9_.-~)
_FORM_SAFE_CHARS = "!*'()"


def encode_form_component(value: str) -> str:
    return quote(value, safe=_FORM_SAFE_CHARS)


def encode_form_body(fields: dict[str, str]) -> str:
    """
    Encode fields as application/x-www-form-urlencoded.

    Keys and values are percent-encoded independently (spaces become %20) and joined with '&'.
    """
    return "&".join(
        f"{encode_form_component(key)}={encode_form_component(value)}"
        for key, value in fields.items()
    )


async def send_scheduled_email(
    email: OutboundEmail,
    settings: Settings,
    client: httpx.AsyncClient | None = None,
) -> dict:
    """
    Send an email through Mailgun, held until its o:deliverytime.

    Args:
        email: Fully built outbound email
        settings: Provides the API base URL, API key and dry-run flag
        client: Shared AsyncClient; a short-lived one is created when omitted

    Returns:
        dict with status, provider status code and Mailgun message id (None in dry-run)

    Raises:
        ProviderDispatchFailure: Mailgun answered non-2xx or could not be reached
    """
    fields = email.to_form_fields()

    if settings.mailgun_dry_run:
        logger.info(
            f"[DRY-RUN] Would schedule email to {email.to} at {email.delivery_time}: {email.text}"
        )
        return {"status": "dry_run", "status_code": None, "message_id": None, "to": email.to}

    body = encode_form_body(fields)
    headers = {"Content-Type": "application/x-www-form-urlencoded"}
    auth = httpx.BasicAuth(MAILGUN_AUTH_USERNAME, settings.mailgun_api_key)

    try:
        if client is None:
            async with create_httpx_client(settings.mailgun_timeout_seconds) as own_client:
                response = await own_client.post(
                    settings.mailgun_messages_url, content=body, headers=headers, auth=auth
                )
        else:
            response = await client.post(
                settings.mailgun_messages_url, content=body, headers=headers, auth=auth
            )
    except httpx.HTTPError as e:
        logger.error(f"Failed to reach {PROVIDER_MAILGUN}: {e}")
        raise ProviderDispatchFailure(f"Error sending email: {e}") from e

    logger.info(
        f"Email response: {response.status_code}",
        extra={"provider": PROVIDER_MAILGUN, "status_code": response.status_code},
    )
    if not response.is_success:
        raise ProviderDispatchFailure(
            f"Error sending email: {response.reason_phrase}",
            provider_status=response.status_code,
        )

    return {
        "status": "scheduled",
        "status_code": response.status_code,
        "message_id": _message_id(response),
        "to": email.to,
    }


def _message_id(response: httpx.Response) -> str | None:
    # Mailgun replies {"id": "<...>", "message": "Queued. Thank you."}; the body is informational only
    try:
        data = response.json()
    except ValueError:
        return None
    return data.get("id") if isinstance(data, dict) else None
