import logging
from datetime import datetime

import httpx
from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import PlainTextResponse
from pydantic import ValidationError

from app.api.dependencies import get_http_client, get_request_time
from app.api.errors import MalformedBody, UnsupportedContentType
from app.core.config import Settings, get_settings
from app.schemas.reminders import ReminderRequest
from app.services.messaging.mailgun import send_scheduled_email
from app.services.reminders import build_reminder_email, parse_action, resolve_action

logger = logging.getLogger(__name__)

router = APIRouter()

REMINDER_PATH = "/addReminder"
REMINDER_SCHEDULED = "Reminder scheduled"
JSON_CONTENT_TYPE = "application/json"


def require_json_content_type(content_type: str) -> None:
    """Reject anything but JSON before the body is read; there is no best-effort parse."""
    if JSON_CONTENT_TYPE not in content_type.lower():
        raise UnsupportedContentType(f"Unsupported content type: {content_type or '(none)'}")


def parse_reminder_request(raw_body: bytes) -> ReminderRequest:
    """
    Parse and validate the JSON body.

    An unknown action is UnsupportedAction; every other problem (invalid JSON,
    non-object body, missing or extra keys, non-string email) is MalformedBody.
    """
    try:
        return ReminderRequest.model_validate_json(raw_body)
    except ValidationError as e:
        errors = e.errors(include_url=False)
        for error in errors:
            if error["loc"] == ("action",) and error["type"] != "missing":
                parse_action(error["input"])  # raises UnsupportedAction
        summary = "; ".join(
            f"{'.'.join(str(part) for part in error['loc']) or 'body'}: {error['msg']}"
            for error in errors
        )
        raise MalformedBody(f"Invalid request body: {summary}") from None


@router.post(REMINDER_PATH, status_code=status.HTTP_201_CREATED, response_class=PlainTextResponse)
async def add_reminder(
    request: Request,
    settings: Settings = Depends(get_settings),
    client: httpx.AsyncClient = Depends(get_http_client),
    now: datetime = Depends(get_request_time),
):
    """
    Schedule a reminder email for a user action.

    Body: {"action": "withdraw" | "activate", "email": "<address>"}
    Returns 201 "Reminder scheduled" once Mailgun has accepted the email.
    """
    require_json_content_type(request.headers.get("content-type", ""))
    raw_body = await request.body()
    reminder_request = parse_reminder_request(raw_body)

    reminder = resolve_action(reminder_request.action, now)
    email = build_reminder_email(reminder, reminder_request.email, settings)
    result = await send_scheduled_email(email, settings, client=client)

    logger.info(
        f"Reminder scheduled: action={reminder.action.value}, deliver_at={email.delivery_time}",
        extra={"action": reminder.action.value, "message_id": result.get("message_id")},
    )
    return PlainTextResponse(REMINDER_SCHEDULED, status_code=status.HTTP_201_CREATED)
