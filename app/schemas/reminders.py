"""
Reminder API request schema and the outbound Mailgun payload.
"""

from pydantic import BaseModel, ConfigDict, Field, StrictStr

from app.constants.actions import ReminderAction
from app.constants.providers import (
    MAILGUN_FIELD_DELIVERY_TIME,
    MAILGUN_FIELD_FROM,
    MAILGUN_FIELD_REPLY_TO,
    MAILGUN_FIELD_TEST_MODE,
)


class ReminderRequest(BaseModel):
    """Request schema for POST /addReminder."""

    model_config = ConfigDict(extra="forbid")

    action: ReminderAction
    email: StrictStr  # Passed through to Mailgun as-is; the provider rejects bad addresses


class OutboundEmail(BaseModel):
    """
    Scheduled email handed to Mailgun.

    Field aliases are the Mailgun form field names; use to_form_fields() for the wire shape.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    sender: str = Field(alias=MAILGUN_FIELD_FROM)
    to: str
    subject: str
    text: str
    delivery_time: str = Field(alias=MAILGUN_FIELD_DELIVERY_TIME)  # RFC-1123
    html: str | None = None
    cc: str | None = None
    bcc: str | None = None
    reply_to: str | None = Field(default=None, alias=MAILGUN_FIELD_REPLY_TO)
    test_mode: bool | None = Field(default=None, alias=MAILGUN_FIELD_TEST_MODE)

    def to_form_fields(self) -> dict[str, str]:
        """Mailgun field name -> string value, in declaration order, unset fields omitted."""
        fields = self.model_dump(by_alias=True, exclude_none=True)
        return {
            key: ("true" if value else "false") if isinstance(value, bool) else str(value)
            for key, value in fields.items()
        }
