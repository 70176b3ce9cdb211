"""
Reminder service: resolve an action into a scheduled reminder and build the email for it.

Handles reminders for:
- withdraw (balance waiting to be withdrawn, sent 3 days later)
- activate (stake waiting to be activated, sent 1 day later)
"""

import logging
from dataclasses import dataclass
from datetime import datetime

from app.api.errors import UnsupportedAction
from app.constants.actions import SUPPORTED_ACTIONS, ReminderAction
from app.core.config import Settings
from app.schemas.reminders import OutboundEmail
from app.utils.datetime_utils import to_rfc1123

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScheduledReminder:
    action: ReminderAction
    message: str
    send_at: datetime


def parse_action(value: object) -> ReminderAction:
    """Map a raw action value onto ReminderAction; anything unknown is UnsupportedAction."""
    if isinstance(value, ReminderAction):
        return value
    try:
        return ReminderAction(value)
    except (TypeError, ValueError):
        raise UnsupportedAction(
            f"Unsupported action: {value!r} (expected one of {', '.join(SUPPORTED_ACTIONS)})"
        ) from None


def resolve_action(action: ReminderAction | str, now: datetime) -> ScheduledReminder:
    """
    Resolve action into its reminder text and send time.

    Args:
        action: ReminderAction or its string value
        now: Request-receipt time, read once by the caller

    Returns:
        ScheduledReminder with send_at = now + the action's delay

    Raises:
        UnsupportedAction: action is not a known ReminderAction
    """
    action = parse_action(action)
    send_at = now + action.delay
    logger.debug(f"Resolved {action.value} reminder, send_at={send_at.isoformat()}")
    return ScheduledReminder(action=action, message=action.message, send_at=send_at)


def build_reminder_email(reminder: ScheduledReminder, to: str, settings: Settings) -> OutboundEmail:
    """Build the Mailgun email for a resolved reminder."""
    return OutboundEmail(
        sender=settings.reminder_sender,
        to=to,
        subject=settings.reminder_subject,
        text=reminder.message,
        delivery_time=to_rfc1123(reminder.send_at),
        reply_to=settings.mailgun_reply_to,
        test_mode=True if settings.mailgun_test_mode else None,
    )
