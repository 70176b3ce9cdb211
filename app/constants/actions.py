"""
Reminder actions and the canned message/delay each one schedules.

The set is closed: anything that is not a ReminderAction is rejected upstream.
"""

from datetime import timedelta
from enum import Enum


class ReminderAction(str, Enum):
    """User action that triggers a reminder email."""

    WITHDRAW = "withdraw"
    ACTIVATE = "activate"

    @property
    def message(self) -> str:
        return _ACTION_DETAILS[self][0]

    @property
    def delay(self) -> timedelta:
        return _ACTION_DETAILS[self][1]


_ACTION_DETAILS: dict[ReminderAction, tuple[str, timedelta]] = {
    ReminderAction.WITHDRAW: (
        "Hey! Your CELO is waiting withdrawal. "
        "Make sure to withdraw it to your account, cheers.",
        timedelta(days=3),
    ),
    ReminderAction.ACTIVATE: (
        "Hey! Your CELO is waiting to be activated. "
        "You need to activate your stake for it to start earning for you. "
        "Make sure to activate your CELO soon, cheers.",
        timedelta(days=1),
    ),
}

SUPPORTED_ACTIONS = tuple(action.value for action in ReminderAction)
