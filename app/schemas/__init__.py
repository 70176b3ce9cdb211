"""
Pydantic schemas for API request validation and provider payloads.
"""

from app.schemas.reminders import OutboundEmail, ReminderRequest

__all__ = [
    "ReminderRequest",
    "OutboundEmail",
]
