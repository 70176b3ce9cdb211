# Messaging: outbound email through Mailgun
# Re-export so "from app.services.messaging import ..." works for callers.

from app.services.messaging.mailgun import encode_form_body, send_scheduled_email

__all__ = [
    "encode_form_body",
    "send_scheduled_email",
]
