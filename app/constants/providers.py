"""
Provider constants for outbound email.

Use these instead of string literals to avoid drift and typos.
"""

PROVIDER_MAILGUN = "mailgun"

# Mailgun authenticates with Basic auth using this fixed username
MAILGUN_AUTH_USERNAME = "api"

# Mailgun form field names that cannot be Python attribute names
MAILGUN_FIELD_FROM = "from"
MAILGUN_FIELD_REPLY_TO = "h:Reply-To"
MAILGUN_FIELD_DELIVERY_TIME = "o:deliverytime"
MAILGUN_FIELD_TEST_MODE = "o:testmode"
