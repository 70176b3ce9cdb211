"""
Logging setup: one stream handler on the root logger, correlation ID on every record.
"""

import logging

from app.middleware.correlation_id import get_correlation_id

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(correlation_id)s] %(message)s"


class CorrelationIdFilter(logging.Filter):
    """Attach the current request's correlation ID (or '-') to each record."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "correlation_id"):
            record.correlation_id = get_correlation_id() or "-"
        return True


def configure_logging(level: str = "INFO") -> None:
    root = logging.getLogger()
    root.setLevel(level.upper())
    # Idempotent: app reloads in tests must not stack handlers
    for handler in root.handlers:
        if getattr(handler, "_reminder_dispatcher", False):
            return

    handler = logging.StreamHandler()
    handler._reminder_dispatcher = True
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler.addFilter(CorrelationIdFilter())
    root.addHandler(handler)
