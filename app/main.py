import logging

from fastapi import FastAPI

from app.api.errors import register_exception_handlers
from app.api.reminders import router as reminders_router
from app.core.config import get_settings, validate_production_settings
from app.core.logging import configure_logging
from app.middleware.correlation_id import CorrelationIdMiddleware
from app.middleware.cors import PreflightMiddleware

logger = logging.getLogger(__name__)

# Single-route service: no interactive docs or schema endpoints
app = FastAPI(
    title="Reminder Dispatcher",
    docs_url=None,
    redoc_url=None,
    openapi_url=None,
    redirect_slashes=False,  # /addReminder/ is an unknown path, not a redirect
)

# Last added runs first: correlation ID is set before CORS short-circuits OPTIONS
app.add_middleware(PreflightMiddleware)
app.add_middleware(CorrelationIdMiddleware)

register_exception_handlers(app)


@app.on_event("startup")
async def startup_event():
    """Run startup checks and validation."""
    # Missing MAILGUN_API_KEY / MAILGUN_API_BASE_URL raise ValidationError here (fail-fast)
    settings = get_settings()
    configure_logging(settings.log_level)

    production_errors = validate_production_settings(settings)
    if production_errors:
        error_message = (
            "Production environment validation failed:\n\n"
            + "\n".join(f"  - {error}" for error in production_errors)
            + "\n\n"
            "The application cannot start in production with these missing or invalid settings. "
            "Please fix the configuration and restart."
        )
        logger.error(error_message)
        raise RuntimeError(error_message)

    # Log configuration summary (no secrets)
    logger.info(
        "Startup: Configuration loaded - "
        f"Environment: {settings.app_env}, "
        f"Mailgun endpoint: {settings.mailgun_messages_url}, "
        f"Mailgun dry-run: {settings.mailgun_dry_run}, "
        f"Mailgun test mode: {settings.mailgun_test_mode}"
    )

    if settings.mailgun_dry_run:
        logger.warning("MAILGUN DRY-RUN ENABLED - reminder emails are logged, not sent")


app.include_router(reminders_router, tags=["reminders"])
