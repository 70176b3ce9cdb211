from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
        validate_assignment=True,
    )

    app_env: str = "dev"
    log_level: str = "INFO"

    # Mailgun (scheduled reminder emails)
    mailgun_api_key: str
    mailgun_api_base_url: str  # e.g. https://api.mailgun.net/v3/mg.example.com
    mailgun_timeout_seconds: float = 10.0
    mailgun_dry_run: bool = False  # When true: log the email instead of calling Mailgun
    mailgun_test_mode: bool = False  # Sends o:testmode so Mailgun accepts but does not deliver
    mailgun_reply_to: str | None = None  # Optional h:Reply-To header

    # Reminder email envelope
    reminder_sender: str = "noreply@churrito.fi"
    reminder_subject: str = "Reminder from ChurritoFi!"

    @property
    def mailgun_messages_url(self) -> str:
        return f"{self.mailgun_api_base_url.rstrip('/')}/messages"


# Placeholder keys used in local .env files and tests; never valid in production
PLACEHOLDER_API_KEYS = {"", "test_key", "changeme"}


def validate_production_settings(settings: Settings) -> list[str]:
    """
    Collect configuration problems that must block a production start.

    Returns an empty list outside production or when everything is in order.
    """
    if settings.app_env != "production":
        return []

    errors = []
    if settings.mailgun_api_key in PLACEHOLDER_API_KEYS:
        errors.append(
            "MAILGUN_API_KEY is required in production. "
            "Set MAILGUN_API_KEY to the Mailgun sending key for your domain."
        )
    if not settings.mailgun_api_base_url.startswith("https://"):
        errors.append(
            "MAILGUN_API_BASE_URL must use https in production "
            f"(got '{settings.mailgun_api_base_url}')."
        )
    if settings.mailgun_dry_run:
        errors.append(
            "MAILGUN_DRY_RUN must be False in production. "
            "Set MAILGUN_DRY_RUN=false or remove it from environment variables."
        )
    return errors


@lru_cache
def get_settings() -> Settings:
    """
    Settings will load from environment variables or .env file.
    Required fields raise ValidationError if missing (fail-fast).

    Routes receive settings through this dependency so tests can override it.
    """
    return Settings()
