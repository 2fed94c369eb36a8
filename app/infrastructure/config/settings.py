"""Application settings."""

import json
from typing import Annotated, Any

from pydantic import field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration settings."""

    debug_mode: bool = False

    # Outbound mail relay
    smtp_host: str = ""
    smtp_port: int = 587
    smtp_secure: bool = False  # True for implicit TLS (465), False for STARTTLS
    smtp_user: str = ""
    smtp_pass: str = ""
    smtp_from: str = ""  # Falls back to smtp_user
    notification_email: str = ""  # Used when the assigned preparer has no email
    # Comma-separated (a@x.com,b@x.com) or a JSON array
    oversight_emails: Annotated[list[str], NoDecode] = ["taxgenius.tax@gmail.com"]

    # Discord
    discord_webhook_url: str = ""
    discord_style: str = "embed"  # embed or compact

    # Telegram
    telegram_chat_id: str = ""
    telegram_bot_token: str = ""
    telegram_bot_token_es: str = ""
    telegram_parse_mode: str = "Markdown"
    telegram_timeout_seconds: float = 30.0
    telegram_max_attempts: int = 3
    telegram_backoff_base_seconds: float = 1.0  # Delays: 2s, 4s, 8s, ...

    http_timeout_seconds: float = 10.0

    # Preparer routing
    preparers_path: str = ""  # Defaults to data/preparers.json
    default_preparer_code: str = ""  # Overrides the file's defaultCode

    admin_api_key: str = ""

    # Persistence
    lead_repository: str = "in_memory"  # in_memory or sql
    database_url: str = ""  # Required when lead_repository=sql

    # Uploads
    uploads_dir: str = "uploads"
    public_base_url: str = ""  # Defaults to the request base URL
    max_upload_bytes: int = 10 * 1024 * 1024

    # Submission rate limiting
    rate_limit_enabled: bool = True
    rate_limit_max: int = 10
    rate_limit_window_seconds: int = 900  # 15 minutes
    redis_url: str = "redis://localhost:6379/0"

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        env_prefix="",
    )

    @field_validator("oversight_emails", mode="before")
    @classmethod
    def _parse_oversight_emails(cls, value: Any) -> Any:
        """Accept OVERSIGHT_EMAILS as a comma-separated list or a JSON array."""
        if not isinstance(value, str):
            return value
        value = value.strip()
        if value.startswith("["):
            return json.loads(value)
        return [address.strip() for address in value.split(",") if address.strip()]


settings = Settings()
