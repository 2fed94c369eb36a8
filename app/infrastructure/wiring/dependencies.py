"""Dependency injection factory functions."""

from app.adapters.outbound.lead import InMemoryLeadRepository, SqlLeadRepository
from app.adapters.outbound.notifications.discord_channel import DiscordChannel
from app.adapters.outbound.notifications.email_channel import EmailChannel
from app.adapters.outbound.notifications.telegram_channel import TelegramBot, TelegramChannel
from app.adapters.outbound.preparers.static_preparer_directory import load_preparer_directory
from app.adapters.outbound.rate_limit.noop_rate_limiter import NoOpRateLimiter
from app.adapters.outbound.rate_limit.redis_rate_limiter import RedisRateLimiter
from app.adapters.outbound.uploads.local_upload_storage import LocalUploadStorage
from app.application.ports.lead_repository import LeadRepository
from app.application.ports.notification_channel import NotificationChannel
from app.application.ports.preparer_directory import PreparerDirectory
from app.application.ports.rate_limiter import RateLimiter
from app.application.ports.upload_storage import UploadStorage
from app.application.use_cases.dispatch_lead_notifications import NotificationDispatcher
from app.application.use_cases.submit_lead_use_case import SubmitLeadUseCase
from app.infrastructure.config.settings import settings


def create_preparer_directory() -> PreparerDirectory:
    """
    Factory function to load the preparer directory once at startup.

    Returns:
        PreparerDirectory instance
    """
    return load_preparer_directory(
        settings.preparers_path or None,
        default_code=settings.default_preparer_code or None,
    )


def create_lead_repository() -> LeadRepository:
    """
    Factory function to create lead repository.

    Returns:
        LeadRepository instance
    """
    if settings.lead_repository == "sql":
        if not settings.database_url:
            raise ValueError("DATABASE_URL is required when LEAD_REPOSITORY=sql")
        return SqlLeadRepository()
    else:
        return InMemoryLeadRepository()


def create_upload_storage() -> UploadStorage:
    """
    Factory function to create upload storage.

    Returns:
        UploadStorage instance
    """
    return LocalUploadStorage()


def create_rate_limiter() -> RateLimiter:
    """
    Factory function to create the submission rate limiter.

    Returns:
        RateLimiter instance (Redis or NoOp)
    """
    if not settings.rate_limit_enabled or not settings.redis_url:
        return NoOpRateLimiter()

    return RedisRateLimiter(
        settings.redis_url,
        max_requests=settings.rate_limit_max,
        window_seconds=settings.rate_limit_window_seconds,
    )


def create_notification_channels() -> list[NotificationChannel]:
    """
    Factory function to create the notification channels.

    Channels without credentials are still created; they report themselves
    as disabled when dispatched.

    Returns:
        Email, Discord and Telegram channels
    """
    telegram_bots = [
        TelegramBot(name="English", token=settings.telegram_bot_token),
        TelegramBot(name="Spanish", token=settings.telegram_bot_token_es),
    ]
    return [
        EmailChannel(),
        DiscordChannel(),
        TelegramChannel(telegram_bots),
    ]


def create_notification_dispatcher() -> NotificationDispatcher:
    """
    Factory function to create the notification dispatcher.

    Returns:
        NotificationDispatcher instance
    """
    return NotificationDispatcher(create_notification_channels())


def create_submit_lead_use_case(
    preparer_directory: PreparerDirectory,
    lead_repository: LeadRepository,
) -> SubmitLeadUseCase:
    """
    Factory function to create SubmitLeadUseCase with dependencies.

    Args:
        preparer_directory: Shared preparer directory
        lead_repository: Shared lead repository

    Returns:
        SubmitLeadUseCase instance
    """
    return SubmitLeadUseCase(preparer_directory, lead_repository)
