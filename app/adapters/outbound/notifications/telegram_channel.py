"""Telegram bot notification channel adapter."""

import asyncio
import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, Optional, Sequence

import httpx

from app.application.dtos.lead import LeadRecord
from app.application.dtos.notification import NotificationOutcome
from app.application.formatters.telegram_formatter import format_telegram
from app.application.ports.notification_channel import NotificationChannel
from app.infrastructure.config.settings import settings
from app.infrastructure.logging.logger import log_event

TELEGRAM_API_BASE = "https://api.telegram.org"


@dataclass(frozen=True)
class TelegramBot:
    """A bot identity the notification is sent through."""

    name: str
    token: str


@dataclass(frozen=True)
class BotResult:
    """Result of delivering through one bot."""

    bot: str
    success: bool
    attempts: int
    error: Optional[str] = None


class TelegramChannel(NotificationChannel):
    """
    Sends lead notifications to one chat through several bots.

    Bots are tried concurrently and the channel succeeds when at least one of
    them delivers. Each bot gets a bounded number of attempts with exponential
    backoff; every attempt is cut off after a timeout.
    """

    def __init__(
        self,
        bots: Sequence[TelegramBot],
        chat_id: Optional[str] = None,
        parse_mode: Optional[str] = None,
        timeout_seconds: Optional[float] = None,
        max_attempts: Optional[int] = None,
        backoff_base_seconds: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        """
        Initialize Telegram channel.

        Args:
            bots: Bot identities (bots without a token are ignored)
            chat_id: Destination chat (defaults to settings.telegram_chat_id)
            parse_mode: Telegram parse mode (defaults to settings.telegram_parse_mode)
            timeout_seconds: Per-attempt timeout (defaults to settings.telegram_timeout_seconds)
            max_attempts: Attempts per bot (defaults to settings.telegram_max_attempts)
            backoff_base_seconds: Backoff base, delay is base * 2**attempt
            transport: Optional httpx transport (used by tests)
            sleep: Coroutine used to wait between attempts
        """
        self._bots = tuple(bot for bot in bots if bot.token)
        self._chat_id = chat_id if chat_id is not None else settings.telegram_chat_id
        self._parse_mode = parse_mode or settings.telegram_parse_mode
        self._timeout = timeout_seconds or settings.telegram_timeout_seconds
        self._max_attempts = max(1, max_attempts or settings.telegram_max_attempts)
        self._backoff_base = (
            backoff_base_seconds
            if backoff_base_seconds is not None
            else settings.telegram_backoff_base_seconds
        )
        self._transport = transport
        self._sleep = sleep

    @property
    def name(self) -> str:
        return "telegram"

    def backoff_delay(self, attempt: int) -> float:
        """Delay after a failed attempt (1-based): 2s, 4s, 8s with the default base."""
        return self._backoff_base * (2**attempt)

    async def send(self, lead: LeadRecord) -> NotificationOutcome:
        """
        Deliver the lead through every configured bot.

        Args:
            lead: Lead record to deliver

        Returns:
            NotificationOutcome (delivered if at least one bot succeeded)
        """
        if not self._chat_id:
            return NotificationOutcome.disabled(self.name, "Telegram chat ID not configured")
        if not self._bots:
            return NotificationOutcome.disabled(self.name, "No Telegram bot token configured")

        body = {
            "chat_id": self._chat_id,
            "text": format_telegram(lead),
            "parse_mode": self._parse_mode,
            "disable_web_page_preview": True,
        }

        # wait_for owns the per-attempt limit; httpx must not cut in first
        async with httpx.AsyncClient(
            timeout=httpx.Timeout(None), transport=self._transport
        ) as client:
            results = await asyncio.gather(
                *(self._send_with_retry(client, bot, body, lead.submission_id) for bot in self._bots)
            )

        succeeded = [result for result in results if result.success]
        if succeeded:
            log_event(
                lead.submission_id,
                component=self.name,
                bots_delivered=f"{len(succeeded)}/{len(results)}",
            )
            return NotificationOutcome.delivered(self.name)

        errors = "; ".join(f"{result.bot}: {result.error}" for result in results)
        return NotificationOutcome.failed(self.name, f"All Telegram bots failed ({errors})")

    async def _send_with_retry(
        self,
        client: httpx.AsyncClient,
        bot: TelegramBot,
        body: dict,
        submission_id: str,
    ) -> BotResult:
        """
        Post the message through one bot, retrying transient failures.

        Timeouts, transport errors, 429 and 5xx responses are retried; other
        error responses are final.
        """
        url = f"{TELEGRAM_API_BASE}/bot{bot.token}/sendMessage"
        error: Optional[str] = None

        for attempt in range(1, self._max_attempts + 1):
            retryable = True
            try:
                response = await asyncio.wait_for(client.post(url, json=body), self._timeout)
            except asyncio.TimeoutError:
                error = f"timed out after {self._timeout}s"
            except httpx.HTTPError as e:
                error = f"request failed: {type(e).__name__}: {str(e)}"
            else:
                if response.is_success:
                    return BotResult(bot=bot.name, success=True, attempts=attempt)
                error = f"{response.status_code} {_describe(response)}"
                retryable = response.status_code == 429 or response.status_code >= 500

            log_event(
                submission_id,
                component=self.name,
                level=logging.WARNING,
                bot=bot.name,
                attempt=f"{attempt}/{self._max_attempts}",
                error=error,
            )

            if not retryable:
                return BotResult(bot=bot.name, success=False, attempts=attempt, error=error)
            if attempt < self._max_attempts:
                await self._sleep(self.backoff_delay(attempt))

        return BotResult(bot=bot.name, success=False, attempts=self._max_attempts, error=error)


def _describe(response: httpx.Response) -> str:
    """Telegram error description from the response body, if any."""
    try:
        data = response.json()
    except ValueError:
        return response.text[:200]
    if isinstance(data, dict):
        return str(data.get("description", ""))
    return ""
