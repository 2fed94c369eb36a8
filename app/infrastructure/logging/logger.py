"""Structured logger for observability."""

import logging
from typing import Any, Optional

# Configure root logger with JSON-like structured format
_logger = logging.getLogger("tax_lead_intake")
_logger.setLevel(logging.INFO)

# Create console handler if not exists
if not _logger.handlers:
    handler = logging.StreamHandler()
    handler.setLevel(logging.INFO)
    formatter = logging.Formatter(
        "%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    handler.setFormatter(formatter)
    _logger.addHandler(handler)


def log_event(
    submission_id: str,
    component: str,
    level: int = logging.INFO,
    **kwargs: Any,
) -> None:
    """
    Log structured event for a lead submission.

    Args:
        submission_id: Submission identifier (UUID string)
        component: Component name (e.g., 'http', 'submit', 'dispatch', 'telegram')
        level: Log level (default: INFO)
        **kwargs: Additional structured fields to log
    """
    fields = {
        "submission_id": submission_id,
        "component": component,
    }
    fields.update(kwargs)

    # Format as key=value pairs for readability
    log_parts = [f"{k}={v!r}" for k, v in fields.items()]
    log_message = " | ".join(log_parts)

    _logger.log(level, log_message)


def log_channel_outcome(
    submission_id: str,
    channel: str,
    success: bool,
    skipped: bool = False,
    error: Optional[str] = None,
    **kwargs: Any,
) -> None:
    """
    Log the delivery outcome of a single notification channel.

    Skipped channels are a configuration choice and are logged at INFO;
    failures are logged at WARNING.

    Args:
        submission_id: Submission identifier
        channel: Channel name ('email', 'discord', 'telegram')
        success: Whether the channel delivered the notification
        skipped: Whether the channel was disabled by configuration
        error: Optional error detail
        **kwargs: Additional fields
    """
    fields: dict[str, Any] = {"channel": channel, "success": success}
    if skipped:
        fields["skipped"] = True
    if error is not None:
        fields["error"] = error
    fields.update(kwargs)

    level = logging.INFO if success or skipped else logging.WARNING
    log_event(submission_id, component="notification", level=level, **fields)


def log_dispatch_summary(
    submission_id: str,
    succeeded: int,
    total: int,
    **kwargs: Any,
) -> None:
    """
    Log the aggregated delivery summary of a dispatch.

    Args:
        submission_id: Submission identifier
        succeeded: Number of channels that delivered
        total: Number of channels attempted
        **kwargs: Additional fields
    """
    log_event(
        submission_id,
        component="dispatch",
        delivered=f"{succeeded}/{total}",
        **kwargs,
    )


# Export logger instance for direct use
logger = _logger
