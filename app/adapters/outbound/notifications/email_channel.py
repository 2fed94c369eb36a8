"""SMTP email notification channel adapter."""

import asyncio
import smtplib
import ssl
from email.message import EmailMessage
from pathlib import Path
from typing import Iterable, Optional

from app.application.dtos.lead import LeadRecord
from app.application.dtos.notification import EmailPayload, NotificationOutcome
from app.application.formatters.email_formatter import format_email
from app.application.ports.notification_channel import NotificationChannel
from app.infrastructure.config.settings import settings
from app.infrastructure.logging.logger import log_event


class EmailChannel(NotificationChannel):
    """Sends lead notifications to the assigned preparer through an SMTP relay."""

    def __init__(
        self,
        host: Optional[str] = None,
        port: Optional[int] = None,
        secure: Optional[bool] = None,
        username: Optional[str] = None,
        password: Optional[str] = None,
        from_address: Optional[str] = None,
        notification_email: Optional[str] = None,
        oversight_emails: Optional[Iterable[str]] = None,
        timeout_seconds: Optional[float] = None,
    ) -> None:
        """
        Initialize email channel.

        Args:
            host: SMTP host (defaults to settings.smtp_host)
            port: SMTP port (defaults to settings.smtp_port)
            secure: Implicit TLS when True, STARTTLS otherwise (defaults to settings.smtp_secure)
            username: SMTP user (defaults to settings.smtp_user)
            password: SMTP password (defaults to settings.smtp_pass)
            from_address: Sender (defaults to settings.smtp_from, then the SMTP user)
            notification_email: Recipient used when the preparer has no email
            oversight_emails: Addresses copied on every lead
            timeout_seconds: Socket timeout (defaults to settings.http_timeout_seconds)
        """
        self._host = host if host is not None else settings.smtp_host
        self._port = port or settings.smtp_port
        self._secure = settings.smtp_secure if secure is None else secure
        self._username = username if username is not None else settings.smtp_user
        self._password = password if password is not None else settings.smtp_pass
        self._from_address = from_address or settings.smtp_from or self._username
        self._notification_email = (
            notification_email if notification_email is not None else settings.notification_email
        )
        self._oversight_emails = tuple(
            oversight_emails if oversight_emails is not None else settings.oversight_emails
        )
        self._timeout = timeout_seconds or settings.http_timeout_seconds

    @property
    def name(self) -> str:
        return "email"

    async def send(self, lead: LeadRecord) -> NotificationOutcome:
        """
        Format and send the lead email.

        Args:
            lead: Lead record to deliver

        Returns:
            NotificationOutcome (disabled when no relay or recipient is configured)
        """
        payload = format_email(lead, self._notification_email, self._oversight_emails)
        if payload.to is None:
            return NotificationOutcome.disabled(self.name, "No notification email configured")
        if not self._host:
            return NotificationOutcome.disabled(self.name, "SMTP host not configured")

        try:
            # Attachments are read here and may have gone missing since formatting
            message = self.build_message(payload)
            await asyncio.to_thread(self._deliver, message)
        except (smtplib.SMTPException, OSError) as e:
            return NotificationOutcome.failed(self.name, f"SMTP delivery failed: {str(e)}")

        log_event(
            lead.submission_id,
            component=self.name,
            to=payload.to,
            cc=list(payload.cc),
            attachments=len(payload.attachments),
        )
        return NotificationOutcome.delivered(self.name)

    def build_message(self, payload: EmailPayload) -> EmailMessage:
        """
        Build the MIME message with text and HTML bodies and attachments.

        Args:
            payload: Formatted email

        Returns:
            EmailMessage ready to send
        """
        message = EmailMessage()
        message["From"] = self._from_address
        message["To"] = payload.to
        if payload.cc:
            message["Cc"] = ", ".join(payload.cc)
        message["Subject"] = payload.subject
        message.set_content(payload.text)
        message.add_alternative(payload.html, subtype="html")

        for attachment in payload.attachments:
            maintype, _, subtype = attachment.content_type.partition("/")
            message.add_attachment(
                Path(attachment.path).read_bytes(),
                maintype=maintype,
                subtype=subtype or "octet-stream",
                filename=attachment.filename,
            )
        return message

    def _deliver(self, message: EmailMessage) -> None:
        """Blocking SMTP send, run in a worker thread."""
        context = ssl.create_default_context()
        if self._secure:
            server = smtplib.SMTP_SSL(self._host, self._port, timeout=self._timeout, context=context)
        else:
            server = smtplib.SMTP(self._host, self._port, timeout=self._timeout)

        with server:
            if not self._secure:
                server.ehlo()
                if server.has_extn("starttls"):
                    server.starttls(context=context)
                    server.ehlo()
            if self._username and self._password:
                server.login(self._username, self._password)
            server.send_message(message)
