"""Mail delivery for catalog notifications."""

import smtplib
from email.message import EmailMessage

import structlog

from cdcatalog.config import Settings
from cdcatalog.exceptions import NotificationError

logger = structlog.get_logger(__name__)


class MailService:
    """Send notification mails over SMTP."""

    def __init__(self, settings: Settings) -> None:
        self.enabled = settings.MAIL_ENABLED
        self.host = settings.MAIL_HOST
        self.port = settings.MAIL_PORT
        self.sender = settings.MAIL_FROM
        self.recipient = settings.MAIL_TO
        self.timeout = settings.MAIL_TIMEOUT_SECONDS

    def send(self, subject: str, body: str) -> None:
        """
        Send an HTML mail to the catalog team.

        With mail disabled the message is only logged.

        Raises:
            NotificationError: If the SMTP server cannot be reached or rejects the mail
        """
        if not self.enabled:
            logger.info("mail_disabled", subject=subject)
            return

        message = EmailMessage()
        message["Subject"] = subject
        message["From"] = self.sender
        message["To"] = self.recipient
        message.set_content(body, subtype="html")

        try:
            with smtplib.SMTP(self.host, self.port, timeout=self.timeout) as smtp:
                smtp.send_message(message)
        except (OSError, smtplib.SMTPException) as e:
            raise NotificationError(f"{self.host}:{self.port}: {e}") from e

        logger.info("mail_sent", subject=subject, recipient=self.recipient)
