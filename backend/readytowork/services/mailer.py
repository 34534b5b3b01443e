"""
Email delivery through Resend.

``send_email`` never raises. It returns a SendResult so each call site decides,
visibly, whether a failed send matters to it.
"""

import logging
from dataclasses import dataclass
from typing import Any, Optional

import resend

from readytowork.core.config import settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SendResult:
    success: bool
    error: Optional[str] = None
    data: Optional[Any] = None

    def log_failure(self, log: logging.Logger, context: str) -> "SendResult":
        """Log a failed send and hand the result back unchanged."""
        if not self.success:
            log.error("%s: %s", context, self.error)
        return self


def configure_resend() -> bool:
    """
    Configure the Resend SDK with the API key.

    Returns True if an API key is available, False otherwise.
    """
    if not settings.RESEND_API_KEY:
        logger.warning("RESEND_API_KEY not set, skipping email send")
        return False

    resend.api_key = settings.RESEND_API_KEY
    return True


def send_email(to: str, subject: str, html: str) -> SendResult:
    """
    Send a transactional email.

    Args:
        to: Recipient address
        subject: Subject line
        html: Rendered HTML body

    Returns:
        SendResult with the provider response on success
    """
    if not configure_resend():
        return SendResult(success=False, error="Email service not configured")

    params = {
        "from": settings.EMAIL_FROM,
        "to": [to],
        "subject": subject,
        "html": html,
    }

    try:
        response = resend.Emails.send(params)
    except Exception as e:
        logger.error("Failed to send email: %s", e)
        return SendResult(success=False, error=str(e) or "Failed to send email")

    logger.info("Email sent: subject=%r", subject)
    return SendResult(success=True, data=response)
