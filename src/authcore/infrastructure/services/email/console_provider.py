"""Console email provider.

Logs outgoing mail instead of delivering it. Default in development so the
verification code and reset link can be read from the server log.
"""

from authcore.core.logging import get_logger
from authcore.infrastructure.services.email.email_provider import EmailProvider

logger = get_logger(__name__)


class ConsoleEmailProvider(EmailProvider):
    """Email provider that writes messages to the log."""

    async def send_email(
        self,
        to: str,
        subject: str,
        html_body: str,
        text_body: str,
        from_email: str,
        from_name: str,
    ) -> bool:
        logger.info(
            f"[EMAIL] {subject}\n"
            f"From: {from_name} <{from_email}>\n"
            f"To: {to}\n"
            f"Body:\n{text_body}\n"
            f"{'=' * 80}"
        )
        return True
