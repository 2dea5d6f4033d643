"""Transport interface behind EmailService.

A provider only moves an already rendered message; templates, sender identity
and failure policy live in EmailService.
"""

from abc import ABC, abstractmethod


class EmailProvider(ABC):
    """Delivers rendered messages to a mail transport."""

    @abstractmethod
    async def send_email(
        self,
        to: str,
        subject: str,
        html_body: str,
        text_body: str,
        from_email: str,
        from_name: str,
    ) -> bool:
        """Deliver one message with HTML and plain text alternatives.

        Returns:
            True once the transport accepted the message, False if it declined.
            Transport errors propagate; EmailService turns them into NotifierFault.
        """
