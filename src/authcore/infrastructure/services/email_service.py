"""Email service for account lifecycle notifications.

Renders the built-in templates and hands them to the configured provider.
Any provider failure is raised as ``NotifierFault``; callers decide whether
that is fatal (for the account flows it never is, since state is committed
before a notification is requested).
"""

from authcore.core.config import Settings
from authcore.core.logging import get_logger
from authcore.domain.exceptions import NotifierFault
from authcore.infrastructure.services.email.console_provider import ConsoleEmailProvider
from authcore.infrastructure.services.email.email_provider import EmailProvider
from authcore.infrastructure.services.email.smtp_provider import SMTPProvider, SMTPSettings
from authcore.infrastructure.services.email.template_renderer import TemplateRenderer
from authcore.infrastructure.services.email.templates import (
    PASSWORD_RESET_REQUEST_EMAIL,
    PASSWORD_RESET_SUCCESS_EMAIL,
    VERIFICATION_EMAIL,
    WELCOME_EMAIL,
    EmailTemplate,
)

logger = get_logger(__name__)


def build_email_provider(settings: Settings) -> EmailProvider:
    """Select the email provider named in settings."""
    if settings.email_provider == "smtp":
        return SMTPProvider(SMTPSettings.from_settings(settings))
    return ConsoleEmailProvider()


class EmailService:
    """Service for sending account lifecycle emails."""

    def __init__(
        self,
        settings: Settings,
        provider: EmailProvider | None = None,
        renderer: TemplateRenderer | None = None,
    ) -> None:
        """Initialize the email service.

        Args:
            settings: Application settings (sender identity, token lifetimes).
            provider: Email provider. Defaults to the one named in settings.
            renderer: Template renderer. Defaults to a new sandboxed renderer.
        """
        self.settings = settings
        self.provider = provider or build_email_provider(settings)
        self.renderer = renderer or TemplateRenderer()

    async def _send(self, to: str, template: EmailTemplate, category: str, **variables: str) -> None:
        variables.setdefault("app_name", self.settings.app_name)
        try:
            subject = self.renderer.render(template.subject, variables, html=False)
            html_body = self.renderer.render(template.html_body, variables)
            text_body = self.renderer.render(template.text_body, variables, html=False)
            sent = await self.provider.send_email(
                to=to,
                subject=subject,
                html_body=html_body,
                text_body=text_body,
                from_email=self.settings.email_from,
                from_name=self.settings.email_from_name,
            )
        except Exception as e:
            logger.error(f"Error sending {category} email", to=to, error=str(e))
            raise NotifierFault(f"Error sending {category} email") from e

        if not sent:
            logger.error(f"Email provider rejected {category} email", to=to)
            raise NotifierFault(f"Error sending {category} email")

        logger.info("Email sent successfully", to=to, category=category)

    async def send_verification_email(self, email: str, verification_code: str) -> None:
        """Send the email verification code."""
        await self._send(
            email,
            VERIFICATION_EMAIL,
            "verification",
            verification_code=verification_code,
            expires_in_hours=str(self.settings.verification_token_expire_hours),
        )

    async def send_welcome_email(self, email: str, name: str) -> None:
        """Send the welcome email after a successful verification."""
        await self._send(email, WELCOME_EMAIL, "welcome", name=name)

    async def send_password_reset_email(self, email: str, reset_url: str) -> None:
        """Send the password reset link."""
        await self._send(
            email,
            PASSWORD_RESET_REQUEST_EMAIL,
            "password reset",
            reset_url=reset_url,
            expires_in_hours=str(self.settings.reset_token_expire_hours),
        )

    async def send_reset_success_email(self, email: str) -> None:
        """Confirm that the password was changed."""
        await self._send(email, PASSWORD_RESET_SUCCESS_EMAIL, "password reset success")
