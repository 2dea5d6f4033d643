"""Email providers, templates and rendering."""

from authcore.infrastructure.services.email.console_provider import ConsoleEmailProvider
from authcore.infrastructure.services.email.email_provider import EmailProvider
from authcore.infrastructure.services.email.smtp_provider import SMTPProvider, SMTPSettings
from authcore.infrastructure.services.email.template_renderer import TemplateRenderer

__all__ = [
    "ConsoleEmailProvider",
    "EmailProvider",
    "SMTPProvider",
    "SMTPSettings",
    "TemplateRenderer",
]
