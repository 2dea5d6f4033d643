"""Sandboxed Jinja2 rendering for the built-in email templates."""

from jinja2 import StrictUndefined, TemplateError
from jinja2.sandbox import SandboxedEnvironment

from authcore.core.logging import get_logger

logger = get_logger(__name__)


def _environment(autoescape: bool) -> SandboxedEnvironment:
    return SandboxedEnvironment(
        autoescape=autoescape,
        trim_blocks=True,
        lstrip_blocks=True,
        undefined=StrictUndefined,
    )


class TemplateRenderer:
    """Renders subjects and bodies.

    HTML bodies are autoescaped, subjects and text bodies are not. A missing
    variable raises instead of rendering as an empty string.
    """

    def __init__(self) -> None:
        self.html_env = _environment(autoescape=True)
        self.text_env = _environment(autoescape=False)

    def render(self, template_string: str, variables: dict[str, str], html: bool = True) -> str:
        """Render ``template_string`` with ``variables``.

        Raises:
            jinja2.TemplateError: On a syntax error, a missing variable or an
                attribute access the sandbox forbids.
        """
        env = self.html_env if html else self.text_env
        try:
            return env.from_string(template_string).render(**variables)
        except TemplateError as e:
            logger.error("Email template failed to render", error=str(e), html=html)
            raise
