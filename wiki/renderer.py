"""
Page renderer.

Templates are loaded once, when the renderer is created. A broken template
stops the application at startup instead of failing every request.
"""

import logging
from pathlib import Path

import jinja2
import markdown
from markupsafe import Markup, escape

from wiki.config import Config
from wiki.exceptions import RenderFailure
from wiki.types import Page

logger = logging.getLogger(__name__)

DEFAULT_TEMPLATE_PATH = Path(__file__).parent / "templates"
MODES = ("view", "edit")


def markdown_filter(text: str) -> Markup:
    """
    Convert markdown text to HTML.

    The text is escaped first, so raw HTML in a page is shown, never run.
    """
    if not text:
        return Markup("")
    return Markup(
        markdown.markdown(
            str(escape(text)),
            extensions=[
                "markdown.extensions.fenced_code",
                "markdown.extensions.tables",
            ],
        )
    )


class Renderer:
    """
    Renders a page in view or edit mode.
    """

    def __init__(self, config: Config):
        """
        Initialize the renderer, loading and checking all templates.
        """
        self.config = config
        self.template_path = config.templates.path or DEFAULT_TEMPLATE_PATH
        self.jinja2_env = jinja2.Environment(
            loader=jinja2.FileSystemLoader(str(self.template_path)),
            autoescape=True,
            undefined=jinja2.StrictUndefined,
        )
        self.jinja2_env.filters["markdown"] = markdown_filter
        self.templates = {mode: self.load_template(mode) for mode in MODES}
        logger.debug(
            "Loaded templates=%s from path=%s", list(self.templates), self.template_path
        )

    def load_template(self, mode: str) -> jinja2.Template:
        name = f"{mode}.html"
        try:
            return self.jinja2_env.get_template(name)
        except jinja2.TemplateError as e:
            raise RenderFailure(
                f"Failed to load template {name} from {self.template_path}: {e}"
            ) from e

    def render(self, mode: str, page: Page) -> bytes:
        """
        Render the page with the template for the given mode.
        """
        template = self.templates.get(mode)
        if template is None:
            raise RenderFailure(f"Unknown render mode: {mode}")
        try:
            html = template.render(page=page, markdown=self.config.templates.markdown)
        except jinja2.TemplateError as e:
            raise RenderFailure(
                f"Failed to render page {page.name} mode={mode}: {e}"
            ) from e
        return html.encode("utf-8")
