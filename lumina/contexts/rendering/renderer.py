"""
HTML preview renderer.

Renders a complete Document to a standalone HTML page with the document's
theme color and font applied. The renderer only reads the Document.
"""

import time
from pathlib import Path
from typing import Dict, Optional

from jinja2 import Environment, FileSystemLoader, StrictUndefined, Template, select_autoescape

from lumina.contexts.document.editing import export_filename
from lumina.contexts.document.model import Document
from lumina.contexts.rendering.logger import _log_debug, log_render_result

TEMPLATES_PATH = Path(__file__).resolve().parent / "templates"
DEFAULT_TEMPLATE = "cv.html.jinja"


class HtmlRenderer:
    """
    Loads and caches Jinja2 page templates and renders Documents with them.

    Templates receive `document`, `info` (personal info) and `theme`.
    """

    def __init__(self, templates_path: Optional[Path] = None):
        """
        Args:
            templates_path: Directory holding *.html.jinja templates. Defaults
                to the templates packaged with Lumina
        """
        if templates_path is None:
            templates_path = TEMPLATES_PATH

        self.templates_path = Path(templates_path)
        self._cache: Dict[str, Template] = {}

        self.env = Environment(
            loader=FileSystemLoader(str(self.templates_path)),
            # Catches silent failures
            undefined=StrictUndefined,
            autoescape=select_autoescape(enabled_extensions=("html", "jinja"), default=True),
            trim_blocks=True,
            lstrip_blocks=True,
        )

    def get_template(self, name: str = DEFAULT_TEMPLATE) -> Template:
        """
        Get a template by file name, loading and caching it if necessary.

        Raises:
            TemplateNotFound: If the template file doesn't exist
        """
        if name not in self._cache:
            _log_debug(f"Loading template {name} from {self.templates_path}")
            self._cache[name] = self.env.get_template(name)
        return self._cache[name]

    def is_cached(self, name: str) -> bool:
        return name in self._cache

    def render(self, document: Document, template_name: str = DEFAULT_TEMPLATE) -> str:
        """Render document to an HTML string."""
        template = self.get_template(template_name)
        return template.render(
            document=document,
            info=document.personal_info,
            theme=document.theme,
        )

    def write(
        self,
        document: Document,
        output_path: Optional[Path] = None,
        template_name: str = DEFAULT_TEMPLATE,
    ) -> Path:
        """
        Render document and write it to disk.

        Args:
            document: Document to render
            output_path: Target file or directory. A directory (or None, meaning
                the current directory) gets the default CV_<Name>.html file name

        Returns:
            Path of the written file
        """
        start_time = time.time()

        if output_path is None:
            output_path = Path.cwd()
        output_path = Path(output_path)
        if output_path.is_dir():
            output_path = output_path / export_filename(document, "html")
        output_path.parent.mkdir(parents=True, exist_ok=True)

        html = self.render(document, template_name)
        output_path.write_text(html, encoding="utf-8")

        log_render_result(
            document.personal_info.full_name or "CV", output_path, len(html), time.time() - start_time
        )
        return output_path
