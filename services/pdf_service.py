from datetime import date
from pathlib import Path
from typing import Any, Dict

from jinja2 import Environment, FileSystemLoader, select_autoescape


class PDFService:
    def __init__(self, template_dir: Path = None):
        # templates/ next to the project root
        template_dir = template_dir or Path(__file__).resolve().parent.parent / "templates"
        self.env = Environment(
            loader=FileSystemLoader(template_dir),
            autoescape=select_autoescape(["html"]),
        )

    def _render_template(self, template_name: str, data: Dict[str, Any]) -> str:
        """Render a template into HTML."""
        template = self.env.get_template(template_name)
        return template.render(**data)

    def _html_to_pdf(self, html_content: str) -> bytes:
        """HTML → PDF"""
        # WeasyPrint loads pango/cairo on import, so it is only pulled in when a PDF is built
        import weasyprint
        return weasyprint.HTML(string=html_content).write_pdf()

    def render_ratings_html(self, data: Dict[str, Any]) -> str:
        return self._render_template("teacher_ratings.html", {"generated_date": date.today().isoformat(), **data})

    def generate_ratings_pdf(self, data: Dict[str, Any]) -> bytes:
        """Printable teacher ratings report."""
        return self._html_to_pdf(self.render_ratings_html(data))
