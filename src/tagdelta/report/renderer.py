"""HTML rendering of tag reports."""

from datetime import datetime
from pathlib import Path
from typing import Optional

from jinja2 import Environment, FileSystemLoader, select_autoescape

from tagdelta.models import Report

TEMPLATE_DIR = Path(__file__).parent / "templates"
TEMPLATE_NAME = "report.html.j2"


class ReportRenderer:
    """Renders a Report into a single self-contained HTML page.

    All CSS and JavaScript are inlined; the page needs no network access.
    """

    def __init__(self, template_dir: Path = TEMPLATE_DIR) -> None:
        self.env = Environment(
            loader=FileSystemLoader(template_dir),
            autoescape=select_autoescape(["html", "xml", "j2"]),
        )

    def render(
        self,
        report: Report,
        repository: str = "",
        generated_at: Optional[datetime] = None,
    ) -> str:
        """Render the report.

        Args:
            report: Report to render
            repository: Repository path shown in the header
            generated_at: Generation time shown in the footer (defaults to now)

        Returns:
            Complete HTML document
        """
        generated_at = generated_at or datetime.now()
        template = self.env.get_template(TEMPLATE_NAME)
        return template.render(
            groups=report.groups,
            search_index=[
                [
                    {"name": tag.name, "messages": [commit.message for commit in tag.commits]}
                    for tag in group.tags
                ]
                for group in report.groups
            ],
            repository=repository,
            group_count=len(report.groups),
            tag_count=report.tag_count,
            commit_count=report.commit_count,
            generated_time=generated_at.strftime("%Y-%m-%d %H:%M:%S"),
        )
