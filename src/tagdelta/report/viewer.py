"""Write rendered reports to disk and open them in a browser."""

import tempfile
import webbrowser
from pathlib import Path
from typing import Optional

import structlog

logger = structlog.get_logger(__name__)

REPORT_FILENAME = "tagdelta-report.html"


class ReportViewer:
    """Shows HTML reports in the user's browser.

    Every report goes to the same file, so showing a new report replaces the
    previous one.
    """

    def __init__(self, output_dir: Optional[Path] = None, open_browser: bool = True) -> None:
        """Initialize the viewer.

        Args:
            output_dir: Directory for the report file. Defaults to the system temp dir.
            open_browser: Whether to open the written report
        """
        self.output_dir = Path(output_dir) if output_dir else Path(tempfile.gettempdir())
        self.open_browser = open_browser
        self.last_report: Optional[Path] = None

    @property
    def report_path(self) -> Path:
        return self.output_dir / REPORT_FILENAME

    def show(self, html_content: str) -> Path:
        """Write the report and open it.

        Args:
            html_content: Rendered HTML document

        Returns:
            Path of the written report
        """
        self.output_dir.mkdir(parents=True, exist_ok=True)
        path = self.report_path
        path.write_text(html_content, encoding="utf-8")
        self.last_report = path
        logger.info("report_written", path=str(path))

        if self.open_browser:
            opened = webbrowser.open(path.resolve().as_uri())
            if not opened:
                logger.warning("browser_not_opened", path=str(path))
        return path
