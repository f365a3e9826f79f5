"""Application context shared by the command line front-end.

One AppContext is built at startup and handed to each command. It owns the
settings, the config store, the report viewer and the console, and exposes the
user-facing operations. Each operation returns an OperationResult carrying
either success or a single failure message.
"""

from pathlib import Path
from typing import Callable, Optional, Tuple

import structlog
from rich.console import Console

from tagdelta.errors import TagDeltaError
from tagdelta.extraction import GitTagSource, TagRefresher, TagSource, validate_repository
from tagdelta.models import Report, Settings, ViewerConfig
from tagdelta.report import ReportBuilder, ReportRenderer, ReportViewer
from tagdelta.storage import ConfigStore

logger = structlog.get_logger(__name__)


class OperationResult:
    """Result of a user-facing operation."""

    def __init__(
        self,
        success: bool,
        error: Optional[str] = None,
        report: Optional[Report] = None,
        report_path: Optional[Path] = None,
    ):
        self.success = success
        self.error = error
        self.report = report
        self.report_path = report_path

    @classmethod
    def failed(cls, error: Exception) -> "OperationResult":
        return cls(success=False, error=str(error))


class AppContext:
    """Holds configuration and session handles for one process."""

    def __init__(
        self,
        settings: Settings,
        config_store: Optional[ConfigStore] = None,
        viewer: Optional[ReportViewer] = None,
        renderer: Optional[ReportRenderer] = None,
        console: Optional[Console] = None,
        tag_source_factory: Callable[[Path], TagSource] = GitTagSource,
        refresher_factory: Callable[[Path], TagRefresher] = TagRefresher,
    ):
        """Initialize the context.

        Args:
            settings: Application settings
            config_store: Store for the persisted config (defaults to settings.config_dir)
            viewer: Report viewer (defaults to settings.output_dir / open_browser)
            renderer: HTML renderer
            console: Rich console for output
            tag_source_factory: Builds a tag source for a repository path
            refresher_factory: Builds a tag refresher for a repository path
        """
        self.settings = settings
        self.config_store = config_store or ConfigStore(settings.config_dir)
        self.viewer = viewer or ReportViewer(settings.output_dir, settings.open_browser)
        self.renderer = renderer or ReportRenderer()
        self.console = console or Console()
        self.tag_source_factory = tag_source_factory
        self.refresher_factory = refresher_factory

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    def load_config(self) -> ViewerConfig:
        return self.config_store.load()

    def save_config(self, config: ViewerConfig) -> None:
        self.config_store.save(config)

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def validate_repository(self, repo_path: Path) -> Tuple[bool, Optional[str]]:
        return validate_repository(repo_path)

    def refresh_tags(self, repo_path: Path) -> OperationResult:
        """Delete local tags and re-fetch them from the remote."""
        try:
            self.refresher_factory(Path(repo_path)).refresh()
        except TagDeltaError as e:
            logger.error("refresh_failed", repo=str(repo_path), error=str(e))
            return OperationResult.failed(e)
        return OperationResult(success=True)

    def build_report(self, config: ViewerConfig) -> Report:
        """Build the report model for a configuration.

        Raises:
            ConfigurationValidationError: If the configuration is invalid
            RepositoryAccessError: If the repository cannot be read
        """
        config.validate_for_generation()
        tag_source = self.tag_source_factory(Path(config.repository_path))
        return ReportBuilder(tag_source, config).build()

    def generate(
        self,
        config: ViewerConfig,
        refresh: bool = False,
        json_output: Optional[Path] = None,
    ) -> OperationResult:
        """Validate and save the config, then build, render and show the report.

        When ``refresh`` is set, the tag refresh runs to completion first and
        its failure aborts the whole operation.

        Args:
            config: Report configuration
            refresh: Resync tags with the remote before building
            json_output: Also write the report model as JSON to this path

        Returns:
            OperationResult with the report and its HTML path on success
        """
        try:
            config.validate_for_generation()
            self.save_config(config)

            if refresh:
                self.refresher_factory(Path(config.repository_path)).refresh()

            report = self.build_report(config)
            html_content = self.renderer.render(report, repository=config.repository_path)
            report_path = self.viewer.show(html_content)

            if json_output:
                json_output.parent.mkdir(parents=True, exist_ok=True)
                json_output.write_text(report.model_dump_json(indent=2), encoding="utf-8")
        except (TagDeltaError, OSError) as e:
            logger.error("generation_failed", repo=config.repository_path, error=str(e))
            return OperationResult.failed(e)

        return OperationResult(success=True, report=report, report_path=report_path)
