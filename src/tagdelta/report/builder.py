"""Assemble the grouped tag report."""

import structlog

from tagdelta.extraction.tag_source import TagSource
from tagdelta.grouping import classify_tags, select_window
from tagdelta.models import GroupEntry, Report, ViewerConfig
from tagdelta.resolution import CommitRangeResolver

logger = structlog.get_logger(__name__)


class ReportBuilder:
    """Builds a Report from a tag source and a configuration.

    Groups and the tags inside them are resolved one at a time, in priority
    order, so identical inputs always produce an identically ordered report.
    """

    def __init__(self, tag_source: TagSource, config: ViewerConfig) -> None:
        """Initialize the builder.

        Args:
            tag_source: Source of tags and commit history
            config: Validated report configuration
        """
        self.tag_source = tag_source
        self.config = config
        self.resolver = CommitRangeResolver(tag_source, config)

    def build(self) -> Report:
        """Build the report.

        Returns:
            Report with one entry per non-empty group

        Raises:
            RepositoryAccessError: If the tag list cannot be read
        """
        tags = self.tag_source.list_tags_by_creation_date_descending()
        groups = []

        for group, matched in classify_tags(tags, self.config.group_prefixes):
            window = select_window(group, matched, self.config.tags_per_group)
            if not window:
                logger.debug("group_empty", prefix=group.prefix)
                continue

            groups.append(
                GroupEntry(
                    display_name=group.display_name,
                    prefix=group.prefix,
                    tags=self.resolver.resolve_window(window),
                )
            )

        report = Report(groups=groups)
        logger.info(
            "report_built",
            groups=len(report.groups),
            tags=report.tag_count,
            commits=report.commit_count,
        )
        return report
