"""Per-group tag window selection."""

from typing import List, Sequence

from tagdelta.models import ResolvedTag, TagGroupSpec


def select_window(group: TagGroupSpec, tags: Sequence[str], tags_per_group: int) -> List[ResolvedTag]:
    """Take the newest ``tags_per_group`` tags of a group.

    The input is already newest-first, so no sorting happens here.

    Args:
        group: Group the tags belong to
        tags: Matched tag names, newest first
        tags_per_group: Maximum number of tags to keep

    Returns:
        Selected tags with their window position (0 = newest)
    """
    return [
        ResolvedTag(name=name, group=group.prefix, position=position)
        for position, name in enumerate(tags[: max(tags_per_group, 0)])
    ]
