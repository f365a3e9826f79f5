"""Assign tags to prefix groups and order the groups for display."""

from typing import Iterable, List, Tuple

from tagdelta.models import TagGroupSpec

# Display priority of well-known prefixes. Lower ranks come first.
KNOWN_PREFIX_PRIORITY = {
    "prd-v": 1,
    "uat-v": 2,
    "v1.0.": 3,
    "preview-v": 4,
    "lab-athena": 5,
    "lab-eevee": 6,
    "lab-flareon": 7,
}

# Shared rank for every prefix outside KNOWN_PREFIX_PRIORITY.
UNKNOWN_PREFIX_PRIORITY = 9


def prefix_priority(prefix: str) -> int:
    return KNOWN_PREFIX_PRIORITY.get(prefix, UNKNOWN_PREFIX_PRIORITY)


def sort_groups(prefixes: Iterable[str]) -> List[TagGroupSpec]:
    """Order configured prefixes for display.

    Known prefixes follow KNOWN_PREFIX_PRIORITY. Unknown prefixes come after
    all known ones and keep their relative input order. Duplicates collapse to
    their first occurrence.

    Args:
        prefixes: Configured prefixes in input order

    Returns:
        Group specs in display (and assignment) priority order
    """
    unique = list(dict.fromkeys(prefixes))
    return [TagGroupSpec(prefix=prefix) for prefix in sorted(unique, key=prefix_priority)]


def classify_tags(
    tags: Iterable[str], prefixes: Iterable[str]
) -> List[Tuple[TagGroupSpec, List[str]]]:
    """Partition tags into prefix groups.

    Groups are visited in priority order and each one consumes the tags that
    start with its prefix, so a tag matching several prefixes lands only in
    the highest-priority group. Tags matching no prefix are dropped. Tag order
    within a group is the input order.

    Args:
        tags: Tag names, newest first
        prefixes: Configured group prefixes

    Returns:
        (group, matched tags) pairs in priority order, including empty groups
    """
    remaining = list(dict.fromkeys(tags))
    classified = []
    for group in sort_groups(prefixes):
        matched = [tag for tag in remaining if group.matches(tag)]
        if matched:
            claimed = set(matched)
            remaining = [tag for tag in remaining if tag not in claimed]
        classified.append((group, matched))
    return classified
