"""Tests for tag classification, group ordering and tag windows."""

from tagdelta.grouping import (
    KNOWN_PREFIX_PRIORITY,
    UNKNOWN_PREFIX_PRIORITY,
    classify_tags,
    prefix_priority,
    select_window,
    sort_groups,
)
from tagdelta.models import TagGroupSpec


def _as_dict(classified):
    return {group.prefix: tags for group, tags in classified}


class TestSortGroups:
    """Test group display ordering."""

    def test_known_prefixes_follow_priority_table(self):
        prefixes = ["lab-flareon", "v1.0.", "prd-v", "lab-athena", "uat-v", "preview-v", "lab-eevee"]
        ordered = [g.prefix for g in sort_groups(prefixes)]
        assert ordered == list(KNOWN_PREFIX_PRIORITY)

    def test_unknown_prefix_sorts_after_known(self):
        ordered = [g.prefix for g in sort_groups(["prd-v", "custom-x", "uat-v"])]
        assert ordered == ["prd-v", "uat-v", "custom-x"]

    def test_unknown_prefixes_keep_relative_order(self):
        ordered = [g.prefix for g in sort_groups(["zeta-", "lab-eevee", "alpha-", "mid-"])]
        assert ordered == ["lab-eevee", "zeta-", "alpha-", "mid-"]

    def test_duplicate_prefixes_collapse(self):
        ordered = [g.prefix for g in sort_groups(["uat-v", "prd-v", "uat-v"])]
        assert ordered == ["prd-v", "uat-v"]

    def test_unknown_priority_is_shared_sentinel(self):
        assert prefix_priority("foo") == UNKNOWN_PREFIX_PRIORITY
        assert prefix_priority("bar") == UNKNOWN_PREFIX_PRIORITY
        assert prefix_priority("lab-flareon") < UNKNOWN_PREFIX_PRIORITY


class TestDisplayName:
    """Test group display names."""

    def test_reserved_prefix_has_alias(self):
        assert TagGroupSpec(prefix="v1.0.").display_name == "stg"

    def test_other_prefixes_display_as_is(self):
        assert TagGroupSpec(prefix="prd-v").display_name == "prd-v"
        assert TagGroupSpec(prefix="custom-x").display_name == "custom-x"


class TestClassifyTags:
    """Test tag to group assignment."""

    def test_tags_keep_source_order(self):
        tags = ["prd-v3", "uat-v9", "prd-v2", "prd-v1"]
        result = _as_dict(classify_tags(tags, ["prd-v", "uat-v"]))
        assert result["prd-v"] == ["prd-v3", "prd-v2", "prd-v1"]
        assert result["uat-v"] == ["uat-v9"]

    def test_unmatched_tags_are_dropped(self):
        result = classify_tags(["random", "prd-v1", "release-1"], ["prd-v"])
        all_tags = [tag for _, tags in result for tag in tags]
        assert all_tags == ["prd-v1"]

    def test_tag_assigned_to_first_priority_match_only(self):
        # "lab-athena" sorts before the unknown "lab-" prefix
        tags = ["lab-athena-2", "lab-x-1", "lab-athena-1"]
        result = _as_dict(classify_tags(tags, ["lab-", "lab-athena"]))
        assert result["lab-athena"] == ["lab-athena-2", "lab-athena-1"]
        assert result["lab-"] == ["lab-x-1"]

    def test_overlapping_unknown_prefixes_use_input_order(self):
        tags = ["rc-main-1", "rc-2"]
        result = _as_dict(classify_tags(tags, ["rc-", "rc-main-"]))
        assert result["rc-"] == ["rc-main-1", "rc-2"]
        assert result["rc-main-"] == []

    def test_every_tag_in_at_most_one_group(self):
        tags = ["prd-v1", "prd-v1.0.1", "v1.0.5", "uat-v2", "preview-v1"]
        result = classify_tags(tags, ["prd-v", "prd-v1.", "v1.0.", "uat-v", "preview-v", "p"])
        assigned = [tag for _, group_tags in result for tag in group_tags]
        assert sorted(assigned) == sorted(tags)
        assert len(assigned) == len(set(assigned))

    def test_prefix_match_is_case_sensitive(self):
        result = _as_dict(classify_tags(["PRD-v1", "prd-v1"], ["prd-v"]))
        assert result["prd-v"] == ["prd-v1"]

    def test_empty_groups_are_kept_for_builder(self):
        result = _as_dict(classify_tags(["prd-v1"], ["prd-v", "uat-v"]))
        assert result["uat-v"] == []

    def test_duplicate_tags_collapse(self):
        result = _as_dict(classify_tags(["prd-v2", "prd-v2", "prd-v1"], ["prd-v"]))
        assert result["prd-v"] == ["prd-v2", "prd-v1"]


class TestSelectWindow:
    """Test per-group tag windows."""

    def test_truncates_to_tags_per_group(self):
        group = TagGroupSpec(prefix="v")
        window = select_window(group, ["v5", "v4", "v3", "v2", "v1"], 3)
        assert [t.name for t in window] == ["v5", "v4", "v3"]
        assert [t.position for t in window] == [0, 1, 2]
        assert all(t.group == "v" for t in window)

    def test_fewer_tags_than_limit(self):
        window = select_window(TagGroupSpec(prefix="v"), ["v2", "v1"], 8)
        assert [t.name for t in window] == ["v2", "v1"]

    def test_does_not_reorder(self):
        window = select_window(TagGroupSpec(prefix="v"), ["v1", "v3", "v2"], 8)
        assert [t.name for t in window] == ["v1", "v3", "v2"]

    def test_empty_group(self):
        assert select_window(TagGroupSpec(prefix="v"), [], 8) == []
