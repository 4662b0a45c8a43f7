"""Tests for per-major recommendation and best-of selection."""

from jdk_resolver import ReleaseEntry
from jdk_resolver import filter_entries
from jdk_resolver import latest_release
from jdk_resolver import parse_version
from jdk_resolver import recommend_per_major
from jdk_resolver import select_best


def make_entry(version, *, lts=False, os="linux", provider="test"):
    return ReleaseEntry(
        raw_version=version,
        spec=parse_version(version, concrete=True),
        os=os,
        arch="x64",
        is_lts=lts,
        download_url=f"https://example.com/jdk-{version}.tar.gz",
        provider=provider,
    )


class TestRecommendPerMajor:
    """Tests for recommend_per_major."""

    def test_lts_beats_higher_patch(self):
        """An LTS release with patch 3 is preferred over a non-LTS with patch 9."""
        entries = [make_entry("17.0.9"), make_entry("17.0.3", lts=True)]

        (recommended,) = recommend_per_major(entries)

        assert recommended.raw_version == "17.0.3"

    def test_patch_weighs_more_than_minor(self):
        entries = [make_entry("17.1.2", lts=True), make_entry("17.0.5", lts=True)]

        (recommended,) = recommend_per_major(entries)

        assert recommended.raw_version == "17.0.5"

    def test_minor_breaks_patch_ties(self):
        entries = [make_entry("17.0.5", lts=True), make_entry("17.1.5", lts=True)]

        (recommended,) = recommend_per_major(entries)

        assert recommended.raw_version == "17.1.5"

    def test_one_per_major_in_ascending_order(self):
        entries = [
            make_entry("21.0.2", lts=True),
            make_entry("11.0.22", lts=True),
            make_entry("17.0.10", lts=True),
            make_entry("21.0.1", lts=True),
        ]

        recommended = recommend_per_major(entries)

        assert [e.raw_version for e in recommended] == ["11.0.22", "17.0.10", "21.0.2"]

    def test_equal_keys_keep_catalog_order(self):
        entries = [make_entry("17.0.5", lts=True, os="linux"), make_entry("17.0.5", lts=True, os="windows")]

        (recommended,) = recommend_per_major(entries)

        assert recommended.os == "linux"

    def test_empty(self):
        assert recommend_per_major([]) == []


class TestSelectBest:
    """Tests for select_best and latest_release."""

    def test_highest_version_wins(self):
        entries = [make_entry("17.0.5", lts=True), make_entry("17.0.9"), make_entry("17.0.7", lts=True)]

        assert select_best(entries).raw_version == "17.0.9"

    def test_lts_breaks_version_tie(self):
        entries = [make_entry("17.0.5", provider="a"), make_entry("17.0.5", lts=True, provider="b")]

        assert select_best(entries).provider == "b"

    def test_empty_returns_none(self):
        assert select_best([]) is None
        assert latest_release([]) is None

    def test_latest_release_ignores_lts(self):
        entries = [make_entry("17.0.9", lts=True), make_entry("22.0.1"), make_entry("21.0.2", lts=True)]

        assert latest_release(entries).raw_version == "22.0.1"


class TestFilterEntries:
    """Tests for filter_entries."""

    ENTRIES = [
        make_entry("11.0.22", lts=True),
        make_entry("17.0.5", lts=True),
        make_entry("17.1.2", lts=True),
        make_entry("19.0.2"),
    ]

    def test_no_filters_returns_everything(self):
        assert filter_entries(self.ENTRIES) == self.ENTRIES

    def test_by_major(self):
        assert [e.raw_version for e in filter_entries(self.ENTRIES, major=17)] == ["17.0.5", "17.1.2"]

    def test_lts_only(self):
        assert "19.0.2" not in [e.raw_version for e in filter_entries(self.ENTRIES, lts_only=True)]

    def test_major_only(self):
        result = filter_entries(self.ENTRIES, major_only=True)

        assert [e.raw_version for e in result] == ["11.0.22", "17.0.5", "19.0.2"]

    def test_combined(self):
        result = filter_entries(self.ENTRIES, major=17, major_only=True, lts_only=True)

        assert [e.raw_version for e in result] == ["17.0.5"]
