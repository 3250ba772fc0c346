"""Tests for section indexing utilities."""

from __future__ import annotations

import pytest

from changelog_md.markdown_parser import parse_markdown
from changelog_md.sections import (
    SectionKey,
    build_section_index,
    normalize_section_title,
    parse_release_heading,
)


@pytest.mark.parametrize(
    ("title", "expected"),
    [
        ("Unreleased", "unreleased"),
        ("[Unreleased]", "unreleased"),
        ("  ADDED ", "added"),
        ("1.2.0 - 2024-01-01", "1.2.0"),
        ("[1.2.0] - 2024-01-01", "1.2.0"),
        ("v1.2.0", "1.2.0"),
        ("1.0.0-RC.1 - 2024-01-01", "1.0.0-rc.1"),
        ("Notes   for   maintainers", "notes for maintainers"),
    ],
)
def test_normalize_section_title(title: str, expected: str) -> None:
    assert normalize_section_title(title) == expected


class TestParseReleaseHeading:
    """Tests for parse_release_heading function."""

    def test_version_and_date(self) -> None:
        assert parse_release_heading("[1.2.0] - 2024-01-01") == ("1.2.0", "2024-01-01")

    def test_version_without_date(self) -> None:
        assert parse_release_heading("1.2.0") == ("1.2.0", None)

    def test_keeps_date_annotations(self) -> None:
        """Anything after the separator is treated as the date text."""
        assert parse_release_heading("0.3.0 - 2023-12-03 [YANKED]") == (
            "0.3.0",
            "2023-12-03 [YANKED]",
        )

    @pytest.mark.parametrize("text", ["Unreleased", "Added", "Version 1.2.0", "1.2"])
    def test_non_version_headings(self, text: str) -> None:
        assert parse_release_heading(text) is None


class TestBuildSectionIndex:
    """Tests for build_section_index function."""

    def test_spans_end_at_equal_or_lower_level(self) -> None:
        """Subsections nest inside their version section."""
        nodes = parse_markdown(
            "# Changelog\n"
            "## Unreleased\n"
            "### Added\n"
            "- a\n"
            "## 1.0.0\n"
            "### Fixed\n"
            "- b\n"
        )

        sections = build_section_index(nodes)

        spans = [(s.key, s.start, s.end) for s in sections]
        assert spans == [
            (SectionKey(1, "changelog"), 0, 7),
            (SectionKey(2, "unreleased"), 1, 4),
            (SectionKey(3, "added"), 2, 4),
            (SectionKey(2, "1.0.0"), 4, 7),
            (SectionKey(3, "fixed"), 5, 7),
        ]

    def test_prologue_belongs_to_no_section(self) -> None:
        """Content before the first heading is not indexed."""
        nodes = parse_markdown("Intro\n\n## Unreleased\n")

        sections = build_section_index(nodes)

        assert [(s.start, s.end) for s in sections] == [(2, 3)]

    def test_same_level_spans_do_not_overlap(self, sample_text: str) -> None:
        """Version spans are contiguous and disjoint."""
        sections = [s for s in build_section_index(parse_markdown(sample_text)) if s.level == 2]

        for current, following in zip(sections, sections[1:]):
            assert current.end == following.start
