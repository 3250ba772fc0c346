"""Tests for version, selector and amount models."""

from __future__ import annotations

import random

import pytest

from changelog_md.exceptions import InvalidVersionError
from changelog_md.schemas import Amount, Version, VersionSelector


class TestVersion:
    """Tests for the Version model."""

    def test_parse_full(self) -> None:
        version = Version.parse("1.2.3-rc.1+build.5")

        assert (version.major, version.minor, version.patch) == (1, 2, 3)
        assert version.prerelease == "rc.1"
        assert version.build == "build.5"
        assert str(version) == "1.2.3-rc.1+build.5"

    def test_accepts_v_prefix(self) -> None:
        assert str(Version.parse("v0.4.0")) == "0.4.0"

    @pytest.mark.parametrize("text", ["1.2", "01.2.3", "a.b.c", "1.2.3.4", "", "1.2.3-"])
    def test_rejects_invalid(self, text: str) -> None:
        with pytest.raises(InvalidVersionError):
            Version.parse(text)

    def test_invalid_version_is_value_error(self) -> None:
        """argparse turns ValueError from type converters into usage errors."""
        with pytest.raises(ValueError):
            Version.parse("nope")

    def test_try_parse(self) -> None:
        assert Version.try_parse("nope") is None
        assert Version.try_parse("1.0.0") == Version(major=1, minor=0, patch=0)

    def test_precedence(self) -> None:
        """Ordering follows SemVer pre-release precedence."""
        ordered = [
            "1.0.0-alpha",
            "1.0.0-alpha.1",
            "1.0.0-alpha.beta",
            "1.0.0-beta",
            "1.0.0-beta.2",
            "1.0.0-beta.11",
            "1.0.0-rc.1",
            "1.0.0",
            "1.0.1",
            "1.1.0",
            "2.0.0",
            "10.0.0",
        ]
        shuffled = [Version.parse(text) for text in ordered]
        random.Random(7).shuffle(shuffled)

        assert [str(v) for v in sorted(shuffled)] == ordered

    def test_build_metadata_ignored_for_ordering(self) -> None:
        a = Version.parse("1.0.0+a")
        b = Version.parse("1.0.0+b")

        assert not a < b
        assert not b < a

    @pytest.mark.parametrize(
        ("start", "kind", "expected"),
        [
            ("1.2.3", "major", "2.0.0"),
            ("1.2.3", "minor", "1.3.0"),
            ("1.2.3", "patch", "1.2.4"),
            ("1.0.0-rc.1", "major", "1.0.0"),
            ("1.2.0-rc.1", "minor", "1.2.0"),
            ("1.2.3-rc.1", "patch", "1.2.3"),
            ("1.2.3-rc.1", "major", "2.0.0"),
        ],
    )
    def test_bump(self, start: str, kind: str, expected: str) -> None:
        bumped = Version.parse(start).bump(kind)

        assert str(bumped) == expected
        assert bumped > Version.parse(start)


class TestVersionSelector:
    """Tests for VersionSelector.parse."""

    @pytest.mark.parametrize("text", ["major", "Minor", "PATCH", "infer"])
    def test_keywords(self, text: str) -> None:
        selector = VersionSelector.parse(text)

        assert selector.kind == text.lower()
        assert selector.version is None
        assert str(selector) == text.lower()

    def test_explicit(self) -> None:
        selector = VersionSelector.parse("2.0.0-beta.1")

        assert selector.kind == "explicit"
        assert selector.version == Version.parse("2.0.0-beta.1")
        assert str(selector) == "2.0.0-beta.1"

    def test_invalid(self) -> None:
        with pytest.raises(ValueError):
            VersionSelector.parse("latest")


class TestAmount:
    """Tests for Amount."""

    def test_all(self) -> None:
        assert Amount.parse("ALL").count is None
        assert str(Amount.all()) == "all"

    def test_count(self) -> None:
        assert Amount.parse("5") == Amount(count=5)

    @pytest.mark.parametrize("text", ["-1", "x", "", "2.5"])
    def test_invalid(self, text: str) -> None:
        with pytest.raises(ValueError):
            Amount.parse(text)

    def test_limit(self) -> None:
        items = list(range(5))

        assert Amount(count=2).limit(items) == [0, 1]
        assert Amount(count=0).limit(items) == []
        assert Amount.all().limit(items) == items
