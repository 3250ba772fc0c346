"""Semantic version, version selector and listing amount models."""

from __future__ import annotations

import re
from functools import total_ordering
from typing import Literal, TypeVar

from pydantic import BaseModel, ConfigDict, Field

from changelog_md.exceptions import InvalidVersionError

_VERSION_RE = re.compile(
    r"^v?(0|[1-9]\d*)\.(0|[1-9]\d*)\.(0|[1-9]\d*)"
    r"(?:-([0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*))?"
    r"(?:\+([0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*))?$"
)

BumpKind = Literal["major", "minor", "patch"]
SelectorKind = Literal["major", "minor", "patch", "infer", "explicit"]

T = TypeVar("T")


@total_ordering
class Version(BaseModel):
    """A ``MAJOR.MINOR.PATCH[-prerelease][+build]`` version.

    Ordering follows SemVer 2.0 precedence: the numeric triple first, then
    pre-release identifiers (a release ranks above any of its pre-releases).
    Build metadata does not take part in ordering.
    """

    model_config = ConfigDict(frozen=True)

    major: int = Field(..., ge=0)
    minor: int = Field(..., ge=0)
    patch: int = Field(..., ge=0)
    prerelease: str | None = None
    build: str | None = None

    @classmethod
    def parse(cls, text: str) -> "Version":
        """Parse a version string, accepting an optional leading ``v``.

        Raises:
            InvalidVersionError: If the text is not a semantic version.
        """
        match = _VERSION_RE.match(text.strip())
        if not match:
            raise InvalidVersionError(f"Invalid version: {text!r}")
        major, minor, patch, prerelease, build = match.groups()
        return cls(
            major=int(major),
            minor=int(minor),
            patch=int(patch),
            prerelease=prerelease,
            build=build,
        )

    @classmethod
    def try_parse(cls, text: str) -> "Version | None":
        try:
            return cls.parse(text)
        except InvalidVersionError:
            return None

    def bump(self, kind: BumpKind) -> "Version":
        """Return the next version, following ``npm version`` semantics.

        A pre-release is promoted to its release when the bump would not
        move past it (``1.0.0-rc.1`` bumped by ``major`` is ``1.0.0``).
        """
        pre = self.prerelease is not None
        if kind == "major":
            if pre and self.minor == 0 and self.patch == 0:
                return Version(major=self.major, minor=0, patch=0)
            return Version(major=self.major + 1, minor=0, patch=0)
        if kind == "minor":
            if pre and self.patch == 0:
                return Version(major=self.major, minor=self.minor, patch=0)
            return Version(major=self.major, minor=self.minor + 1, patch=0)
        if pre:
            return Version(major=self.major, minor=self.minor, patch=self.patch)
        return Version(major=self.major, minor=self.minor, patch=self.patch + 1)

    def _precedence(self) -> tuple:
        if self.prerelease is None:
            pre_key: tuple = (1,)
        else:
            identifiers = []
            for part in self.prerelease.split("."):
                if part.isdigit():
                    identifiers.append((0, int(part), ""))
                else:
                    identifiers.append((1, 0, part))
            pre_key = (0, tuple(identifiers))
        return (self.major, self.minor, self.patch, pre_key)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self._precedence() < other._precedence()

    def __str__(self) -> str:
        text = f"{self.major}.{self.minor}.{self.patch}"
        if self.prerelease:
            text += f"-{self.prerelease}"
        if self.build:
            text += f"+{self.build}"
        return text


class VersionSelector(BaseModel):
    """What the user asked ``release`` to produce.

    ``infer`` carries no version: it is resolved later against the package
    version and the versions already released in the changelog.
    """

    model_config = ConfigDict(frozen=True)

    kind: SelectorKind
    version: Version | None = None

    @classmethod
    def parse(cls, text: str) -> "VersionSelector":
        lowered = text.strip().lower()
        if lowered in ("major", "minor", "patch", "infer"):
            return cls(kind=lowered)
        return cls(kind="explicit", version=Version.parse(text))

    def __str__(self) -> str:
        if self.kind == "explicit" and self.version is not None:
            return str(self.version)
        return self.kind


class Amount(BaseModel):
    """How many releases to list; ``count=None`` means all of them."""

    model_config = ConfigDict(frozen=True)

    count: int | None = Field(default=None, ge=0)

    @classmethod
    def parse(cls, text: str) -> "Amount":
        lowered = text.strip().lower()
        if lowered == "all":
            return cls()
        if not lowered.isdigit():
            raise ValueError(f"Invalid amount: {text!r} (expected a number or 'all')")
        return cls(count=int(lowered))

    @classmethod
    def all(cls) -> "Amount":
        return cls()

    def limit(self, items: list[T]) -> list[T]:
        if self.count is None:
            return list(items)
        return list(items[: self.count])

    def __str__(self) -> str:
        return "all" if self.count is None else str(self.count)
