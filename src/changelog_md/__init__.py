"""changelog-md: keep a CHANGELOG.md in the Keep a Changelog format."""

from changelog_md.changelog import Changelog
from changelog_md.document import STANDARD_SUBSECTIONS, Document
from changelog_md.exceptions import (
    ChangelogError,
    CollaboratorError,
    FetchError,
    GitError,
    InvalidVersionError,
    LinkResolutionError,
    MissingSectionError,
    NpmError,
    OutOfOrderVersionError,
    StructuralPreconditionError,
    VersionResolutionError,
)
from changelog_md.markdown import render_markdown
from changelog_md.markdown_parser import parse_markdown
from changelog_md.queries import list_releases, notes
from changelog_md.release import release, resolve_version
from changelog_md.schemas import Amount, Version, VersionSelector

__all__ = [
    "STANDARD_SUBSECTIONS",
    "Amount",
    "Changelog",
    "ChangelogError",
    "CollaboratorError",
    "Document",
    "FetchError",
    "GitError",
    "InvalidVersionError",
    "LinkResolutionError",
    "MissingSectionError",
    "NpmError",
    "OutOfOrderVersionError",
    "StructuralPreconditionError",
    "Version",
    "VersionResolutionError",
    "VersionSelector",
    "list_releases",
    "notes",
    "parse_markdown",
    "release",
    "render_markdown",
    "resolve_version",
]
