"""Read-only queries: release listing and release notes."""

from __future__ import annotations

from changelog_md.document import Document
from changelog_md.exceptions import MissingSectionError
from changelog_md.markdown import render_markdown
from changelog_md.schemas import Amount, Blank, LinkDefinition, Node, ReleaseInfo
from changelog_md.sections import UNRELEASED, Section

LATEST = "latest"


def list_releases(document: Document, amount: Amount | None = None) -> list[ReleaseInfo]:
    """Return released versions, newest first, bounded by ``amount``."""
    return (amount or Amount.all()).limit(document.releases())


def resolve_notes_section(document: Document, token: str | None = None) -> Section:
    """Map ``unreleased``/``latest``/a version to a section.

    Raises:
        MissingSectionError: If the requested version is not in the changelog.
    """
    token = (token or UNRELEASED).strip()
    if token.lower() == LATEST:
        releases = document.releases()
        if not releases:
            raise MissingSectionError("The changelog has no released versions yet")
        token = releases[0].version

    section = document.find_section(token, level=2)
    if section is None:
        raise MissingSectionError(f"No section found for {token!r}")
    return section


def notes(document: Document, token: str | None = None) -> str:
    """Render the body of a version section as release notes.

    Empty subsections and link definitions are left out, so a section with no
    entries renders as an empty string.
    """
    section = resolve_notes_section(document, token)
    nodes = document.nodes
    children = document.subsections(section)

    body: list[Node] = []
    first_child = children[0].start if children else section.end
    body.extend(nodes[section.start + 1 : first_child])
    for child in children:
        span = nodes[child.start : child.end]
        if any(not isinstance(node, (Blank, LinkDefinition)) for node in span[1:]):
            body.extend(span)

    return render_markdown(_tidy(body))


def _tidy(nodes: list[Node]) -> list[Node]:
    """Drop link definitions, collapse blank runs and trim blank edges."""
    tidy: list[Node] = []
    for node in nodes:
        if isinstance(node, LinkDefinition):
            continue
        if isinstance(node, Blank) and (not tidy or isinstance(tidy[-1], Blank)):
            continue
        tidy.append(node)
    while tidy and isinstance(tidy[-1], Blank):
        tidy.pop()
    return tidy
