"""Release the Unreleased section as a new dated version."""

from __future__ import annotations

import logging
import re
from datetime import date

from changelog_md.config import CHANGELOG_MD_INFER_BUMP
from changelog_md.document import STANDARD_SUBSECTIONS, UNRELEASED_TITLE, Document
from changelog_md.exceptions import OutOfOrderVersionError, VersionResolutionError
from changelog_md.schemas import Blank, Heading, LinkDefinition, Node, Version, VersionSelector

logger = logging.getLogger(__name__)

_COMPARE_URL_RE = re.compile(r"^(?P<base>\S+/compare/)(?P<start>[^./]\S*?)\.\.\.(?P<end>\S+)$")

INFER_BUMPS = ("major", "minor", "patch", "strict")


def resolve_version(
    selector: VersionSelector,
    *,
    released: Version | None,
    current_version: Version | None = None,
    infer_bump: str = CHANGELOG_MD_INFER_BUMP,
) -> Version:
    """Turn a selector into the concrete version to release.

    Args:
        selector: The user's choice (major/minor/patch/infer/explicit).
        released: Highest version already released in the changelog.
        current_version: Version from the package metadata, if any.
        infer_bump: How ``infer`` bumps when the package version is not
            ahead of the changelog: "major", "minor", "patch" or "strict"
            (fail instead of bumping).

    Raises:
        OutOfOrderVersionError: If an explicit version is not newer than
            ``released``.
        VersionResolutionError: If ``infer`` has nothing to go on.
    """
    if selector.kind == "explicit":
        version = selector.version
        if version is None:
            raise VersionResolutionError("Explicit selector without a version")
        if released is not None and not version > released:
            raise OutOfOrderVersionError(
                f"Version {version} must be greater than the latest release {released}"
            )
        return version

    if selector.kind in ("major", "minor", "patch"):
        base = released or current_version or Version(major=0, minor=0, patch=0)
        return base.bump(selector.kind)

    if current_version is not None and (released is None or current_version > released):
        logger.debug("Inferred %s from package metadata", current_version)
        return current_version
    if released is None:
        raise VersionResolutionError(
            "Cannot infer a version: no released versions and no package version found"
        )
    if infer_bump not in INFER_BUMPS:
        raise VersionResolutionError(f"Unknown infer bump strategy: {infer_bump!r}")
    if infer_bump == "strict":
        raise VersionResolutionError(
            f"Cannot infer a version: package version {current_version} "
            f"is not newer than the latest release {released}"
        )
    logger.debug("Inferred %s bump of %s", infer_bump, released)
    return released.bump(infer_bump)


def release(
    document: Document,
    selector: VersionSelector,
    *,
    current_version: Version | None = None,
    today: date | None = None,
    infer_bump: str = CHANGELOG_MD_INFER_BUMP,
) -> Version:
    """Turn the Unreleased section into ``{version} - {date}``.

    A fresh Unreleased heading with empty standard subsections is inserted
    above the released section, and existing compare links are extended.
    The document is only modified once every step has succeeded.

    Returns:
        The released version.
    """
    unreleased = document.unreleased_section()
    previous = document.highest_released_version()
    version = resolve_version(
        selector,
        released=previous,
        current_version=current_version,
        infer_bump=infer_bump,
    )
    released_on = (today or date.today()).isoformat()

    nodes = list(document.nodes)
    bracketed = document.heading(unreleased).text.startswith("[")
    nodes[unreleased.start] = Heading(
        level=2,
        text=_release_title(str(version), released_on, bracketed=bracketed),
    )
    nodes[unreleased.start : unreleased.start] = _fresh_unreleased(bracketed=bracketed)
    nodes = update_compare_links(nodes, previous=previous, version=version)

    document.replace_nodes(nodes)
    logger.debug("Released %s on %s", version, released_on)
    return version


def update_compare_links(
    nodes: list[Node], *, previous: Version | None, version: Version
) -> list[Node]:
    """Point ``[unreleased]`` at the new version and add a link for it.

    Only acts when the changelog already carries compare links, labelled
    ``unreleased`` or with the previous version; their URL prefix and tag
    prefix are reused.
    """
    nodes = list(nodes)
    unreleased_at = _find_link(nodes, lambda label: label.lower() == "unreleased")
    previous_at = None
    if previous is not None:
        previous_at = _find_link(nodes, lambda label: _same_version(label, previous))

    template = None
    for position in (previous_at, unreleased_at):
        if position is None:
            continue
        match = _COMPARE_URL_RE.match(nodes[position].url)
        if match:
            template = match
            break
    if template is None:
        logger.debug("No compare links found, skipping link update")
        return nodes

    base = template.group("base")
    tag = template.group("start") if template.group("end") == "HEAD" else template.group("end")
    tag_prefix = "v" if tag.lower().startswith("v") else ""
    new_tag = f"{tag_prefix}{version}"

    additions: list[Node] = []
    if previous is not None:
        additions.append(
            LinkDefinition(label=str(version), url=f"{base}{tag_prefix}{previous}...{new_tag}")
        )

    if unreleased_at is not None:
        label = nodes[unreleased_at].label
        nodes[unreleased_at] = LinkDefinition(label=label, url=f"{base}{new_tag}...HEAD")
        nodes[unreleased_at + 1 : unreleased_at + 1] = additions
    else:
        unreleased_link = LinkDefinition(label="unreleased", url=f"{base}{new_tag}...HEAD")
        nodes[previous_at:previous_at] = [unreleased_link, *additions]
    return nodes


def _release_title(version: str, released_on: str, *, bracketed: bool) -> str:
    if bracketed:
        return f"[{version}] - {released_on}"
    return f"{version} - {released_on}"


def _fresh_unreleased(*, bracketed: bool) -> list[Node]:
    title = f"[{UNRELEASED_TITLE}]" if bracketed else UNRELEASED_TITLE
    block: list[Node] = [Heading(level=2, text=title), Blank()]
    for name in STANDARD_SUBSECTIONS:
        block.extend([Heading(level=3, text=name), Blank()])
    return block


def _find_link(nodes: list[Node], predicate) -> int | None:
    for position, node in enumerate(nodes):
        if isinstance(node, LinkDefinition) and predicate(node.label):
            return position
    return None


def _same_version(label: str, version: Version) -> bool:
    parsed = Version.try_parse(label)
    return parsed is not None and str(parsed) == str(version)
