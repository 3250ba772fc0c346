"""Section-addressable changelog document."""

from __future__ import annotations

import logging
from typing import Iterable, Sequence, cast

from changelog_md.exceptions import StructuralPreconditionError
from changelog_md.markdown import render_markdown
from changelog_md.markdown_parser import parse_markdown
from changelog_md.schemas import Blank, Heading, LinkDefinition, ListItem, Node, Raw, ReleaseInfo, Version
from changelog_md.sections import (
    UNRELEASED,
    Section,
    SectionKey,
    build_section_index,
    normalize_section_title,
    parse_release_heading,
)

logger = logging.getLogger(__name__)

STANDARD_SUBSECTIONS = ("Added", "Fixed", "Changed", "Deprecated", "Removed")
UNRELEASED_TITLE = "Unreleased"
DEFAULT_TITLE = "Changelog"
DEFAULT_PREAMBLE = (
    "All notable changes to this project will be documented in this file.",
    "",
    "The format is based on [Keep a Changelog](https://keepachangelog.com/en/1.0.0/),",
    "and this project adheres to [Semantic Versioning](https://semver.org/spec/v2.0.0.html).",
)


class Document:
    """A parsed changelog: a flat node list plus a heading span index.

    The index is derived from the nodes and rebuilt after every mutation.
    """

    def __init__(self, nodes: Iterable[Node] | None = None) -> None:
        self._nodes: list[Node] = list(nodes or [])
        self._sections: list[Section] = []
        self._index: dict[SectionKey, Section] = {}
        self._reindex()

    @classmethod
    def parse(cls, text: str) -> "Document":
        return cls(parse_markdown(text))

    @classmethod
    def skeleton(cls) -> "Document":
        """Create the canonical empty changelog."""
        document = cls()
        document.ensure_skeleton()
        return document

    @property
    def nodes(self) -> tuple[Node, ...]:
        return tuple(self._nodes)

    @property
    def sections(self) -> list[Section]:
        return list(self._sections)

    def render(self) -> str:
        return render_markdown(self._nodes)

    def replace_nodes(self, nodes: Sequence[Node]) -> None:
        """Swap in a new node list and rebuild the index."""
        self._nodes = list(nodes)
        self._reindex()

    def _reindex(self) -> None:
        self._sections = build_section_index(self._nodes)
        index: dict[SectionKey, Section] = {}
        for section in self._sections:
            index.setdefault(section.key, section)
        self._index = index
        logger.debug(
            "Indexed %d sections over %d nodes", len(self._sections), len(self._nodes)
        )

    # Lookup

    def heading(self, section: Section) -> Heading:
        return cast(Heading, self._nodes[section.start])

    def span(self, section: Section) -> list[Node]:
        return self._nodes[section.start : section.end]

    def find_section(self, name: str, *, level: int | None = None) -> Section | None:
        """Find the first section whose normalized title matches ``name``.

        Version-level (2) headings win over deeper ones. ``unreleased`` only
        ever matches the level-2 Unreleased heading.
        """
        title = normalize_section_title(name)
        if title == UNRELEASED:
            return self._index.get(SectionKey(2, UNRELEASED))
        if level is not None:
            return self._index.get(SectionKey(level, title))
        section = self._index.get(SectionKey(2, title))
        if section is not None:
            return section
        for section in self._sections:
            if section.key.title == title:
                return section
        return None

    def get_contents_of_section(self, name: str) -> list[Node] | None:
        """Return the nodes below a heading, or None if there is no such heading."""
        section = self.find_section(name)
        if section is None:
            return None
        return self._nodes[section.start + 1 : section.end]

    def subsections(self, parent: Section) -> list[Section]:
        """Direct child sections of ``parent``."""
        children = [s for s in self._sections if parent.contains(s)]
        return [c for c in children if not any(o.contains(c) for o in children)]

    def unreleased_section(self) -> Section:
        section = self.find_section(UNRELEASED)
        if section is None:
            raise StructuralPreconditionError(
                "Changelog has no 'Unreleased' section; run `changelog init` to add one"
            )
        return section

    def releases(self) -> list[ReleaseInfo]:
        """Released version headings in document order (newest first)."""
        releases: list[ReleaseInfo] = []
        for section in self._sections:
            if section.level != 2:
                continue
            parsed = parse_release_heading(self.heading(section).text)
            if parsed is not None:
                releases.append(ReleaseInfo(version=parsed[0], date=parsed[1]))
        return releases

    def highest_released_version(self) -> Version | None:
        versions = [Version.try_parse(info.version) for info in self.releases()]
        valid = [version for version in versions if version is not None]
        return max(valid) if valid else None

    # Mutation

    def add_list_item_to_section(self, name: str, message: str) -> None:
        """Append an entry to an Unreleased subsection, creating it if needed.

        Raises:
            StructuralPreconditionError: If there is no Unreleased heading.
        """
        unreleased = self.unreleased_section()
        target = self._find_subsection(unreleased, name)
        nodes = list(self._nodes)

        if target is None:
            position = unreleased.start + 1
            block: list[Node] = [
                Blank(),
                Heading(level=3, text=name),
                Blank(),
                ListItem(text=message),
            ]
            if position < len(nodes) and not isinstance(nodes[position], Blank):
                block.append(Blank())
        else:
            position = self._content_end(target)
            block = [ListItem(text=message)]
            if position == target.start + 1:
                block.insert(0, Blank())
            if position < len(nodes) and isinstance(nodes[position], (Heading, LinkDefinition)):
                block.append(Blank())

        nodes[position:position] = block
        self.replace_nodes(nodes)
        logger.debug("Added entry to %r at node %d", name, position)

    def ensure_skeleton(self) -> bool:
        """Add the title, Unreleased heading and standard subsections if missing.

        Returns:
            True if the document changed.
        """
        changed = False

        if not any(s.level == 1 for s in self._sections):
            block: list[Node] = [Heading(level=1, text=DEFAULT_TITLE), Blank()]
            block.extend(Raw(text=line) if line else Blank() for line in DEFAULT_PREAMBLE)
            self._insert_block(0, block)
            changed = True

        if self.find_section(UNRELEASED) is None:
            first_version = next((s for s in self._sections if s.level == 2), None)
            if first_version is not None:
                position = first_version.start
            else:
                position = self._content_end_of_document()
            self._insert_block(position, [Heading(level=2, text=UNRELEASED_TITLE)])
            changed = True

        for name in STANDARD_SUBSECTIONS:
            unreleased = self.unreleased_section()
            if self._find_subsection(unreleased, name) is None:
                self._insert_block(self._content_end(unreleased), [Heading(level=3, text=name)])
                changed = True

        return changed

    # Helpers

    def _find_subsection(self, parent: Section, name: str) -> Section | None:
        title = normalize_section_title(name)
        for section in self.subsections(parent):
            if section.level == 3 and section.key.title == title:
                return section
        return None

    def _content_end(self, section: Section) -> int:
        """Index just after the last non-blank node of a section."""
        end = section.end
        while end > section.start + 1 and isinstance(self._nodes[end - 1], (Blank, LinkDefinition)):
            end -= 1
        return end

    def _content_end_of_document(self) -> int:
        end = len(self._nodes)
        while end > 0 and isinstance(self._nodes[end - 1], Blank):
            end -= 1
        return end

    def _insert_block(self, position: int, block: list[Node]) -> None:
        """Insert nodes keeping one blank line on each side."""
        nodes = list(self._nodes)
        block = list(block)
        if position > 0 and not isinstance(nodes[position - 1], Blank):
            block.insert(0, Blank())
        if position < len(nodes) and not isinstance(nodes[position], Blank):
            block.append(Blank())
        nodes[position:position] = block
        self.replace_nodes(nodes)
