"""Section indexing and heading utilities."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import NamedTuple, Sequence

from changelog_md.schemas import Heading, Node

UNRELEASED = "unreleased"

_RELEASE_HEADING_RE = re.compile(
    r"^\[?v?(\d+\.\d+\.\d+(?:[-+][0-9A-Za-z.+-]*)?)\]?(?:\s+-\s+(.*))?$",
    re.IGNORECASE,
)


class SectionKey(NamedTuple):
    """Identity of a heading: its level and normalized title."""

    level: int
    title: str


@dataclass(frozen=True)
class Section:
    """A heading and the half-open node range ``[start, end)`` it owns."""

    key: SectionKey
    start: int
    end: int

    @property
    def level(self) -> int:
        return self.key.level

    def contains(self, other: "Section") -> bool:
        return self.start < other.start and other.end <= self.end


def normalize_section_title(title: str) -> str:
    """Normalize section titles for comparison.

    Version headings collapse to the bare version, so ``[1.2.0] - 2024-01-01``
    and ``1.2.0`` address the same section.
    """
    title = re.sub(r"\s+", " ", title.strip().lower())
    release = parse_release_heading(title)
    if release is not None:
        return release[0]
    if title.startswith("[") and title.endswith("]"):
        title = title[1:-1].strip()
    return title


def parse_release_heading(text: str) -> tuple[str, str | None] | None:
    """Split a version heading into ``(version, date)``.

    Returns None for headings that do not start with a version number.
    """
    match = _RELEASE_HEADING_RE.match(text.strip())
    if not match:
        return None
    date = match.group(2).strip() if match.group(2) else None
    return match.group(1), date or None


def build_section_index(nodes: Sequence[Node]) -> list[Section]:
    """Compute the span of every heading, in document order.

    A span runs from its heading up to the next heading of equal or lower
    level, so subsections nest inside their version section.
    """
    headings = [(i, node) for i, node in enumerate(nodes) if isinstance(node, Heading)]
    sections: list[Section] = []
    for position, (start, heading) in enumerate(headings):
        end = len(nodes)
        for next_start, next_heading in headings[position + 1 :]:
            if next_heading.level <= heading.level:
                end = next_start
                break
        key = SectionKey(heading.level, normalize_section_title(heading.text))
        sections.append(Section(key=key, start=start, end=end))
    return sections
