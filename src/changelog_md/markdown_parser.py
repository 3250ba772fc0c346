"""Parse changelog markdown into a flat list of line nodes."""

from __future__ import annotations

import logging
import re

from changelog_md.schemas import Blank, Heading, LinkDefinition, ListItem, Node, Raw

logger = logging.getLogger(__name__)

_HEADING_RE = re.compile(r"^(#{1,6})\s+(.*)$")
_LIST_ITEM_RE = re.compile(r"^(\s*)-\s+(.*)$")
_LINK_DEFINITION_RE = re.compile(r"^\[([^\]]+)\]:\s*(\S+)\s*$")


def parse_markdown(text: str) -> list[Node]:
    """Parse changelog text into nodes, one per line.

    Only headings, ``-`` bullets, reference link definitions and blank lines
    are recognized. Every other line becomes a ``Raw`` node so that it can be
    written back unchanged; parsing never fails.
    """
    nodes = [parse_line(line) for line in split_lines(text)]
    logger.debug("Parsed %d lines into nodes", len(nodes))
    return nodes


def parse_line(line: str) -> Node:
    if not line.strip():
        return Blank()

    match = _HEADING_RE.match(line)
    if match:
        return Heading(level=len(match.group(1)), text=match.group(2).strip())

    match = _LIST_ITEM_RE.match(line)
    if match:
        return ListItem(text=match.group(2).strip(), indent=match.group(1))

    match = _LINK_DEFINITION_RE.match(line)
    if match:
        return LinkDefinition(label=match.group(1), url=match.group(2))

    return Raw(text=line)


def split_lines(text: str) -> list[str]:
    """Split on ``\\n`` only, dropping a trailing ``\\r`` from each line.

    Unlike ``str.splitlines``, form feeds and Unicode line separators stay
    inside their line.
    """
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]
