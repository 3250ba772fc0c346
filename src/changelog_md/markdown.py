"""Render changelog nodes back to Markdown."""

from __future__ import annotations

from typing import Iterable

from changelog_md.schemas import Blank, Heading, LinkDefinition, ListItem, Node, Raw


def render_markdown(nodes: Iterable[Node]) -> str:
    """Serialize nodes to text, one line per node, with a trailing newline."""
    lines = [render_node(node) for node in nodes]
    if not lines:
        return ""
    return "\n".join(lines) + "\n"


def render_node(node: Node) -> str:
    if isinstance(node, Heading):
        return f"{'#' * node.level} {node.text}"
    if isinstance(node, ListItem):
        return f"{node.indent}- {node.text}"
    if isinstance(node, LinkDefinition):
        return f"[{node.label}]: {node.url}"
    if isinstance(node, Blank):
        return ""
    if isinstance(node, Raw):
        return node.text
    raise TypeError(f"Unsupported node type: {type(node).__name__}")
