"""Shared schemas for changelog-md."""

from changelog_md.schemas.github import GitHubReference
from changelog_md.schemas.nodes import Blank, Heading, LinkDefinition, ListItem, Node, Raw
from changelog_md.schemas.release import ReleaseInfo
from changelog_md.schemas.versions import Amount, Version, VersionSelector

__all__ = [
    "Amount",
    "Blank",
    "GitHubReference",
    "Heading",
    "LinkDefinition",
    "ListItem",
    "Node",
    "Raw",
    "ReleaseInfo",
    "Version",
    "VersionSelector",
]
