"""Line-level node models for a parsed changelog."""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field


class Heading(BaseModel):
    """An ATX heading such as ``## 1.2.0 - 2024-01-01``."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["heading"] = "heading"
    level: int = Field(..., ge=1, le=6)
    text: str


class ListItem(BaseModel):
    """A single ``- entry`` bullet line.

    Attributes:
        text: Entry text without the bullet marker.
        indent: Leading whitespace before the marker, kept for nested bullets.
    """

    model_config = ConfigDict(frozen=True)

    kind: Literal["list_item"] = "list_item"
    text: str
    indent: str = ""


class LinkDefinition(BaseModel):
    """A reference-style link target, e.g. ``[1.2.0]: https://...``."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["link_definition"] = "link_definition"
    label: str
    url: str


class Blank(BaseModel):
    """An empty line."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["blank"] = "blank"


class Raw(BaseModel):
    """Any line that is not part of the changelog grammar, kept verbatim."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["raw"] = "raw"
    text: str


Node = Annotated[
    Union[Heading, ListItem, LinkDefinition, Blank, Raw],
    Field(discriminator="kind"),
]
