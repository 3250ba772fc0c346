"""Release listing model."""

from __future__ import annotations

from pydantic import BaseModel


class ReleaseInfo(BaseModel):
    """A released version heading."""

    version: str
    date: str | None = None

    def __str__(self) -> str:
        if self.date:
            return f"{self.version} ({self.date})"
        return self.version
