"""GitHub reference model."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel


class GitHubReference(BaseModel):
    """A commit, pull request or issue on GitHub.

    Attributes:
        kind: What the reference points at.
        ref: Commit SHA, or the pull request / issue number.
        owner: Repository owner; None for a bare commit hash.
        repo: Repository name; None for a bare commit hash.
        title: PR/issue title or commit subject, once resolved.
    """

    kind: Literal["commit", "pull", "issue"]
    ref: str
    owner: str | None = None
    repo: str | None = None
    title: str | None = None

    @property
    def slug(self) -> str | None:
        if self.owner and self.repo:
            return f"{self.owner}/{self.repo}"
        return None

    @property
    def url(self) -> str:
        path = {"commit": "commit", "pull": "pull", "issue": "issues"}[self.kind]
        return f"https://github.com/{self.slug}/{path}/{self.ref}"

    def __str__(self) -> str:
        if self.kind == "commit":
            label = f"[`{self.ref[:7]}`]({self.url})"
        else:
            label = f"[#{self.ref}]({self.url})"
        if self.title:
            return f"{self.title} ({label})"
        return label
