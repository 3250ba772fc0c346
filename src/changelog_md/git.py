"""Minimal git wrapper used after a release."""

from __future__ import annotations

import logging
import shutil
import subprocess
from pathlib import Path

from changelog_md.exceptions import GitError

logger = logging.getLogger(__name__)


class Git:
    """Run git commands inside a working directory."""

    def __init__(self, cwd: Path | str | None = None) -> None:
        if shutil.which("git") is None:
            raise GitError("git is not installed or not on PATH")
        self.cwd = Path(cwd or ".").resolve()

    def add(self, path: Path | str) -> "Git":
        self._run("add", str(path))
        return self

    def commit(self, message: str) -> "Git":
        self._run("commit", "-m", message)
        return self

    def remote_url(self, name: str = "origin") -> str:
        return self._run("remote", "get-url", name)

    def _run(self, *args: str) -> str:
        logger.debug("Running git %s in %s", " ".join(args), self.cwd)
        result = subprocess.run(
            ["git", *args],
            cwd=self.cwd,
            capture_output=True,
            text=True,
            check=False,
        )
        if result.returncode != 0:
            raise GitError(f"git {' '.join(args)} failed: {result.stderr.strip()}")
        return result.stdout.strip()
