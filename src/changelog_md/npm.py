"""package.json version lookup and ``npm version`` bumping."""

from __future__ import annotations

import json
import logging
import shutil
import subprocess
from pathlib import Path

from changelog_md.exceptions import InvalidVersionError, NpmError
from changelog_md.schemas import Version

logger = logging.getLogger(__name__)


class NPM:
    """Package metadata for the project rooted at ``cwd``."""

    def __init__(self, cwd: Path | str | None = None) -> None:
        self.cwd = Path(cwd or ".").resolve()

    @property
    def package_json(self) -> Path:
        return self.cwd / "package.json"

    def current_version(self) -> Version | None:
        """Read ``version`` from package.json.

        Returns:
            The version, or None when there is no package.json or it has no
            version field.

        Raises:
            NpmError: If package.json is unreadable or the version is invalid.
        """
        if not self.package_json.is_file():
            return None
        try:
            data = json.loads(self.package_json.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            raise NpmError(f"Cannot read {self.package_json}: {exc}") from exc

        raw = data.get("version") if isinstance(data, dict) else None
        if not raw:
            return None
        try:
            return Version.parse(str(raw))
        except InvalidVersionError as exc:
            raise NpmError(f"Invalid version in {self.package_json}: {raw!r}") from exc

    def version(self, version: Version | str) -> str:
        """Run ``npm version <version>``, which also tags the release in git.

        Raises:
            NpmError: If npm is missing or the command fails.
        """
        if shutil.which("npm") is None:
            raise NpmError("npm is not installed or not on PATH")
        args = ["npm", "version", str(version), "--allow-same-version"]
        logger.debug("Running %s in %s", " ".join(args), self.cwd)
        result = subprocess.run(
            args,
            cwd=self.cwd,
            capture_output=True,
            text=True,
            check=False,
        )
        if result.returncode != 0:
            raise NpmError(f"npm version {version} failed: {result.stderr.strip()}")
        return result.stdout.strip()
