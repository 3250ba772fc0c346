"""Tests for the git and npm wrappers."""

from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from changelog_md.exceptions import GitError, NpmError
from changelog_md.git import Git
from changelog_md.npm import NPM
from changelog_md.schemas import Version


def _completed(returncode: int = 0, stdout: str = "", stderr: str = "") -> MagicMock:
    return MagicMock(returncode=returncode, stdout=stdout, stderr=stderr)


class TestGit:
    """Tests for the Git wrapper."""

    def test_requires_git(self, tmp_path: Path) -> None:
        with patch("changelog_md.git.shutil.which", return_value=None):
            with pytest.raises(GitError, match="not installed"):
                Git(tmp_path)

    def test_add_and_commit(self, tmp_path: Path) -> None:
        with (
            patch("changelog_md.git.shutil.which", return_value="/usr/bin/git"),
            patch("changelog_md.git.subprocess.run", return_value=_completed()) as run,
        ):
            Git(tmp_path).add(tmp_path / "CHANGELOG.md").commit("update changelog")

        assert run.call_args_list[0].args[0] == ["git", "add", str(tmp_path / "CHANGELOG.md")]
        assert run.call_args_list[1].args[0] == ["git", "commit", "-m", "update changelog"]
        assert run.call_args_list[0].kwargs["cwd"] == tmp_path.resolve()

    def test_remote_url(self, tmp_path: Path) -> None:
        with (
            patch("changelog_md.git.shutil.which", return_value="/usr/bin/git"),
            patch(
                "changelog_md.git.subprocess.run",
                return_value=_completed(stdout="git@github.com:acme/widget.git\n"),
            ),
        ):
            assert Git(tmp_path).remote_url() == "git@github.com:acme/widget.git"

    def test_failure_carries_stderr(self, tmp_path: Path) -> None:
        with (
            patch("changelog_md.git.shutil.which", return_value="/usr/bin/git"),
            patch(
                "changelog_md.git.subprocess.run",
                return_value=_completed(returncode=1, stderr="nothing to commit\n"),
            ),
        ):
            with pytest.raises(GitError, match="nothing to commit"):
                Git(tmp_path).commit("update changelog")


class TestNPM:
    """Tests for the NPM wrapper."""

    def test_current_version(self, tmp_path: Path) -> None:
        (tmp_path / "package.json").write_text(json.dumps({"name": "w", "version": "1.4.2"}))

        assert NPM(tmp_path).current_version() == Version.parse("1.4.2")

    def test_no_package_json(self, tmp_path: Path) -> None:
        assert NPM(tmp_path).current_version() is None

    def test_no_version_field(self, tmp_path: Path) -> None:
        (tmp_path / "package.json").write_text(json.dumps({"name": "w"}))

        assert NPM(tmp_path).current_version() is None

    def test_invalid_json(self, tmp_path: Path) -> None:
        (tmp_path / "package.json").write_text("{not json")

        with pytest.raises(NpmError, match="Cannot read"):
            NPM(tmp_path).current_version()

    def test_invalid_version(self, tmp_path: Path) -> None:
        (tmp_path / "package.json").write_text(json.dumps({"version": "latest"}))

        with pytest.raises(NpmError, match="Invalid version"):
            NPM(tmp_path).current_version()

    def test_version_runs_npm(self, tmp_path: Path) -> None:
        with (
            patch("changelog_md.npm.shutil.which", return_value="/usr/bin/npm"),
            patch("changelog_md.npm.subprocess.run", return_value=_completed(stdout="v1.5.0\n")) as run,
        ):
            result = NPM(tmp_path).version(Version.parse("1.5.0"))

        assert result == "v1.5.0"
        assert run.call_args.args[0] == ["npm", "version", "1.5.0", "--allow-same-version"]

    def test_version_failure(self, tmp_path: Path) -> None:
        with (
            patch("changelog_md.npm.shutil.which", return_value="/usr/bin/npm"),
            patch(
                "changelog_md.npm.subprocess.run",
                return_value=_completed(returncode=1, stderr="Git working directory not clean."),
            ),
        ):
            with pytest.raises(NpmError, match="not clean"):
                NPM(tmp_path).version("1.5.0")

    def test_requires_npm(self, tmp_path: Path) -> None:
        with patch("changelog_md.npm.shutil.which", return_value=None):
            with pytest.raises(NpmError, match="not installed"):
                NPM(tmp_path).version("1.5.0")
