"""Test setup for changelog-md."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

FIXTURES = Path(__file__).resolve().parent / "fixtures"


@pytest.fixture
def sample_text() -> str:
    """A changelog with two releases and GitHub compare links."""
    return (FIXTURES / "CHANGELOG.md").read_text(encoding="utf-8")


@pytest.fixture
def changelog_dir(tmp_path: Path, sample_text: str) -> Path:
    """A project directory holding a copy of the sample changelog."""
    (tmp_path / "CHANGELOG.md").write_text(sample_text, encoding="utf-8")
    return tmp_path
