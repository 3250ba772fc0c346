"""Local configuration for changelog-md."""

from __future__ import annotations

import os


DEFAULT_FILENAME = "CHANGELOG.md"
DEFAULT_INFER_BUMP = "patch"
DEFAULT_LOG_LEVEL = "WARNING"
DEFAULT_GITHUB_API_URL = "https://api.github.com"
DEFAULT_FETCH_TIMEOUT_S = 10.0
DEFAULT_FETCH_MAX_RETRIES = 2
DEFAULT_FETCH_BACKOFF_S = 0.5
DEFAULT_USER_AGENT = "changelog-md/0.1"

CHANGELOG_MD_FILENAME = os.getenv("CHANGELOG_MD_FILENAME", DEFAULT_FILENAME)
# One of "major", "minor", "patch" or "strict" (refuse to guess).
CHANGELOG_MD_INFER_BUMP = os.getenv("CHANGELOG_MD_INFER_BUMP", DEFAULT_INFER_BUMP).lower()
CHANGELOG_MD_LOG_LEVEL = os.getenv("CHANGELOG_MD_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()
CHANGELOG_MD_GITHUB_API_URL = os.getenv("CHANGELOG_MD_GITHUB_API_URL", DEFAULT_GITHUB_API_URL).rstrip("/")
CHANGELOG_MD_GITHUB_TOKEN = os.getenv("CHANGELOG_MD_GITHUB_TOKEN") or os.getenv("GITHUB_TOKEN")
CHANGELOG_MD_FETCH_TIMEOUT_S = float(os.getenv("CHANGELOG_MD_FETCH_TIMEOUT_S", str(DEFAULT_FETCH_TIMEOUT_S)))
CHANGELOG_MD_FETCH_MAX_RETRIES = int(os.getenv("CHANGELOG_MD_FETCH_MAX_RETRIES", str(DEFAULT_FETCH_MAX_RETRIES)))
CHANGELOG_MD_FETCH_BACKOFF_S = float(os.getenv("CHANGELOG_MD_FETCH_BACKOFF_S", str(DEFAULT_FETCH_BACKOFF_S)))
CHANGELOG_MD_USER_AGENT = os.getenv("CHANGELOG_MD_USER_AGENT", DEFAULT_USER_AGENT)
