"""Logging setup for the changelog command line."""

from __future__ import annotations

import logging
import sys

from changelog_md.config import CHANGELOG_MD_LOG_LEVEL

_FORMAT = "%(levelname)s %(name)s: %(message)s"


def configure_logging(level: str | int | None = None) -> None:
    """Send log records to stderr at ``level`` (default from the environment)."""
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(_FORMAT))
    root = logging.getLogger("changelog_md")
    root.handlers = [handler]
    root.setLevel(level or CHANGELOG_MD_LOG_LEVEL)
    root.propagate = False


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
