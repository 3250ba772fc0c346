"""Module entry point for running with python -m changelog_md."""

import sys

from changelog_md.cli import main

if __name__ == "__main__":
    sys.exit(main())
