"""Command line interface: ``changelog <command>``."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from changelog_md.changelog import Changelog
from changelog_md.config import CHANGELOG_MD_FILENAME
from changelog_md.exceptions import ChangelogError
from changelog_md.git import Git
from changelog_md.github import parse_github_link, repository_from_remote, resolve_link
from changelog_md.markdown import render_markdown
from changelog_md.npm import NPM
from changelog_md.output import error, output, output_indented, styled
from changelog_md.schemas import Amount, VersionSelector
from changelog_md.utils.logging_config import configure_logging, get_logger

logger = get_logger(__name__)

ENTRY_COMMANDS = {
    "add": "Added",
    "fix": "Fixed",
    "change": "Changed",
    "deprecate": "Deprecated",
    "remove": "Removed",
}

COMMIT_MESSAGE = "update changelog"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="changelog", description="Make CHANGELOG.md changes easier."
    )
    parser.add_argument("--pwd", default=".", help="The current working directory")
    parser.add_argument(
        "-f", "--filename", default=CHANGELOG_MD_FILENAME, help="The changelog filename"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("init", help="Initialize a new CHANGELOG.md file, if it doesn't exist yet")

    for command, section in ENTRY_COMMANDS.items():
        entry = subparsers.add_parser(
            command, help=f'Add a new entry to the changelog in the "{section}" section'
        )
        source = entry.add_mutually_exclusive_group()
        source.add_argument("link", nargs="?", help="A link to the commit, pr, issue, ...")
        source.add_argument("-m", "--message", help="A manual message you want to add")
        entry.set_defaults(section=section)

    release = subparsers.add_parser("release", help="Release a new version")
    release.add_argument(
        "version",
        nargs="?",
        default=VersionSelector(kind="infer"),
        type=VersionSelector.parse,
        help='One of "major", "minor", "patch", "infer" (from package.json) '
        'or an explicit version like "1.2.3"',
    )
    release.add_argument(
        "--with-npm",
        action="store_true",
        help="Commit the changelog and run `npm version <version>` afterwards",
    )

    notes = subparsers.add_parser(
        "notes", help="Get the release notes of a specific version (or unreleased)"
    )
    notes.add_argument(
        "version", nargs="?", help='A version, "unreleased" (default) or "latest"'
    )

    listing = subparsers.add_parser("list", help="Get a list of all versions")
    amount = listing.add_mutually_exclusive_group()
    amount.add_argument(
        "-a", "--amount", type=Amount.parse, default=Amount(count=10), help="Amount of versions to show"
    )
    amount.add_argument("--all", action="store_true", help='Shorthand for "--amount all"')

    return parser


async def run(args: argparse.Namespace) -> int:
    changelog = Changelog(pwd=Path(args.pwd), filename=args.filename)

    if args.command == "init":
        if await changelog.init():
            output(f"Initialized {styled(changelog.path)}")
        else:
            output(f"{styled(changelog.path)} is already initialized")
        return 0

    if args.command in ENTRY_COMMANDS:
        return await _add_entry(changelog, args)

    if args.command == "release":
        return await _release(changelog, args)

    await changelog.load()
    if args.command == "notes":
        sys.stdout.write(changelog.notes(args.version))
        return 0

    if args.command == "list":
        amount = Amount.all() if args.all else args.amount
        for info in changelog.releases(amount):
            print(f"- {info}")
        return 0

    raise ValueError(f"Unknown command: {args.command}")


async def _add_entry(changelog: Changelog, args: argparse.Namespace) -> int:
    if not args.message and not args.link:
        output(
            f"No {styled('<LINK>')}, {styled('<COMMIT HASH>')} or {styled('--message')} "
            f"provided, run {styled(f'changelog {args.command} --help')} for more info"
        )
        return 1

    await changelog.load()
    if args.message:
        message = args.message
    else:
        repository = None
        if parse_github_link(args.link).slug is None:
            remote = await asyncio.to_thread(Git(changelog.pwd).remote_url)
            repository = repository_from_remote(remote)
        message = await resolve_link(args.link, repository=repository)

    changelog.add_entry(args.section, message)
    output(f"Added a new entry to the {styled(args.section)} section:")
    contents = changelog.get_contents_of_section("unreleased")
    if contents is not None:
        output_indented(render_markdown(contents), highlight=f"- {message}")
    await changelog.persist()
    return 0


async def _release(changelog: Changelog, args: argparse.Namespace) -> int:
    output(f"Releasing {styled(args.version, 'bold green')}")
    await changelog.load()
    npm = NPM(changelog.pwd)
    current_version = None
    if args.version.kind != "explicit":
        current_version = await asyncio.to_thread(npm.current_version)
    version = changelog.release(args.version, current_version=current_version)
    await changelog.persist()
    output(f"Released {styled(version, 'bold green')}")

    if args.with_npm:
        git = Git(changelog.pwd)
        await asyncio.to_thread(git.add, changelog.path.resolve())
        await asyncio.to_thread(git.commit, COMMIT_MESSAGE)
        await asyncio.to_thread(npm.version, version)
    return 0


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(logging.DEBUG if args.verbose else None)
    try:
        return asyncio.run(run(args))
    except ChangelogError as exc:
        logger.debug("Command failed", exc_info=True)
        error(str(exc))
        return 1


if __name__ == "__main__":
    sys.exit(main())
