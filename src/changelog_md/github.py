"""Resolve GitHub commit, pull request and issue links into entry text."""

from __future__ import annotations

import logging
import re
from urllib.parse import urlparse

import httpx

from changelog_md.config import CHANGELOG_MD_GITHUB_API_URL, CHANGELOG_MD_GITHUB_TOKEN
from changelog_md.exceptions import LinkResolutionError
from changelog_md.http_utils import fetch_json_with_retries
from changelog_md.schemas import GitHubReference

logger = logging.getLogger(__name__)

_GITHUB_HOSTS = {"github.com", "www.github.com"}
_COMMIT_HASH_RE = re.compile(r"^[0-9a-fA-F]{7,40}$")
_PATH_RE = re.compile(
    r"^/(?P<owner>[\w.-]+)/(?P<repo>[\w.-]+)/(?P<kind>commit|pull|issues)/(?P<ref>[0-9A-Za-z]+)/?"
)
_REMOTE_RE = re.compile(r"github\.com[:/](?P<owner>[\w.-]+)/(?P<repo>[\w.-]+?)(?:\.git)?/?$")


def parse_github_link(text: str) -> GitHubReference:
    """Parse a commit hash or a GitHub commit/PR/issue URL.

    Raises:
        LinkResolutionError: If the input matches none of the supported forms.
    """
    text = text.strip()
    if _COMMIT_HASH_RE.match(text):
        return GitHubReference(kind="commit", ref=text.lower())

    parsed = urlparse(text)
    if parsed.scheme not in ("http", "https"):
        raise LinkResolutionError(
            f"Unsupported link {text!r}: expected a commit hash or a GitHub URL"
        )
    if parsed.username or parsed.password:
        raise LinkResolutionError("URLs with credentials are not allowed")
    host = (parsed.hostname or "").lower()
    if host not in _GITHUB_HOSTS:
        raise LinkResolutionError(f"Unsupported host {host!r}: only github.com links are supported")

    match = _PATH_RE.match(parsed.path)
    if not match:
        raise LinkResolutionError(
            f"Unsupported GitHub link {text!r}: expected a commit, pull request or issue URL"
        )
    kind = {"commit": "commit", "pull": "pull", "issues": "issue"}[match.group("kind")]
    ref = match.group("ref")
    if kind == "commit" and not _COMMIT_HASH_RE.match(ref):
        raise LinkResolutionError(f"Invalid commit hash in {text!r}")
    if kind != "commit" and not ref.isdigit():
        raise LinkResolutionError(f"Invalid {kind} number in {text!r}")
    return GitHubReference(
        kind=kind,
        ref=ref.lower(),
        owner=match.group("owner"),
        repo=match.group("repo"),
    )


def repository_from_remote(remote_url: str) -> str:
    """Extract ``owner/repo`` from an https or ssh GitHub remote URL."""
    match = _REMOTE_RE.search(remote_url.strip())
    if not match:
        raise LinkResolutionError(f"Remote {remote_url!r} is not a GitHub repository")
    return f"{match.group('owner')}/{match.group('repo')}"


async def resolve_link(
    text: str,
    *,
    repository: str | None = None,
    client: httpx.AsyncClient | None = None,
    token: str | None = CHANGELOG_MD_GITHUB_TOKEN,
) -> str:
    """Turn a link into a changelog entry such as ``Fix crash ([#12](...))``.

    Args:
        text: Commit hash or GitHub URL.
        repository: ``owner/repo`` used for bare commit hashes.
        client: Optional shared httpx client.
        token: GitHub token for authenticated API calls.

    Raises:
        LinkResolutionError: If the link is unsupported, or a bare hash is
            given without a repository.
        FetchError: If the GitHub API call fails.
    """
    reference = parse_github_link(text)
    if reference.slug is None:
        if not repository:
            raise LinkResolutionError(
                f"Cannot resolve commit {reference.ref}: repository is unknown"
            )
        owner, _, repo = repository.partition("/")
        reference = reference.model_copy(update={"owner": owner, "repo": repo})

    resolved = await fetch_reference(reference, client=client, token=token)
    logger.debug("Resolved %s to %s", text, resolved)
    return str(resolved)


async def fetch_reference(
    reference: GitHubReference,
    *,
    client: httpx.AsyncClient | None = None,
    token: str | None = None,
) -> GitHubReference:
    """Fill in the title (and full SHA for commits) from the GitHub API."""
    api = f"{CHANGELOG_MD_GITHUB_API_URL}/repos/{reference.slug}"
    if reference.kind == "commit":
        data = await fetch_json_with_retries(
            f"{api}/commits/{reference.ref}",
            client=client,
            token=token,
            on_404=LinkResolutionError,
            on_404_message=f"Commit {reference.ref} not found in {reference.slug}",
        )
        message = data.get("commit", {}).get("message", "")
        subject = message.splitlines()[0].strip() if message else None
        return reference.model_copy(
            update={"ref": data.get("sha", reference.ref), "title": subject}
        )

    endpoint = "pulls" if reference.kind == "pull" else "issues"
    data = await fetch_json_with_retries(
        f"{api}/{endpoint}/{reference.ref}",
        client=client,
        token=token,
        on_404=LinkResolutionError,
        on_404_message=f"{reference.kind.capitalize()} #{reference.ref} not found in {reference.slug}",
    )
    title = (data.get("title") or "").strip() or None
    return reference.model_copy(update={"title": title})
