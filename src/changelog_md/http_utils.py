"""HTTP utilities for JSON APIs with retry logic."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Final

import httpx

from changelog_md.config import (
    CHANGELOG_MD_FETCH_BACKOFF_S,
    CHANGELOG_MD_FETCH_MAX_RETRIES,
    CHANGELOG_MD_FETCH_TIMEOUT_S,
    CHANGELOG_MD_USER_AGENT,
)
from changelog_md.exceptions import FetchError

logger = logging.getLogger(__name__)

RETRY_STATUS_CODES: Final[frozenset[int]] = frozenset({429, 500, 502, 503, 504})

_MAX_REDIRECTS: Final[int] = 5


async def fetch_json_with_retries(
    url: str,
    *,
    client: httpx.AsyncClient | None = None,
    token: str | None = None,
    on_404: type[Exception] | None = None,
    on_404_message: str | None = None,
) -> Any:
    """Fetch and decode a JSON document, retrying transient failures.

    Args:
        url: The URL to fetch.
        client: Optional httpx.AsyncClient for connection pooling. If not
            provided, a new client is created for this request.
        token: Optional bearer token sent as the Authorization header.
        on_404: Custom exception class to raise on 404. Defaults to FetchError.
        on_404_message: Custom error message for 404 responses.

    Returns:
        The decoded JSON payload.

    Raises:
        FetchError (or custom on_404 exception): If the fetch fails after all
            retries, returns 404, or the body is not JSON.
    """
    timeout = httpx.Timeout(CHANGELOG_MD_FETCH_TIMEOUT_S)
    headers = {
        "User-Agent": CHANGELOG_MD_USER_AGENT,
        "Accept": "application/vnd.github+json",
    }
    if token:
        headers["Authorization"] = f"Bearer {token}"
    last_exc: Exception | None = None
    not_found_exc_class = on_404 or FetchError

    async def do_fetch(http_client: httpx.AsyncClient) -> Any:
        nonlocal last_exc

        for attempt in range(CHANGELOG_MD_FETCH_MAX_RETRIES + 1):
            try:
                response = await http_client.get(url, headers=headers)

                if response.status_code == 404:
                    message = on_404_message or f"Resource not found at {url}"
                    raise not_found_exc_class(message)

                if response.status_code in RETRY_STATUS_CODES:
                    last_exc = FetchError(f"HTTP {response.status_code} from {url}")
                elif 400 <= response.status_code < 500:
                    raise FetchError(f"HTTP {response.status_code} from {url}")
                else:
                    response.raise_for_status()
                    try:
                        return response.json()
                    except ValueError as exc:
                        raise FetchError(f"Invalid JSON from {url}") from exc
            except (httpx.RequestError, httpx.HTTPStatusError) as exc:
                last_exc = exc

            if attempt < CHANGELOG_MD_FETCH_MAX_RETRIES:
                backoff = CHANGELOG_MD_FETCH_BACKOFF_S * (2**attempt)
                logger.debug("Retrying %s in %.2fs after %s", url, backoff, last_exc)
                await asyncio.sleep(backoff)

        raise FetchError(f"Failed to fetch {url}: {last_exc}")

    if client is not None:
        return await do_fetch(client)

    async with httpx.AsyncClient(
        timeout=timeout,
        follow_redirects=True,
        max_redirects=_MAX_REDIRECTS,
    ) as new_client:
        return await do_fetch(new_client)
