"""HTTP utilities for fetching JSON from Jira with retry logic."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Final

import httpx

from jt.config import (
    JT_FETCH_BACKOFF_S,
    JT_FETCH_MAX_RETRIES,
    JT_FETCH_TIMEOUT_S,
    JT_USER_AGENT,
)
from jt.exceptions import APIError, FetchError, NotFoundError, ParseError, UnauthorizedError

logger = logging.getLogger(__name__)

RETRY_STATUS_CODES: Final[frozenset[int]] = frozenset({429, 500, 502, 503, 504})
AUTH_STATUS_CODES: Final[frozenset[int]] = frozenset({401, 403})

_MAX_REDIRECTS: Final[int] = 5


def build_client(auth: httpx.Auth | None = None) -> httpx.AsyncClient:
    """Create an AsyncClient configured for the Jira REST API."""
    return httpx.AsyncClient(
        timeout=httpx.Timeout(JT_FETCH_TIMEOUT_S),
        headers={"User-Agent": JT_USER_AGENT, "Accept": "application/json"},
        auth=auth,
        follow_redirects=True,
        max_redirects=_MAX_REDIRECTS,
    )


async def fetch_json_with_retries(
    url: str,
    *,
    client: httpx.AsyncClient | None = None,
    auth: httpx.Auth | None = None,
    on_404: type[Exception] | None = None,
    on_404_message: str | None = None,
) -> Any:
    """Fetch and decode a JSON document, retrying transient failures.

    Args:
        url: The URL to fetch.
        client: Optional httpx.AsyncClient for connection pooling. If not
            provided, a new client is created for this request.
        auth: Credentials for a newly created client. Ignored when
            ``client`` is given.
        on_404: Exception class to raise on 404. Defaults to NotFoundError.
        on_404_message: Custom error message for 404 responses.

    Returns:
        The decoded JSON payload.

    Raises:
        UnauthorizedError: On HTTP 401 or 403.
        NotFoundError (or custom on_404 exception): On HTTP 404.
        APIError: On any other non-retryable error status.
        ParseError: If the body is not valid JSON.
        FetchError: If the fetch still fails after all retries.
    """
    last_exc: Exception | None = None
    not_found_exc_class = on_404 or NotFoundError

    async def do_fetch(http_client: httpx.AsyncClient) -> Any:
        nonlocal last_exc

        for attempt in range(JT_FETCH_MAX_RETRIES + 1):
            try:
                response = await http_client.get(url)
            except httpx.RequestError as exc:
                last_exc = exc
            else:
                status = response.status_code
                if status in AUTH_STATUS_CODES:
                    raise UnauthorizedError()
                if status == 404:
                    raise not_found_exc_class(on_404_message or f"Resource not found at {url}")
                if status in RETRY_STATUS_CODES:
                    last_exc = FetchError(f"HTTP {status} from {url}")
                elif status >= 400:
                    raise APIError(status, response.text)
                else:
                    try:
                        return response.json()
                    except ValueError as exc:
                        raise ParseError(f"Invalid JSON from {url}: {exc}") from exc

            if attempt < JT_FETCH_MAX_RETRIES:
                backoff = JT_FETCH_BACKOFF_S * (2**attempt)
                logger.debug(
                    "Retrying %s in %.2fs after %s", url, backoff, last_exc
                )
                await asyncio.sleep(backoff)

        raise FetchError(f"Failed to fetch {url}: {last_exc}")

    if client is not None:
        return await do_fetch(client)

    async with build_client(auth) as new_client:
        return await do_fetch(new_client)
