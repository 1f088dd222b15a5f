"""HTTP utilities for talking to the guides backend with retry logic."""

from __future__ import annotations

import asyncio
from typing import Any, Final

import httpx

from guidetiles.config import (
    GUIDETILES_FETCH_BACKOFF_S,
    GUIDETILES_FETCH_MAX_RETRIES,
    GUIDETILES_FETCH_TIMEOUT_S,
    GUIDETILES_USER_AGENT,
)
from guidetiles.exceptions import StoreError

RETRY_STATUS_CODES: Final[frozenset[int]] = frozenset({429, 500, 502, 503, 504})

_MAX_REDIRECTS: Final[int] = 5


def create_client(headers: dict[str, str] | None = None) -> httpx.AsyncClient:
    """Create a pooled client with the project's timeout and user agent."""
    return httpx.AsyncClient(
        timeout=httpx.Timeout(GUIDETILES_FETCH_TIMEOUT_S),
        headers={"User-Agent": GUIDETILES_USER_AGENT, **(headers or {})},
        follow_redirects=True,
        max_redirects=_MAX_REDIRECTS,
    )


async def request_with_retries(
    method: str,
    url: str,
    *,
    client: httpx.AsyncClient | None = None,
    params: dict[str, str] | None = None,
    json: Any = None,
    headers: dict[str, str] | None = None,
) -> httpx.Response:
    """Send a request, retrying transient failures.

    Args:
        method: HTTP method.
        url: The URL to request.
        client: Optional httpx.AsyncClient for connection pooling. If not
            provided, a new client is created for this request.
        params: Query parameters.
        json: JSON payload for write requests.
        headers: Extra headers for this request.

    Returns:
        The successful response.

    Raises:
        StoreError: If the request fails after all retries or returns a
            non-retryable error status.
    """
    last_exc: Exception | None = None

    async def do_request(http_client: httpx.AsyncClient) -> httpx.Response:
        nonlocal last_exc

        for attempt in range(GUIDETILES_FETCH_MAX_RETRIES + 1):
            try:
                response = await http_client.request(method, url, params=params, json=json, headers=headers)

                if response.status_code in RETRY_STATUS_CODES:
                    last_exc = StoreError(f"HTTP {response.status_code} from {url}")
                else:
                    response.raise_for_status()
                    return response
            except httpx.HTTPStatusError as exc:
                raise StoreError(f"{method} {url} failed with HTTP {exc.response.status_code}: {exc.response.text}") from exc
            except httpx.RequestError as exc:
                last_exc = exc

            if attempt < GUIDETILES_FETCH_MAX_RETRIES:
                backoff = GUIDETILES_FETCH_BACKOFF_S * (2**attempt)
                await asyncio.sleep(backoff)

        raise StoreError(f"Failed to {method} {url}: {last_exc}")

    if client is not None:
        return await do_request(client)

    async with create_client() as new_client:
        return await do_request(new_client)
