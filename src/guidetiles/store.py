"""Read and write guide rows through the backend's REST interface."""

from __future__ import annotations

import logging
from datetime import datetime, timezone

import httpx
from pydantic import ValidationError

from guidetiles.config import GUIDETILES_GUIDES_TABLE, SUPABASE_SERVICE_ROLE_KEY, SUPABASE_URL
from guidetiles.exceptions import ConfigurationError, GuideNotFoundError, StoreError
from guidetiles.http_utils import request_with_retries
from guidetiles.schemas import Guide

logger = logging.getLogger(__name__)

GUIDE_COLUMNS = "id,slug,title,body,domain,last_updated_at"


def auth_headers(api_key: str | None = None) -> dict[str, str]:
    """Headers authenticating against the backend with the service key.

    Raises:
        ConfigurationError: If no key is configured.
    """
    key = api_key if api_key is not None else SUPABASE_SERVICE_ROLE_KEY
    if not key:
        raise ConfigurationError("SUPABASE_SERVICE_ROLE_KEY is not set")
    return {"apikey": key, "Authorization": f"Bearer {key}"}


def table_url(base_url: str | None = None, table: str = GUIDETILES_GUIDES_TABLE) -> str:
    """REST endpoint of the guides table.

    Raises:
        ConfigurationError: If no backend URL is configured.
    """
    base = (base_url if base_url is not None else SUPABASE_URL).rstrip("/")
    if not base:
        raise ConfigurationError("SUPABASE_URL is not set")
    return f"{base}/rest/v1/{table}"


async def fetch_guide(
    slug: str | None = None,
    guide_id: str | int | None = None,
    *,
    client: httpx.AsyncClient | None = None,
) -> Guide:
    """Fetch one guide by slug or id.

    Raises:
        ValueError: If neither ``slug`` nor ``guide_id`` is given.
        GuideNotFoundError: If no row matches.
        StoreError: If the request fails or the row is invalid.
    """
    if slug is None and guide_id is None:
        raise ValueError("fetch_guide needs a slug or a guide_id")

    params = {"select": GUIDE_COLUMNS, "limit": "1"}
    if slug is not None:
        params["slug"] = f"eq.{slug}"
    else:
        params["id"] = f"eq.{guide_id}"

    rows = await _get_rows(params, client=client)
    if not rows:
        raise GuideNotFoundError(f"No guide found for {slug or guide_id!r}")
    return _to_guide(rows[0])


async def list_guides(
    *,
    domain: str | None = None,
    limit: int | None = None,
    client: httpx.AsyncClient | None = None,
) -> list[Guide]:
    """List guides, optionally those whose domain contains ``domain``."""
    params = {"select": GUIDE_COLUMNS, "order": "title.asc"}
    if domain:
        params["domain"] = f"ilike.*{domain}*"
    if limit is not None:
        params["limit"] = str(limit)
    rows = await _get_rows(params, client=client)
    return [_to_guide(row) for row in rows]


async def update_guide_body(
    guide: Guide,
    body: str,
    *,
    client: httpx.AsyncClient | None = None,
) -> Guide:
    """Write a new body and modification timestamp for ``guide``.

    Raises:
        StoreError: If the request fails, no row was updated or the row is invalid.
    """
    payload = {
        "body": body,
        "last_updated_at": datetime.now(timezone.utc).isoformat(),
    }
    response = await request_with_retries(
        "PATCH",
        table_url(),
        client=client,
        params={"id": f"eq.{guide.id}", "select": GUIDE_COLUMNS},
        json=payload,
        headers={**auth_headers(), "Prefer": "return=representation"},
    )
    rows = _decode_rows(response)
    if not rows:
        raise StoreError(f"Update of guide {guide.slug!r} matched no rows")
    logger.info("Updated guide body", extra={"slug": guide.slug, "chars": len(body)})
    return _to_guide(rows[0])


async def _get_rows(params: dict[str, str], *, client: httpx.AsyncClient | None) -> list[dict]:
    response = await request_with_retries(
        "GET",
        table_url(),
        client=client,
        params=params,
        headers=auth_headers(),
    )
    return _decode_rows(response)


def _decode_rows(response: httpx.Response) -> list[dict]:
    try:
        rows = response.json()
    except ValueError as exc:
        raise StoreError(f"Backend returned invalid JSON: {exc}") from exc
    if not isinstance(rows, list):
        raise StoreError(f"Expected a list of rows, got {type(rows).__name__}")
    return rows


def _to_guide(row: dict) -> Guide:
    try:
        return Guide.model_validate(row)
    except ValidationError as exc:
        raise StoreError(f"Backend returned an invalid guide row: {exc}") from exc
