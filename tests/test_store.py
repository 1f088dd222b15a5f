"""Tests for the guides table client."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from guidetiles.exceptions import ConfigurationError, GuideNotFoundError, StoreError
from guidetiles.schemas import Guide
from guidetiles.store import auth_headers, fetch_guide, list_guides, table_url, update_guide_body

ROW = {
    "id": 7,
    "slug": "raid-guidelines",
    "title": "DQ RAID Guidelines",
    "body": "# DQ RAID Guidelines",
    "domain": "Guidelines",
    "last_updated_at": "2025-01-02T03:04:05+00:00",
}


def _json_response(payload) -> MagicMock:
    response = MagicMock()
    response.json = MagicMock(return_value=payload)
    return response


@pytest.fixture
def backend():
    """Configure backend credentials and capture requests."""
    with (
        patch("guidetiles.store.SUPABASE_URL", "https://db.example.com"),
        patch("guidetiles.store.SUPABASE_SERVICE_ROLE_KEY", "service-key"),
        patch("guidetiles.store.request_with_retries", new_callable=AsyncMock) as mock_request,
    ):
        yield mock_request


class TestConfiguration:
    """Tests for credential and URL helpers."""

    def test_auth_headers(self) -> None:
        """The key is sent as apikey and bearer token."""
        assert auth_headers("k") == {"apikey": "k", "Authorization": "Bearer k"}

    def test_missing_key_raises(self) -> None:
        """An empty key is a configuration error."""
        with patch("guidetiles.store.SUPABASE_SERVICE_ROLE_KEY", ""):
            with pytest.raises(ConfigurationError, match="SUPABASE_SERVICE_ROLE_KEY"):
                auth_headers()

    def test_table_url(self) -> None:
        """The REST path is built from the base URL."""
        assert table_url("https://db.example.com/") == "https://db.example.com/rest/v1/guides"

    def test_missing_url_raises(self) -> None:
        """An empty URL is a configuration error."""
        with patch("guidetiles.store.SUPABASE_URL", ""):
            with pytest.raises(ConfigurationError, match="SUPABASE_URL"):
                table_url()


class TestFetchGuide:
    """Tests for fetch_guide function."""

    @pytest.mark.asyncio
    async def test_fetch_by_slug(self, backend: AsyncMock) -> None:
        """Filters by slug and parses the row."""
        backend.return_value = _json_response([ROW])

        guide = await fetch_guide("raid-guidelines")

        assert guide.id == 7
        assert guide.title == "DQ RAID Guidelines"
        method, url = backend.await_args.args
        assert (method, url) == ("GET", "https://db.example.com/rest/v1/guides")
        assert backend.await_args.kwargs["params"]["slug"] == "eq.raid-guidelines"
        assert backend.await_args.kwargs["headers"]["apikey"] == "service-key"

    @pytest.mark.asyncio
    async def test_fetch_by_id(self, backend: AsyncMock) -> None:
        """Filters by id when no slug is given."""
        backend.return_value = _json_response([ROW])

        await fetch_guide(guide_id=7)

        assert backend.await_args.kwargs["params"]["id"] == "eq.7"

    @pytest.mark.asyncio
    async def test_not_found(self, backend: AsyncMock) -> None:
        """An empty result raises GuideNotFoundError."""
        backend.return_value = _json_response([])

        with pytest.raises(GuideNotFoundError, match="missing"):
            await fetch_guide("missing")

    @pytest.mark.asyncio
    async def test_requires_identifier(self) -> None:
        """Either a slug or an id is needed."""
        with pytest.raises(ValueError, match="slug or a guide_id"):
            await fetch_guide()

    @pytest.mark.asyncio
    async def test_invalid_payload(self, backend: AsyncMock) -> None:
        """A non-list payload is a store error."""
        backend.return_value = _json_response({"message": "oops"})

        with pytest.raises(StoreError, match="Expected a list"):
            await fetch_guide("raid-guidelines")


class TestListGuides:
    """Tests for list_guides function."""

    @pytest.mark.asyncio
    async def test_domain_filter(self, backend: AsyncMock) -> None:
        """Domain filters use a case-insensitive contains match."""
        backend.return_value = _json_response([ROW, {**ROW, "id": 8, "slug": "other"}])

        guides = await list_guides(domain="guideline", limit=20)

        assert [g.slug for g in guides] == ["raid-guidelines", "other"]
        params = backend.await_args.kwargs["params"]
        assert params["domain"] == "ilike.*guideline*"
        assert params["limit"] == "20"


class TestUpdateGuideBody:
    """Tests for update_guide_body function."""

    @pytest.mark.asyncio
    async def test_patches_body_and_timestamp(self, backend: AsyncMock) -> None:
        """Sends the new body with a fresh timestamp."""
        backend.return_value = _json_response([{**ROW, "body": "new"}])
        guide = Guide.model_validate(ROW)

        updated = await update_guide_body(guide, "new")

        assert updated.body == "new"
        kwargs = backend.await_args.kwargs
        assert backend.await_args.args[0] == "PATCH"
        assert kwargs["params"]["id"] == "eq.7"
        assert kwargs["json"]["body"] == "new"
        assert kwargs["json"]["last_updated_at"].endswith("+00:00")
        assert kwargs["headers"]["Prefer"] == "return=representation"

    @pytest.mark.asyncio
    async def test_no_rows_updated(self, backend: AsyncMock) -> None:
        """An update that matches nothing is an error."""
        backend.return_value = _json_response([])

        with pytest.raises(StoreError, match="matched no rows"):
            await update_guide_body(Guide.model_validate(ROW), "new")

    @pytest.mark.asyncio
    async def test_invalid_returned_row(self, backend: AsyncMock) -> None:
        """A malformed row in the update response is a store error."""
        backend.return_value = _json_response([{"id": 7, "slug": None}])

        with pytest.raises(StoreError, match="invalid guide row"):
            await update_guide_body(Guide.model_validate(ROW), "new")


class TestRowValidation:
    """Rows that do not match the guide model."""

    @pytest.mark.asyncio
    async def test_fetch_invalid_row(self, backend: AsyncMock) -> None:
        """A row without a slug raises StoreError, not a validation error."""
        backend.return_value = _json_response([{"id": 2, "slug": None}])

        with pytest.raises(StoreError, match="invalid guide row"):
            await fetch_guide("bad")

    @pytest.mark.asyncio
    async def test_list_invalid_row(self, backend: AsyncMock) -> None:
        """One malformed row fails the listing with StoreError."""
        backend.return_value = _json_response([ROW, {"slug": "no-id"}])

        with pytest.raises(StoreError, match="invalid guide row"):
            await list_guides()
