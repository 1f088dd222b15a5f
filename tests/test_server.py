"""Tests for the restructure API."""

from __future__ import annotations

from unittest.mock import AsyncMock, patch

import pytest
from fastapi.testclient import TestClient

from guidetiles.exceptions import ConfigurationError, GuideNotFoundError, StoreError
from guidetiles.schemas import RestructureResult
from server.main import app

OPEN = '<div class="feature-box">'
TILED_BODY = f"# Doc\n\n{OPEN}\n\n## A\n\nShort text.\n\n</div>"


@pytest.fixture
def client() -> TestClient:
    return TestClient(app)


class TestHealth:
    """Tests for the health endpoint."""

    def test_health(self, client: TestClient) -> None:
        """Returns ok."""
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "ok"}


class TestRestructureEndpoint:
    """Tests for POST /api/restructure."""

    def test_restructures_body(self, client: TestClient) -> None:
        """The body is returned tiled."""
        response = client.post("/api/restructure", json={"body": "# Doc\n\n## A\n\nShort text."})

        assert response.status_code == 200
        data = response.json()
        assert data["body"] == TILED_BODY
        assert data["title"] == "# Doc"
        assert data["tile_count"] == 1
        assert "Tiles: 0 -> 1" in data["summary"]

    def test_accepts_options(self, client: TestClient) -> None:
        """Transform options are applied."""
        response = client.post(
            "/api/restructure",
            json={"body": "Intro prose.\n\n## A\n\ntext", "intro_heading": "Overview", "budget_chars": 500},
        )

        assert response.status_code == 200
        assert response.json()["body"].startswith(f"{OPEN}\n\n## Overview\n\nIntro prose.")

    def test_rejects_unknown_fields(self, client: TestClient) -> None:
        """Unknown options are a validation error."""
        response = client.post("/api/restructure", json={"body": "x", "budget": 10})
        assert response.status_code == 422

    def test_rejects_invalid_budget(self, client: TestClient) -> None:
        """The budget must be positive."""
        response = client.post("/api/restructure", json={"body": "x", "budget_chars": 0})
        assert response.status_code == 422


class TestGuideEndpoint:
    """Tests for POST /api/guides/{slug}/restructure."""

    def test_dry_run(self, client: TestClient) -> None:
        """The dry_run flag is forwarded."""
        result = RestructureResult(slug="doc", changed=True, tile_count=1, body=TILED_BODY, dry_run=True)
        with patch(
            "server.routers.restructure.restructure_guide", new_callable=AsyncMock, return_value=result
        ) as mock_run:
            response = client.post("/api/guides/doc/restructure?dry_run=true")

        assert response.status_code == 200
        assert response.json()["body"] == TILED_BODY
        assert mock_run.await_args.args == ("doc",)
        assert mock_run.await_args.kwargs["dry_run"] is True

    @pytest.mark.parametrize(
        ("error", "status_code"),
        [
            (GuideNotFoundError("No guide found for 'doc'"), 404),
            (ConfigurationError("SUPABASE_URL is not set"), 503),
            (StoreError("PATCH failed with HTTP 500"), 502),
        ],
    )
    def test_error_mapping(self, client: TestClient, error: Exception, status_code: int) -> None:
        """Store errors map to HTTP status codes."""
        with patch("server.routers.restructure.restructure_guide", new_callable=AsyncMock, side_effect=error):
            response = client.post("/api/guides/doc/restructure")

        assert response.status_code == status_code
        assert response.json()["detail"] == str(error)

    def test_documented_error_schema_matches_payload(self, client: TestClient) -> None:
        """The OpenAPI error model has the same field the handlers return."""
        schema = client.get("/openapi.json").json()
        operation = schema["paths"]["/api/guides/{slug}/restructure"]["post"]

        for code in ("404", "502", "503"):
            ref = operation["responses"][code]["content"]["application/json"]["schema"]["$ref"]
            assert ref.endswith("/ErrorResponse")
        assert list(schema["components"]["schemas"]["ErrorResponse"]["properties"]) == ["detail"]
