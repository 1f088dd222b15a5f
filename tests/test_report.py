"""Tests for change summaries."""

from __future__ import annotations

from unittest.mock import patch

from guidetiles.report import format_result, summarize_body
from guidetiles.schemas import RestructureResult

OPEN = '<div class="feature-box">'


class TestSummarizeBody:
    """Tests for summarize_body function."""

    def test_counts_tiles_and_characters(self) -> None:
        """Reports tile and character counts before and after."""
        after = f"{OPEN}\n\ntext\n\n</div>"
        with patch("guidetiles.report.tiktoken", None):
            summary = summarize_body("text", after)

        assert summary == f"Tiles: 0 -> 1\nCharacters: 4 -> {len(after)}"

    def test_unchanged(self) -> None:
        """Identical bodies are flagged."""
        with patch("guidetiles.report.tiktoken", None):
            assert summarize_body("same", "same").endswith("Unchanged")

    def test_missing_before(self) -> None:
        """A missing body counts as empty."""
        with patch("guidetiles.report.tiktoken", None):
            assert summarize_body(None, "").startswith("Tiles: 0 -> 0\nCharacters: 0 -> 0")


class TestFormatResult:
    """Tests for format_result function."""

    def test_updated(self) -> None:
        result = RestructureResult(slug="s", title="Guide", changed=True, tiles_before=3, tile_count=5)
        assert format_result(result) == "UPDATED Guide (3 -> 5 tiles)"

    def test_dry_run(self) -> None:
        result = RestructureResult(slug="s", changed=True, tile_count=2, dry_run=True)
        assert format_result(result) == "WOULD UPDATE s (0 -> 2 tiles)"

    def test_skipped(self) -> None:
        result = RestructureResult(slug="s", title="Guide", tile_count=4)
        assert format_result(result) == "SKIPPED Guide (already formatted, 4 tiles)"

    def test_failed(self) -> None:
        result = RestructureResult(slug="s", error="boom")
        assert format_result(result) == "FAILED  s: boom"
