"""Summaries of restructured bodies for command-line and API output."""

from __future__ import annotations

try:
    import tiktoken
except ImportError:  # pragma: no cover - optional dependency
    tiktoken = None

from guidetiles.config import GUIDETILES_CONTAINER_OPEN
from guidetiles.schemas import RestructureResult
from guidetiles.serializer import count_tiles


def summarize_body(before: str | None, after: str, container_open: str = GUIDETILES_CONTAINER_OPEN) -> str:
    """Describe how a body changed."""
    before = before or ""
    lines = [
        f"Tiles: {count_tiles(before, container_open)} -> {count_tiles(after, container_open)}",
        f"Characters: {len(before)} -> {len(after)}",
    ]
    if before == after:
        lines.append("Unchanged")
    token_estimate = _format_token_count(after)
    if token_estimate:
        lines.append(f"Estimated tokens: {token_estimate}")
    return "\n".join(lines)


def format_result(result: RestructureResult) -> str:
    """One-line status for a restructured guide."""
    label = result.title or result.slug
    if not result.ok:
        return f"FAILED  {label}: {result.error}"
    if not result.changed:
        return f"SKIPPED {label} (already formatted, {result.tile_count} tiles)"
    verb = "WOULD UPDATE" if result.dry_run else "UPDATED"
    return f"{verb} {label} ({result.tiles_before} -> {result.tile_count} tiles)"


def _format_token_count(text: str) -> str | None:
    if not tiktoken:
        return None
    try:
        encoding = tiktoken.get_encoding("o200k_base")
        total_tokens = len(encoding.encode(text, disallowed_special=()))
    except Exception:
        return None

    if total_tokens >= 1_000_000:
        return f"{total_tokens / 1_000_000:.1f}M"
    if total_tokens >= 1_000:
        return f"{total_tokens / 1_000:.1f}k"
    return str(total_tokens)
