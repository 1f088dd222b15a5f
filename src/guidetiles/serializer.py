"""Render tiles back into a container-wrapped markdown body."""

from __future__ import annotations

import re
from typing import Iterable

from guidetiles.config import GUIDETILES_CONTAINER_CLOSE, GUIDETILES_CONTAINER_OPEN
from guidetiles.schemas import Block, Tile

_BLANK_RUN_RE = re.compile(r"\n{3,}")


def serialize(
    title: Block | None,
    tiles: Iterable[Tile],
    *,
    container_open: str = GUIDETILES_CONTAINER_OPEN,
    container_close: str = GUIDETILES_CONTAINER_CLOSE,
) -> str:
    """Render the title and tiles as a markdown body.

    The title line comes first, then one container per tile. Blocks, tiles
    and the title are all separated by a single blank line.
    """
    parts: list[str] = []
    if title is not None:
        parts.append(title.text)
    for tile in tiles:
        content = tile.render()
        if not content.strip():
            continue
        parts.append(f"{container_open}\n\n{content}\n\n{container_close}")
    return collapse_blank_lines("\n\n".join(parts)).strip()


def collapse_blank_lines(text: str) -> str:
    """Collapse runs of three or more newlines to a single blank line."""
    return _BLANK_RUN_RE.sub("\n\n", text)


def count_tiles(body: str | None, container_open: str = GUIDETILES_CONTAINER_OPEN) -> int:
    """Count the containers opened in a body."""
    if not body:
        return 0
    return body.count(container_open)
