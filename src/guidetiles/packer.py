"""Group classified blocks into sections and pack sections into tiles."""

from __future__ import annotations

import re
from typing import Iterable

from guidetiles.config import GUIDETILES_BUDGET_CHARS, GUIDETILES_INTRO_HEADINGS
from guidetiles.schemas import BlockKind, ClassifiedBlock, Section, Tile
from guidetiles.schemas.tiles import BLOCK_SEPARATOR


def normalize_heading_name(text: str) -> str:
    """Normalize heading text for case-insensitive comparison."""
    text = text.strip().strip("*_").strip()
    return re.sub(r"\s+", " ", text).casefold()


def group_sections(blocks: Iterable[ClassifiedBlock]) -> list[Section]:
    """Split blocks into sections.

    A section is a heading plus every following block up to the next heading
    of equal or shallower level. Blocks before the first heading form an
    untitled section. Title blocks are left out; the serializer emits them.
    """
    sections: list[Section] = []
    current: Section | None = None

    for block in blocks:
        if block.kind is BlockKind.TITLE:
            continue
        if block.kind is BlockKind.HEADING:
            level = block.level or 1
            if current is not None and current.heading is not None:
                current_level = current.heading.level or 1
                if level > current_level:
                    current.blocks.append(block)
                    continue
            current = Section(heading=block)
            sections.append(current)
            continue
        if current is None:
            current = Section()
            sections.append(current)
        current.blocks.append(block)

    return [section for section in sections if not section.is_empty]


def pack(
    blocks: Iterable[ClassifiedBlock],
    *,
    budget_chars: int = GUIDETILES_BUDGET_CHARS,
    intro_heading_names: Iterable[str] = GUIDETILES_INTRO_HEADINGS,
) -> list[Tile]:
    """Pack classified blocks into tiles of whole sections.

    Args:
        blocks: Classified blocks in document order.
        budget_chars: Maximum rendered size of a multi-section tile.
        intro_heading_names: Heading texts that always get a tile of their own.

    Returns:
        Tiles in document order. A tile larger than ``budget_chars`` always
        holds exactly one section.
    """
    intro_names = {normalize_heading_name(name) for name in intro_heading_names}
    tiles: list[Tile] = []
    pending: list[Section] = []

    def flush() -> None:
        if pending:
            tiles.append(Tile(sections=list(pending)))
            pending.clear()

    for index, section in enumerate(group_sections(blocks)):
        standalone = (
            index == 0
            or (section.heading is not None and normalize_heading_name(section.heading_text) in intro_names)
            or section.size > budget_chars
        )
        if standalone:
            flush()
            tiles.append(Tile(sections=[section]))
            continue

        if pending and _fits(pending, section, budget_chars) and _can_share_tile(pending, section):
            pending.append(section)
            continue

        flush()
        pending.append(section)

    flush()
    return tiles


def _fits(pending: list[Section], section: Section, budget_chars: int) -> bool:
    combined = sum(s.size for s in pending) + section.size + len(BLOCK_SEPARATOR) * len(pending)
    return combined <= budget_chars


def _can_share_tile(pending: list[Section], section: Section) -> bool:
    """Decide whether ``section`` may join the pending tile.

    Prose sections merge freely. A table never shares a tile with prose;
    two table sections share only when one of each pair is nothing but a table.
    """
    pending_has_table = any(s.has_table for s in pending)
    if not pending_has_table and not section.has_table:
        return True
    if pending_has_table != section.has_table:
        return False
    if not all(s.has_table for s in pending):
        return False
    return section.is_table_only or all(s.is_table_only for s in pending)
