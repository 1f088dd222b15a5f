"""Split a markdown body into typed blocks."""

from __future__ import annotations

import re

from guidetiles.config import GUIDETILES_CONTAINER_CLOSE, GUIDETILES_CONTAINER_OPEN
from guidetiles.schemas import Block, BlockKind

_HEADING_RE = re.compile(r"^(#{1,6})\s")
_LIST_ITEM_RE = re.compile(r"^\s*(?:[-*•]|\d+\.)\s")
_UNESCAPED_PIPE_RE = re.compile(r"(?<!\\)\|")
_TABLE_SEPARATOR_RE = re.compile(r"^\s*\|?\s*:?-+:?\s*(?:\|\s*:?-+:?\s*)*\|?\s*$")
_DIV_TAG_RE = re.compile(r"^</?div(?:\s[^<>]*)?>$", re.IGNORECASE)


def parse(
    body: str,
    *,
    container_open: str = GUIDETILES_CONTAINER_OPEN,
    container_close: str = GUIDETILES_CONTAINER_CLOSE,
) -> list[Block]:
    """Parse a markdown body into an ordered list of blocks.

    The parse is lossless: joining every block's ``text`` with ``"\\n"``
    gives back ``body`` unchanged. Blank lines and bare container markup are
    kept as one-line ``raw`` blocks so that property holds; the classifier
    drops them.

    Args:
        body: The markdown document.
        container_open: Opening container markup to recognize as raw.
        container_close: Closing container markup to recognize as raw.

    Returns:
        Blocks in document order.
    """
    lines = body.split("\n")
    markup = {container_open.strip(), container_close.strip()}
    blocks: list[Block] = []
    seen_heading = False
    i = 0

    while i < len(lines):
        line = lines[i]
        ordinal = len(blocks)

        if _is_raw(line, markup):
            blocks.append(Block(kind=BlockKind.RAW, text=line, ordinal=ordinal))
            i += 1
            continue

        heading = _HEADING_RE.match(line)
        if heading:
            level = len(heading.group(1))
            kind = BlockKind.TITLE if level == 1 and not seen_heading else BlockKind.HEADING
            seen_heading = True
            blocks.append(Block(kind=kind, text=line, ordinal=ordinal, level=level))
            i += 1
            continue

        if _LIST_ITEM_RE.match(line):
            end = i
            while end < len(lines) and _LIST_ITEM_RE.match(lines[end]):
                end += 1
            blocks.append(Block(kind=BlockKind.LIST, text="\n".join(lines[i:end]), ordinal=ordinal))
            i = end
            continue

        if _has_pipe(line):
            end, is_table = _scan_pipe_run(lines, i, markup)
            if is_table:
                blocks.append(Block(kind=BlockKind.TABLE, text="\n".join(lines[i:end]), ordinal=ordinal))
                i = end
                continue

        end = _scan_paragraph(lines, i, markup)
        blocks.append(Block(kind=BlockKind.PARAGRAPH, text="\n".join(lines[i:end]), ordinal=ordinal))
        i = end

    return blocks


def is_container_markup(line: str, markup: set[str]) -> bool:
    """Return True for a line holding nothing but container markup."""
    stripped = line.strip()
    if not stripped:
        return False
    return stripped in markup or bool(_DIV_TAG_RE.match(stripped))


def _is_raw(line: str, markup: set[str]) -> bool:
    return not line.strip() or is_container_markup(line, markup)


def _has_pipe(line: str) -> bool:
    return bool(_UNESCAPED_PIPE_RE.search(line))


def _starts_block(line: str, markup: set[str]) -> bool:
    return _is_raw(line, markup) or bool(_HEADING_RE.match(line)) or bool(_LIST_ITEM_RE.match(line))


def _scan_pipe_run(lines: list[str], start: int, markup: set[str]) -> tuple[int, bool]:
    """Find the end of a run of pipe lines and whether it forms a table."""
    end = start
    has_separator = False
    while end < len(lines):
        line = lines[end]
        if _is_raw(line, markup) or _HEADING_RE.match(line) or not _has_pipe(line):
            break
        if _TABLE_SEPARATOR_RE.match(line):
            has_separator = True
        end += 1
    return end, has_separator


def _scan_paragraph(lines: list[str], start: int, markup: set[str]) -> int:
    """Return the index one past the last line of the paragraph at ``start``.

    Pipe runs without a separator row are prose and stay in the paragraph.
    """
    end = start
    while end < len(lines):
        line = lines[end]
        if end > start and _starts_block(line, markup):
            break
        if _has_pipe(line):
            run_end, is_table = _scan_pipe_run(lines, end, markup)
            if is_table and end > start:
                break
            end = max(run_end, end + 1)
            continue
        end += 1
    return end
