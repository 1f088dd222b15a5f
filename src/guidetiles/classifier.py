"""Tag parsed blocks as atomic or divisible."""

from __future__ import annotations

import re
from typing import Iterable

from guidetiles.schemas import Block, BlockKind, ClassifiedBlock

_ATOMIC_KINDS = frozenset({BlockKind.TITLE, BlockKind.HEADING, BlockKind.LIST, BlockKind.TABLE})

# Broader than the parser's list rule: catches markers that slipped through as prose.
_MARKER_PREFIX_RE = re.compile(r"^\s*(?:[-*+•]\s+|•|\d+[.)]\s+)\S")


def classify(blocks: Iterable[Block]) -> list[ClassifiedBlock]:
    """Annotate blocks with ``atomic`` and drop raw blocks.

    Titles, headings, lists and tables are atomic. Paragraphs are divisible
    unless they already start with a bullet or number marker.
    """
    classified: list[ClassifiedBlock] = []
    for block in blocks:
        if block.kind is BlockKind.RAW:
            continue
        classified.append(ClassifiedBlock(**block.model_dump(), atomic=is_atomic(block)))
    return classified


def is_atomic(block: Block) -> bool:
    if block.kind in _ATOMIC_KINDS:
        return True
    if block.kind is BlockKind.PARAGRAPH:
        return bool(_MARKER_PREFIX_RE.match(block.text))
    return False
