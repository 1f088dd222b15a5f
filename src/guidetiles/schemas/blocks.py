"""Parsed markdown block models."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class BlockKind(str, Enum):
    """Enumeration of the block kinds the parser recognizes."""

    TITLE = "title"
    HEADING = "heading"
    PARAGRAPH = "paragraph"
    LIST = "list"
    TABLE = "table"
    RAW = "raw"


class Block(BaseModel):
    """A single parsed unit of a markdown body.

    Attributes:
        kind: What the block is.
        text: Verbatim source text; tables and lists keep internal newlines.
        ordinal: Position of the block in the source document.
        level: Number of ``#`` characters for titles and headings.
    """

    model_config = ConfigDict(frozen=True)

    kind: BlockKind
    text: str
    ordinal: int = Field(..., ge=0)
    level: int | None = Field(default=None, ge=1, le=6)

    @property
    def is_heading(self) -> bool:
        return self.kind in (BlockKind.TITLE, BlockKind.HEADING)

    @property
    def heading_text(self) -> str:
        """Heading text without the ``#`` markers; empty for other kinds."""
        if not self.is_heading:
            return ""
        return self.text.strip().lstrip("#").strip().rstrip("#").strip()


class ClassifiedBlock(Block):
    """A block tagged with whether it may be rewritten."""

    atomic: bool
