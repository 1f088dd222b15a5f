"""Section and tile models."""

from __future__ import annotations

from pydantic import BaseModel, Field

from guidetiles.schemas.blocks import BlockKind, ClassifiedBlock

BLOCK_SEPARATOR = "\n\n"


class Section(BaseModel):
    """A heading plus the blocks that belong to it.

    ``heading`` is None for content that appears before the first heading.
    """

    heading: ClassifiedBlock | None = None
    blocks: list[ClassifiedBlock] = Field(default_factory=list)

    @property
    def all_blocks(self) -> list[ClassifiedBlock]:
        if self.heading is None:
            return list(self.blocks)
        return [self.heading, *self.blocks]

    @property
    def heading_text(self) -> str:
        return self.heading.heading_text if self.heading else ""

    @property
    def has_table(self) -> bool:
        return any(block.kind is BlockKind.TABLE for block in self.blocks)

    @property
    def is_table_only(self) -> bool:
        """True when the body holds nothing but tables."""
        return bool(self.blocks) and all(block.kind is BlockKind.TABLE for block in self.blocks)

    @property
    def is_empty(self) -> bool:
        return self.heading is None and not self.blocks

    @property
    def size(self) -> int:
        return len(self.render())

    def render(self) -> str:
        return BLOCK_SEPARATOR.join(block.text for block in self.all_blocks)


class Tile(BaseModel):
    """One or more whole sections rendered inside a single container."""

    sections: list[Section] = Field(default_factory=list)

    @property
    def size(self) -> int:
        """Rendered length of the tile content, container markup excluded."""
        return len(self.render())

    def render(self) -> str:
        return BLOCK_SEPARATOR.join(section.render() for section in self.sections)
