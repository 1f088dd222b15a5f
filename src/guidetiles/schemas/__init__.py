"""Shared schemas for guidetiles."""

from guidetiles.schemas.blocks import Block, BlockKind, ClassifiedBlock
from guidetiles.schemas.guides import Guide, RestructureResult
from guidetiles.schemas.tiles import Section, Tile

__all__ = [
    "Block",
    "BlockKind",
    "ClassifiedBlock",
    "Guide",
    "RestructureResult",
    "Section",
    "Tile",
]
