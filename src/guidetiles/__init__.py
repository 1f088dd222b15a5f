"""guidetiles: restructure markdown guide bodies into bounded tiles."""

from guidetiles.block_parser import parse
from guidetiles.classifier import classify
from guidetiles.exceptions import (
    ConfigurationError,
    GuideNotFoundError,
    GuidetilesError,
    StoreError,
)
from guidetiles.normalizer import normalize, split_sentences
from guidetiles.packer import group_sections, pack
from guidetiles.schemas import Block, BlockKind, ClassifiedBlock, Guide, RestructureResult, Section, Tile
from guidetiles.serializer import serialize
from guidetiles.transform import TileOptions, TransformResult, restructure_body, transform_document

__all__ = [
    "Block",
    "BlockKind",
    "ClassifiedBlock",
    "ConfigurationError",
    "Guide",
    "GuideNotFoundError",
    "GuidetilesError",
    "RestructureResult",
    "Section",
    "StoreError",
    "Tile",
    "TileOptions",
    "TransformResult",
    "classify",
    "group_sections",
    "normalize",
    "pack",
    "parse",
    "restructure_body",
    "serialize",
    "split_sentences",
    "transform_document",
]
