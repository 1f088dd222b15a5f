"""Restructure a guide body into container-wrapped tiles."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from pydantic import BaseModel, Field

from guidetiles.block_parser import parse
from guidetiles.classifier import classify
from guidetiles.config import (
    GUIDETILES_BUDGET_CHARS,
    GUIDETILES_CONTAINER_CLOSE,
    GUIDETILES_CONTAINER_OPEN,
    GUIDETILES_INTRO_HEADINGS,
    GUIDETILES_LENGTH_THRESHOLD,
    GUIDETILES_SENTENCE_THRESHOLD,
)
from guidetiles.normalizer import normalize
from guidetiles.packer import normalize_heading_name, pack
from guidetiles.schemas import BlockKind, ClassifiedBlock, Tile
from guidetiles.serializer import serialize

logger = logging.getLogger(__name__)


@dataclass
class TileOptions:
    """Options for restructuring a body.

    Attributes:
        budget_chars: Maximum rendered size of a tile holding several sections.
        sentence_threshold: A paragraph needs more sentences than this to
            become a bullet list.
        length_threshold: A paragraph needs more characters than this to
            become a bullet list.
        container_open: Markup opening each tile.
        container_close: Markup closing each tile.
        intro_heading_names: Heading texts (case-insensitive) that always get
            a tile of their own.
        normalize_prose: If False, skip the paragraph-to-bullets pass.
        strip_fillers: If True, drop linking words at clause starts when
            converting paragraphs to bullets.
        intro_heading: If set, content before the first heading gets a
            ``## <intro_heading>`` heading.
        dedupe_title: If True, drop ``#`` headings that repeat the title.
    """

    budget_chars: int = GUIDETILES_BUDGET_CHARS
    sentence_threshold: int = GUIDETILES_SENTENCE_THRESHOLD
    length_threshold: int = GUIDETILES_LENGTH_THRESHOLD
    container_open: str = GUIDETILES_CONTAINER_OPEN
    container_close: str = GUIDETILES_CONTAINER_CLOSE
    intro_heading_names: tuple[str, ...] = field(default_factory=lambda: tuple(GUIDETILES_INTRO_HEADINGS))
    normalize_prose: bool = True
    strip_fillers: bool = True
    intro_heading: str | None = None
    dedupe_title: bool = True

    def __post_init__(self) -> None:
        if self.budget_chars <= 0:
            raise ValueError(f"budget_chars must be positive, got {self.budget_chars}")
        if self.sentence_threshold < 0 or self.length_threshold < 0:
            raise ValueError("sentence_threshold and length_threshold must not be negative")
        if not self.container_open.strip() or not self.container_close.strip():
            raise ValueError("container markup must not be blank")
        self.intro_heading_names = tuple(self.intro_heading_names)


class TransformResult(BaseModel):
    """Output of one transform call."""

    title: str | None = None
    tiles: list[Tile] = Field(default_factory=list)
    body: str


def restructure_body(body: str, options: TileOptions | None = None) -> str:
    """Rewrite ``body`` as a title followed by container-wrapped tiles.

    Running the function on its own output returns that output unchanged.
    """
    return transform_document(body, options).body


def transform_document(body: str, options: TileOptions | None = None) -> TransformResult:
    """Parse, classify, normalize, pack and serialize a body.

    Args:
        body: The markdown body, with or without tiles from a previous run.
        options: Transform options. Uses defaults if None.

    Returns:
        The title line, the packed tiles, and the serialized body.
    """
    opts = options or TileOptions()
    if not body or not body.strip():
        return TransformResult(body="")

    blocks = classify(
        parse(body, container_open=opts.container_open, container_close=opts.container_close)
    )
    title = next((block for block in blocks if block.kind is BlockKind.TITLE), None)
    content = [block for block in blocks if block.kind is not BlockKind.TITLE]

    if title is not None and opts.dedupe_title:
        content = _drop_repeated_titles(content, title)

    if opts.normalize_prose:
        content = [
            normalize(
                block,
                sentence_threshold=opts.sentence_threshold,
                length_threshold=opts.length_threshold,
                strip_fillers=opts.strip_fillers,
            )
            for block in content
        ]

    if opts.intro_heading:
        content = _add_intro_heading(content, opts.intro_heading)

    tiles = pack(
        content,
        budget_chars=opts.budget_chars,
        intro_heading_names=opts.intro_heading_names,
    )
    rendered = serialize(
        title,
        tiles,
        container_open=opts.container_open,
        container_close=opts.container_close,
    )

    logger.debug(
        "Restructured body",
        extra={
            "blocks": len(blocks),
            "tiles": len(tiles),
            "chars_before": len(body),
            "chars_after": len(rendered),
        },
    )

    return TransformResult(
        title=title.text if title is not None else None,
        tiles=tiles,
        body=rendered,
    )


def _drop_repeated_titles(blocks: list[ClassifiedBlock], title: ClassifiedBlock) -> list[ClassifiedBlock]:
    title_name = normalize_heading_name(title.heading_text)
    return [
        block
        for block in blocks
        if not (
            block.kind is BlockKind.HEADING
            and block.level == 1
            and normalize_heading_name(block.heading_text) == title_name
        )
    ]


def _add_intro_heading(blocks: list[ClassifiedBlock], name: str) -> list[ClassifiedBlock]:
    if not blocks or blocks[0].kind is BlockKind.HEADING:
        return blocks
    heading = ClassifiedBlock(
        kind=BlockKind.HEADING,
        text=f"## {name}",
        ordinal=blocks[0].ordinal,
        level=2,
        atomic=True,
    )
    return [heading, *blocks]
