"""Tests for the serializer."""

from __future__ import annotations

from guidetiles.block_parser import parse
from guidetiles.classifier import classify
from guidetiles.packer import pack
from guidetiles.schemas import Block, BlockKind
from guidetiles.serializer import collapse_blank_lines, count_tiles, serialize


class TestSerialize:
    """Tests for serialize function."""

    def test_wraps_each_tile(self) -> None:
        """Title first, then one container per tile."""
        title = Block(kind=BlockKind.TITLE, text="# Doc", ordinal=0, level=1)
        tiles = pack(classify(parse("## A\n\nalpha\n\n- one\n- two\n\n## B\n\nbeta")))

        assert serialize(title, tiles) == (
            "# Doc\n\n"
            '<div class="feature-box">\n\n## A\n\nalpha\n\n- one\n- two\n\n</div>\n\n'
            '<div class="feature-box">\n\n## B\n\nbeta\n\n</div>'
        )

    def test_custom_container_markup(self) -> None:
        """Configured markup replaces the default container."""
        tiles = pack(classify(parse("Only prose.")))
        assert serialize(None, tiles, container_open="<section>", container_close="</section>") == (
            "<section>\n\nOnly prose.\n\n</section>"
        )

    def test_title_only(self) -> None:
        """A title without content renders alone."""
        title = Block(kind=BlockKind.TITLE, text="# Lonely", ordinal=0, level=1)
        assert serialize(title, []) == "# Lonely"

    def test_nothing_to_render(self) -> None:
        """No title and no tiles render as an empty string."""
        assert serialize(None, []) == ""


class TestHelpers:
    """Tests for serializer helpers."""

    def test_collapse_blank_lines(self) -> None:
        """Three or more newlines become exactly two."""
        assert collapse_blank_lines("a\n\n\n\nb\n\nc\n\n\nd") == "a\n\nb\n\nc\n\nd"

    def test_count_tiles(self) -> None:
        """Container openings are counted."""
        body = '<div class="feature-box">\n\nx\n\n</div>\n\n<div class="feature-box">\n\ny\n\n</div>'
        assert count_tiles(body) == 2
        assert count_tiles(None) == 0
