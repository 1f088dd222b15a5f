"""Turn long prose paragraphs into bullet lists."""

from __future__ import annotations

import re

from guidetiles.config import GUIDETILES_LENGTH_THRESHOLD, GUIDETILES_SENTENCE_THRESHOLD
from guidetiles.schemas import BlockKind, ClassifiedBlock

MIN_SENTENCE_CHARS = 15

_SENTENCE_BOUNDARY_RE = re.compile(r"(?<=[.!?])\s+")
_FILLER_RE = re.compile(
    r"(^|[,;]\s+)(?:(?:that|which|who|where|when|is|are|was|were)\s+)+",
    re.IGNORECASE,
)


def normalize(
    block: ClassifiedBlock,
    *,
    sentence_threshold: int = GUIDETILES_SENTENCE_THRESHOLD,
    length_threshold: int = GUIDETILES_LENGTH_THRESHOLD,
    strip_fillers: bool = True,
) -> ClassifiedBlock:
    """Rewrite a long paragraph as a bullet list, one sentence per bullet.

    Only divisible paragraphs longer than ``length_threshold`` characters
    that hold more than ``sentence_threshold`` sentences are rewritten.
    Every other block, lists included, comes back unchanged, so running the
    normalizer over its own output is a no-op.

    Args:
        block: The block to normalize.
        sentence_threshold: Sentence count that must be exceeded.
        length_threshold: Character count that must be exceeded.
        strip_fillers: Drop linking words (``which``, ``is``...) at clause starts.

    Returns:
        A ``list`` block with the paragraph's ordinal, or ``block`` itself.
    """
    if block.kind is not BlockKind.PARAGRAPH or block.atomic:
        return block
    if len(block.text) <= length_threshold:
        return block

    sentences = split_sentences(block.text)
    if len(sentences) <= sentence_threshold:
        return block

    bullets = [_to_bullet(sentence, strip_fillers=strip_fillers) for sentence in sentences]
    return block.model_copy(
        update={
            "kind": BlockKind.LIST,
            "text": "\n".join(bullet for bullet in bullets if bullet),
            "atomic": True,
        }
    )


def split_sentences(text: str) -> list[str]:
    """Split prose on ``.``, ``!`` or ``?`` followed by whitespace.

    Fragments shorter than ``MIN_SENTENCE_CHARS`` do not count as sentences;
    they are joined to the previous sentence, or to the next one when they
    lead the paragraph.
    """
    collapsed = re.sub(r"\s+", " ", text).strip()
    if not collapsed:
        return []

    sentences: list[str] = []
    carry = ""
    for fragment in _SENTENCE_BOUNDARY_RE.split(collapsed):
        fragment = fragment.strip()
        if not fragment:
            continue
        if carry:
            fragment = f"{carry} {fragment}"
            carry = ""
        if len(fragment) < MIN_SENTENCE_CHARS:
            if sentences:
                sentences[-1] = f"{sentences[-1]} {fragment}"
            else:
                carry = fragment
            continue
        sentences.append(fragment)

    if carry:
        sentences.append(carry)
    return sentences


def _to_bullet(sentence: str, *, strip_fillers: bool) -> str:
    text = sentence.strip()
    if strip_fillers:
        trimmed = _FILLER_RE.sub(r"\1", text).strip()
        # Never reduce a sentence to nothing.
        if trimmed:
            text = trimmed
    text = re.sub(r"\s+", " ", text)
    if not text:
        return ""
    return f"- {text[0].upper()}{text[1:]}"
