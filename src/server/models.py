"""Pydantic models for the restructure API."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

from guidetiles.config import (
    GUIDETILES_BUDGET_CHARS,
    GUIDETILES_INTRO_HEADINGS,
    GUIDETILES_LENGTH_THRESHOLD,
    GUIDETILES_SENTENCE_THRESHOLD,
)
from guidetiles.transform import TileOptions


class TransformOptionsModel(BaseModel):
    """Transform options accepted by the API.

    Attributes
    ----------
    budget_chars : int
        Tile size budget in characters.
    sentence_threshold : int
        Paragraphs need more sentences than this to become bullet lists.
    length_threshold : int
        Paragraphs need more characters than this to become bullet lists.
    normalize_prose : bool
        Convert long paragraphs to bullet lists.
    strip_fillers : bool
        Drop linking words at clause starts when making bullets.
    intro_heading_names : list[str]
        Headings that always get a tile of their own.
    intro_heading : str | None
        Heading added above untitled leading content.

    """

    model_config = ConfigDict(extra="forbid")

    budget_chars: int = Field(default=GUIDETILES_BUDGET_CHARS, ge=1, description="Tile size budget")
    sentence_threshold: int = Field(default=GUIDETILES_SENTENCE_THRESHOLD, ge=0)
    length_threshold: int = Field(default=GUIDETILES_LENGTH_THRESHOLD, ge=0)
    normalize_prose: bool = Field(default=True, description="Convert long paragraphs to bullets")
    strip_fillers: bool = Field(default=True, description="Drop linking words in bullets")
    intro_heading_names: list[str] = Field(default_factory=lambda: list(GUIDETILES_INTRO_HEADINGS))
    intro_heading: str | None = Field(default=None, description="Heading for untitled leading content")

    @field_validator("intro_heading_names", mode="before")
    @classmethod
    def normalize_names(cls, v: str | list[str] | None) -> list[str]:
        """Accept comma-separated strings or lists."""
        if not v:
            return []
        if isinstance(v, str):
            return [item.strip() for item in v.split(",") if item.strip()]
        return [item.strip() for item in v if item.strip()]

    def to_options(self) -> TileOptions:
        return TileOptions(
            budget_chars=self.budget_chars,
            sentence_threshold=self.sentence_threshold,
            length_threshold=self.length_threshold,
            normalize_prose=self.normalize_prose,
            strip_fillers=self.strip_fillers,
            intro_heading_names=tuple(self.intro_heading_names),
            intro_heading=self.intro_heading,
        )


class RestructureRequest(TransformOptionsModel):
    """Request model for the /api/restructure endpoint."""

    body: str = Field(..., description="Markdown body to restructure")


class RestructureResponse(BaseModel):
    """Response model for the /api/restructure endpoint."""

    body: str = Field(..., description="Restructured markdown body")
    title: str | None = Field(default=None, description="Title line of the document")
    tile_count: int = Field(..., description="Number of tiles in the body")
    summary: str = Field(..., description="Human-readable change summary")


class ErrorResponse(BaseModel):
    """Error payload."""

    detail: str = Field(..., description="Error message")
