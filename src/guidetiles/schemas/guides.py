"""Guides table models."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class Guide(BaseModel):
    """A row of the guides table, limited to the columns this project touches."""

    model_config = ConfigDict(extra="ignore")

    id: str | int
    slug: str
    title: str = ""
    body: str | None = None
    domain: str | None = None
    last_updated_at: datetime | None = None


class RestructureResult(BaseModel):
    """Outcome of restructuring one guide.

    Attributes:
        slug: Slug of the guide.
        title: Guide title as stored in the table.
        changed: Whether the transformed body differs from the stored one.
        tiles_before: Container count in the stored body.
        tile_count: Container count in the transformed body.
        body: The transformed body.
        dry_run: True when the body was not written back.
        error: Failure message when the guide could not be processed.
    """

    slug: str
    title: str = ""
    changed: bool = False
    tiles_before: int = 0
    tile_count: int = 0
    body: str = ""
    dry_run: bool = False
    error: str | None = Field(default=None)

    @property
    def ok(self) -> bool:
        return self.error is None
