"""
Domain models for the exercise GIF sync.

`SourceRecord` mirrors the subset of an ExerciseDB payload that the sync
cares about; `SyncRecord` is the normalized row written to the destination
table. Column names follow the destination schema (`id`, `"gifUrl"`,
`updated_at`), so `gif_url` is serialized under its `gifUrl` alias.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Tuple

from pydantic import BaseModel, Field


class SourceRecord(BaseModel):
    """
    One exercise as returned by the API. Fields other than `id` and `gifUrl`
    are ignored.
    """

    id: str = Field(..., min_length=1, description="Stable exercise identifier.")
    gif_url: Optional[str] = Field(None, alias="gifUrl", description="Animated image URL.")

    model_config = {
        "frozen": True,
        "populate_by_name": True,
        "extra": "ignore",
        "coerce_numbers_to_str": True,
    }


class SyncRecord(BaseModel):
    """
    Representation of a single row in the destination table.
    """

    id: str = Field(..., description="Primary/conflict key.")
    gif_url: Optional[str] = Field(None, alias="gifUrl", description="Animated image URL.")
    updated_at: datetime = Field(..., description="Timestamp of the sync run that wrote it.")

    model_config = {
        "frozen": True,
        "populate_by_name": True,
    }

    def as_row(self) -> Tuple[str, Optional[str], datetime]:
        """Values in destination column order."""
        return (self.id, self.gif_url, self.updated_at)


COLUMNS: Tuple[str, ...] = ("id", "gifUrl", "updated_at")


@dataclass(frozen=True)
class Batch:
    """Window `[offset, offset + limit)` over the source collection."""

    index: int
    offset: int
    limit: int


__all__ = ["Batch", "COLUMNS", "SourceRecord", "SyncRecord"]
