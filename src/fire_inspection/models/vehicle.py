"""Data models for vehicles, their side photographs and edit forms."""

from datetime import datetime
from pydantic import BaseModel, Field

from .inspection import Side


def _empty_paths() -> dict[Side, str | None]:
    return {side: None for side in Side}


class Vehicle(BaseModel):
    """Fleet vehicle with one optional stored photograph per side."""

    id: int
    name: str
    station: str | None = None
    created_at: datetime | None = None
    image_paths: dict[Side, str | None] = Field(default_factory=_empty_paths)

    @classmethod
    def from_row(cls, row: dict) -> "Vehicle":
        """Build a vehicle from a ``vehicles`` table row."""
        return cls(
            id=row["id"],
            name=row["name"],
            station=row.get("caserne"),
            created_at=row.get("created_at"),
            image_paths={side: row.get(image_column(side)) or None for side in Side},
        )

    def image_path(self, side: Side) -> str | None:
        return self.image_paths.get(side)

    def stored_paths(self) -> list[str]:
        """All non-empty storage paths, in side order."""
        return [path for side in Side if (path := self.image_path(side))]


class VehicleWithUrls(Vehicle):
    """Vehicle with public URLs resolved for each stored photograph."""

    image_urls: dict[Side, str | None] = Field(default_factory=_empty_paths)

    def image_url(self, side: Side) -> str | None:
        return self.image_urls.get(side)


class ImageUpload(BaseModel):
    """New photograph selected for one side."""

    content: bytes
    content_type: str = "image/jpeg"
    filename: str | None = None


class VehicleForm(BaseModel):
    """
    Vehicle create/edit form.

    Sides absent from both ``uploads`` and ``removed`` keep their current
    photograph.
    """

    name: str
    uploads: dict[Side, ImageUpload] = Field(default_factory=dict)
    removed: set[Side] = Field(default_factory=set)


def image_column(side: Side) -> str:
    """Column of the ``vehicles`` table holding the photograph path for ``side``."""
    return f"image_{side.storage_key}_path"
