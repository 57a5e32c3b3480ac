"""Data models for defects, checklist items and inspection files."""

from enum import Enum
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .geometry import ContainerSize, ImageSize


class Side(str, Enum):
    """Fixed vehicle viewpoints, in display order."""

    FRONT = "front"
    RIGHT = "right"
    REAR = "rear"
    LEFT = "left"

    @property
    def storage_key(self) -> str:
        """Fragment used in vehicle table columns and storage paths."""
        return _STORAGE_KEYS[self]


_STORAGE_KEYS = {
    Side.FRONT: "avant",
    Side.RIGHT: "droite",
    Side.REAR: "arriere",
    Side.LEFT: "gauche",
}


class MarkerPosition(BaseModel):
    """Defect marker position as percentages of the original bitmap."""

    model_config = ConfigDict(frozen=True)

    x: float = Field(ge=0, le=100, description="Horizontal position in percent")
    y: float = Field(ge=0, le=100, description="Vertical position in percent")


class DefectDraft(BaseModel):
    """Defect fields supplied by the user, before an id is assigned."""

    model_config = ConfigDict(frozen=True)

    side: Side
    x: float = Field(ge=0, le=100, description="Horizontal position in percent")
    y: float = Field(ge=0, le=100, description="Vertical position in percent")
    title: str = Field(description="Short defect label")
    description: str = Field(default="", description="Optional free text")

    @field_validator("title")
    @classmethod
    def _title_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("title must not be empty")
        return value

    @field_validator("description", mode="before")
    @classmethod
    def _description_default(cls, value):
        return "" if value is None else value


class Defect(DefectDraft):
    """Single defect pinned to one side's photograph."""

    id: str = Field(description="Unique identifier assigned at creation")

    @property
    def position(self) -> MarkerPosition:
        return MarkerPosition(x=self.x, y=self.y)


class ChecklistItem(BaseModel):
    """Fixed inspection task with a completion flag."""

    model_config = ConfigDict(frozen=True)

    id: str
    label: str
    checked: bool = False


class ClickRecord(BaseModel):
    """Raw double-click captured on a side photograph."""

    x: float
    y: float
    container: ContainerSize
    natural: ImageSize | None = None


class RecordedDefect(BaseModel):
    """
    Defect entry in an inspection file.

    Either a mapped position (``x``/``y`` percentages) or a raw ``click``
    that still has to go through the coordinate mapper.
    """

    side: Side
    title: str
    description: str = ""
    x: float | None = Field(default=None, ge=0, le=100)
    y: float | None = Field(default=None, ge=0, le=100)
    click: ClickRecord | None = None

    @model_validator(mode="after")
    def _position_or_click(self) -> "RecordedDefect":
        has_position = self.x is not None and self.y is not None
        if has_position == (self.click is not None):
            raise ValueError("provide either x/y percentages or a click, not both")
        return self


class InspectionFile(BaseModel):
    """Recorded inspection replayed by the batch job."""

    vehicle: str | None = None
    defects: list[RecordedDefect] = Field(default_factory=list)
    checked: list[str] = Field(default_factory=list, description="Checked checklist item ids")
