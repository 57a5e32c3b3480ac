"""Data models for generated reports and inspection summaries."""

from datetime import datetime
from pydantic import BaseModel, Field

from .inspection import Side


class InspectionReport(BaseModel):
    """Report text returned by the generation service."""

    vehicle_name: str | None = None
    generated_at: datetime = Field(default_factory=datetime.utcnow)
    markdown: str = Field(description="Markdown report, or an error message")
    is_error: bool = Field(default=False, description="True when markdown holds an error message")


class InspectionSummary(BaseModel):
    """Counts and completion figures for one inspection."""

    vehicle_name: str | None = None
    defects_per_side: dict[Side, int] = Field(default_factory=dict)
    checked_items: int = 0
    total_items: int = 0
    unchecked_labels: list[str] = Field(default_factory=list)

    @property
    def total_defects(self) -> int:
        return sum(self.defects_per_side.values())

    @property
    def completion_rate(self) -> float:
        """Percentage of checklist items checked."""
        if self.total_items == 0:
            return 0.0
        return (self.checked_items / self.total_items) * 100

    def to_dict(self) -> dict:
        """Convert to dictionary for export."""
        return {
            "vehicle_name": self.vehicle_name,
            "total_defects": self.total_defects,
            "defects_per_side": {side.value: count for side, count in self.defects_per_side.items()},
            "checklist": {
                "checked": self.checked_items,
                "total": self.total_items,
                "completion_rate_percent": round(self.completion_rate, 2),
                "unchecked": self.unchecked_labels,
            },
        }
