"""Geometry models for image containers and pan/zoom transforms."""

from pydantic import BaseModel, ConfigDict, Field


class ImageSize(BaseModel):
    """Intrinsic pixel dimensions of a source image."""

    model_config = ConfigDict(frozen=True)

    width: int = Field(gt=0, description="Natural width in pixels")
    height: int = Field(gt=0, description="Natural height in pixels")

    @property
    def ratio(self) -> float:
        return self.width / self.height


class ContainerSize(BaseModel):
    """Rendered dimensions of the element holding the image."""

    model_config = ConfigDict(frozen=True)

    width: float = Field(gt=0, description="Container width")
    height: float = Field(gt=0, description="Container height")

    @property
    def ratio(self) -> float:
        return self.width / self.height


class RenderedRect(BaseModel):
    """Area covered by a 'contain'-scaled image inside its container."""

    model_config = ConfigDict(frozen=True)

    offset_x: float
    offset_y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.offset_x + self.width

    @property
    def bottom(self) -> float:
        return self.offset_y + self.height

    def contains(self, x: float, y: float) -> bool:
        """Check whether a point lies on the image (edges included)."""
        return self.offset_x <= x <= self.right and self.offset_y <= y <= self.bottom


class ViewTransform(BaseModel):
    """
    Pan/zoom transform applied to the content box.

    A content point ``c`` is displayed at ``c * scale + translate``.
    """

    model_config = ConfigDict(frozen=True)

    scale: float = Field(default=1.0, gt=0)
    translate_x: float = 0.0
    translate_y: float = 0.0

    def to_content(self, x: float, y: float) -> tuple[float, float]:
        """Convert a viewport point back to unscaled content coordinates."""
        return ((x - self.translate_x) / self.scale, (y - self.translate_y) / self.scale)

    def to_viewport(self, x: float, y: float) -> tuple[float, float]:
        """Convert a content point to viewport coordinates."""
        return (x * self.scale + self.translate_x, y * self.scale + self.translate_y)
