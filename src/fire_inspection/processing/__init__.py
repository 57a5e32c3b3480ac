"""Image geometry and annotation modules."""

from .coordinates import (
    compute_rendered_rect,
    map_click_to_image,
    map_viewport_click_to_image,
    percent_to_container,
    percent_to_pixels,
)
from .annotation import annotate_side_image, annotate_side_photo, marker_positions, numbered_side_defects

__all__ = [
    "compute_rendered_rect",
    "map_click_to_image",
    "map_viewport_click_to_image",
    "percent_to_container",
    "percent_to_pixels",
    "annotate_side_image",
    "annotate_side_photo",
    "marker_positions",
    "numbered_side_defects",
]
