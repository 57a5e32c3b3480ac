"""Draw numbered defect markers on side photographs."""

from pathlib import Path
from typing import Iterable

import cv2
import numpy as np

from ..config import settings
from ..config.constants import MARKER_FILL_COLOR, MARKER_OUTLINE_COLOR, MARKER_TEXT_COLOR
from ..io.image_loader import load_image_bgr, save_image
from ..models.geometry import ContainerSize, ImageSize
from ..models.inspection import Defect, Side
from ..utils.logger import get_logger
from .coordinates import percent_to_container, percent_to_pixels

logger = get_logger(__name__)


def numbered_side_defects(defects: Iterable[Defect], side: Side) -> list[tuple[int, Defect]]:
    """
    Number the defects of one side 1..N in insertion order.

    Args:
        defects: All session defects, in insertion order
        side: Side to keep

    Returns:
        List of (marker number, defect)
    """
    side_defects = [d for d in defects if d.side == side]
    return list(enumerate(side_defects, start=1))


def marker_positions(
    defects: Iterable[Defect],
    side: Side,
    container: ContainerSize,
    natural: ImageSize,
) -> list[tuple[int, float, float]]:
    """
    Compute where each marker of a side is displayed inside its container.

    Args:
        defects: All session defects
        side: Side being displayed
        container: Rendered container dimensions
        natural: Intrinsic image dimensions

    Returns:
        List of (marker number, x, y) in container coordinates
    """
    positions = []
    for number, defect in numbered_side_defects(defects, side):
        x, y = percent_to_container(defect.position, container, natural)
        positions.append((number, x, y))
    return positions


def annotate_side_image(
    image: np.ndarray,
    defects: Iterable[Defect],
    side: Side,
    radius: int | None = None,
) -> np.ndarray:
    """
    Draw numbered markers for one side onto a copy of its photograph.

    Args:
        image: Photograph in BGR format
        defects: All session defects
        side: Side shown in the photograph
        radius: Marker radius in pixels (defaults to settings.marker_radius_px)

    Returns:
        Annotated copy of the image
    """
    radius = radius or settings.marker_radius_px
    annotated = image.copy()
    height, width = annotated.shape[:2]
    natural = ImageSize(width=width, height=height)

    markers = numbered_side_defects(defects, side)
    for number, defect in markers:
        center = percent_to_pixels(defect.position, natural)

        cv2.circle(annotated, center, radius, MARKER_FILL_COLOR, thickness=-1, lineType=cv2.LINE_AA)
        cv2.circle(annotated, center, radius, MARKER_OUTLINE_COLOR, thickness=2, lineType=cv2.LINE_AA)

        # Center the number inside the marker
        label = str(number)
        font_scale = radius / 22
        (text_w, text_h), _ = cv2.getTextSize(label, cv2.FONT_HERSHEY_SIMPLEX, font_scale, 2)
        text_pos = (int(center[0] - text_w / 2), int(center[1] + text_h / 2))
        cv2.putText(
            annotated,
            label,
            text_pos,
            cv2.FONT_HERSHEY_SIMPLEX,
            font_scale,
            MARKER_TEXT_COLOR,
            2,
            lineType=cv2.LINE_AA,
        )

    logger.debug(f"Drew {len(markers)} markers on {side.value} image ({width}x{height})")
    return annotated


def annotate_side_photo(
    photo_path: Path,
    defects: Iterable[Defect],
    side: Side,
    output_path: Path,
) -> Path:
    """
    Load a side photograph, draw its markers and save the result.

    Args:
        photo_path: Path to the downloaded photograph
        defects: All session defects
        side: Side shown in the photograph
        output_path: Path to save the annotated image

    Returns:
        Path to the annotated image
    """
    logger.info(f"Annotating {side.value} photograph {photo_path.name}")

    image = load_image_bgr(photo_path)
    annotated = annotate_side_image(image, defects, side)
    save_image(annotated, output_path, quality=settings.jpeg_quality)

    logger.info(f"Saved annotated photograph to {output_path}")
    return output_path
