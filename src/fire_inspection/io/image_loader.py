"""Image loading utilities for vehicle side photographs."""

import cv2
import numpy as np
from pathlib import Path
from PIL import Image

from ..models.geometry import ImageSize
from ..utils.logger import get_logger
from ..utils.exceptions import ImageProcessingError

logger = get_logger(__name__)


def load_image_bgr(path: Path) -> np.ndarray:
    """
    Load regular image file in BGR format (OpenCV compatible).

    Args:
        path: Path to image file

    Returns:
        Image as numpy array in BGR format

    Raises:
        ImageProcessingError: If loading fails
    """
    try:
        img = cv2.imread(str(path))
        if img is None:
            raise ValueError(f"Failed to load image: {path}")
        return img
    except Exception as e:
        error_msg = f"Failed to load image {path}: {e}"
        logger.error(error_msg)
        raise ImageProcessingError(error_msg) from e


def read_image_size(path: Path) -> ImageSize:
    """
    Read the natural dimensions of an image without decoding its pixels.

    Args:
        path: Path to image file

    Returns:
        Natural width and height

    Raises:
        ImageProcessingError: If the file is not a readable image
    """
    try:
        with Image.open(path) as pil_img:
            width, height = pil_img.size
        logger.debug(f"Image {path.name}: {width}x{height} pixels")
        return ImageSize(width=width, height=height)
    except Exception as e:
        error_msg = f"Failed to read image size of {path}: {e}"
        logger.error(error_msg)
        raise ImageProcessingError(error_msg) from e


def save_image(img: np.ndarray, path: Path, quality: int = 90) -> None:
    """
    Save image to file with specified quality.

    Args:
        img: Image array in BGR format
        path: Output path
        quality: JPEG quality (1-100)

    Raises:
        ImageProcessingError: If saving fails
    """
    try:
        if path.suffix.lower() in [".jpg", ".jpeg"]:
            ok = cv2.imwrite(str(path), img, [cv2.IMWRITE_JPEG_QUALITY, quality])
        elif path.suffix.lower() == ".png":
            ok = cv2.imwrite(str(path), img, [cv2.IMWRITE_PNG_COMPRESSION, 9])
        else:
            ok = cv2.imwrite(str(path), img)
        if not ok:
            raise ValueError("OpenCV could not encode the image")

        logger.debug(f"Saved image to {path}")
    except Exception as e:
        error_msg = f"Failed to save image to {path}: {e}"
        logger.error(error_msg)
        raise ImageProcessingError(error_msg) from e
