"""JSON file handling utilities."""

import json
from pathlib import Path
from typing import Any

from ..models.inspection import InspectionFile
from ..utils.logger import get_logger
from ..utils.exceptions import InvalidInputError

logger = get_logger(__name__)


def load_inspection_file(path: Path) -> InspectionFile:
    """
    Load and validate a recorded inspection.

    Args:
        path: Path to the inspection JSON file

    Returns:
        Parsed InspectionFile

    Raises:
        InvalidInputError: If the file is missing or invalid
    """
    logger.info(f"Loading inspection file from {path}")

    try:
        with open(path, "r", encoding="utf-8") as f:
            inspection = InspectionFile.model_validate(json.load(f))
        logger.info(
            f"Loaded {len(inspection.defects)} defects and "
            f"{len(inspection.checked)} checked items"
        )
        return inspection
    except Exception as e:
        error_msg = f"Failed to load inspection file from {path}: {e}"
        logger.error(error_msg)
        raise InvalidInputError(error_msg) from e


def save_json(data: dict[str, Any] | list[Any], path: Path, indent: int = 2) -> None:
    """
    Save data to JSON file.

    Args:
        data: Data to save (dict or list)
        path: Output path
        indent: JSON indentation (default: 2)
    """
    logger.info(f"Saving JSON to {path}")

    try:
        with open(path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=indent, ensure_ascii=False, default=str)

        size_kb = path.stat().st_size / 1_000
        logger.info(f"Saved JSON: {size_kb:.1f} KB")
    except Exception as e:
        error_msg = f"Failed to save JSON to {path}: {e}"
        logger.error(error_msg)
        raise IOError(error_msg) from e
