"""Export inspection results to JSON, CSV and Markdown."""

import csv
from datetime import datetime
from pathlib import Path
from typing import Iterable

from ..io.json_handler import save_json
from ..models.inspection import ChecklistItem, Defect, Side
from ..models.report import InspectionReport, InspectionSummary
from ..processing.annotation import numbered_side_defects
from ..utils.logger import get_logger

logger = get_logger(__name__)


def summarize_inspection(
    vehicle_name: str | None,
    defects: Iterable[Defect],
    checklist: Iterable[ChecklistItem],
) -> InspectionSummary:
    """
    Calculate per-side defect counts and checklist completion.

    Args:
        vehicle_name: Inspected vehicle
        defects: Session defects
        checklist: Current checklist state

    Returns:
        InspectionSummary object
    """
    defects = list(defects)
    checklist = list(checklist)

    return InspectionSummary(
        vehicle_name=vehicle_name,
        defects_per_side={side: sum(1 for d in defects if d.side == side) for side in Side},
        checked_items=sum(1 for item in checklist if item.checked),
        total_items=len(checklist),
        unchecked_labels=[item.label for item in checklist if not item.checked],
    )


def export_summary_json(
    vehicle_name: str | None,
    defects: Iterable[Defect],
    checklist: Iterable[ChecklistItem],
    output_path: Path,
) -> Path:
    """
    Export the inspection summary and defect list to a JSON file.

    Args:
        vehicle_name: Inspected vehicle
        defects: Session defects
        checklist: Current checklist state
        output_path: Path to save JSON file

    Returns:
        Path to saved file
    """
    logger.info(f"Exporting inspection summary to JSON: {output_path}")

    defects = list(defects)
    checklist = list(checklist)
    summary = summarize_inspection(vehicle_name, defects, checklist)

    data = {
        "export_date": datetime.utcnow().isoformat(),
        "summary": summary.to_dict(),
        "defects": [d.model_dump(mode="json") for d in defects],
        "checklist": [item.model_dump(mode="json") for item in checklist],
    }
    save_json(data, output_path)
    return output_path


def export_defects_csv(defects: Iterable[Defect], output_path: Path) -> Path:
    """
    Export one row per defect, numbered per side as on the photographs.

    Args:
        defects: Session defects
        output_path: Path to save CSV file

    Returns:
        Path to saved file
    """
    logger.info(f"Exporting defects to CSV: {output_path}")

    fieldnames = ["side", "marker", "x_percent", "y_percent", "title", "description", "id"]
    defects = list(defects)

    with open(output_path, "w", newline="", encoding="utf-8") as csvfile:
        writer = csv.DictWriter(csvfile, fieldnames=fieldnames)
        writer.writeheader()

        for side in Side:
            for number, defect in numbered_side_defects(defects, side):
                writer.writerow(
                    {
                        "side": side.value,
                        "marker": number,
                        "x_percent": round(defect.x, 2),
                        "y_percent": round(defect.y, 2),
                        "title": defect.title,
                        "description": defect.description,
                        "id": defect.id,
                    }
                )

    logger.info(f"Exported defects CSV: {output_path.stat().st_size / 1_000:.1f} KB")
    return output_path


def save_report_markdown(report: InspectionReport, output_path: Path) -> Path:
    """Write the generated report text to a Markdown file."""
    output_path.write_text(report.markdown, encoding="utf-8")
    logger.info(f"Saved report to {output_path}")
    return output_path
