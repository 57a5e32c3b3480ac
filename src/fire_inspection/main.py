"""Batch entrypoint: replay a recorded inspection and produce its report bundle."""

import re
import sys
import time
from datetime import datetime
from pathlib import Path

from .app import InspectionApp
from .config import settings
from .config.constants import MSG_NO_VEHICLE_SELECTED
from .io import load_inspection_file, read_image_size
from .models.inspection import InspectionFile, Side
from .models.vehicle import VehicleWithUrls
from .processing import annotate_side_photo
from .report import export_defects_csv, export_summary_json, save_report_markdown
from .utils import setup_logging, get_logger
from .utils.exceptions import InspectionError, InvalidInputError

logger = get_logger(__name__)


def download_side_photos(app: InspectionApp, vehicle: VehicleWithUrls, photos_dir: Path) -> dict[Side, Path]:
    """Download every stored photograph of the vehicle and report its size to the app."""
    photos: dict[Side, Path] = {}
    for side in Side:
        path = vehicle.image_path(side)
        if not path:
            logger.warning(f"No {side.value} photograph for {vehicle.name}")
            continue
        local_path = app.vehicles.storage.download_file(path, photos_dir / f"{side.value}.jpg")
        size = read_image_size(local_path)
        app.on_image_loaded(side, size.width, size.height)
        photos[side] = local_path
    return photos


def replay_inspection(app: InspectionApp, inspection: InspectionFile) -> int:
    """
    Feed recorded defects and checked items through the app.

    Returns:
        Number of defects recorded (padding clicks are dropped)
    """
    recorded = 0
    for entry in inspection.defects:
        if entry.click is None:
            app.record_defect(entry.model_dump(include={"side", "x", "y", "title", "description"}))
            recorded += 1
            continue

        natural = entry.click.natural
        if natural is not None:
            app.on_image_loaded(entry.side, natural.width, natural.height)
        if app.image_size(entry.side) is None:
            logger.warning(f"Skipping '{entry.title}': no {entry.side.value} photograph to map the click on")
            continue
        position = app.double_click(entry.side, entry.click.x, entry.click.y, entry.click.container)
        if position is None:
            logger.warning(f"Skipping '{entry.title}': click on {entry.side.value} is outside the image")
            continue
        result = app.confirm_defect(entry.title, entry.description)
        if not result.ok:
            raise InvalidInputError(f"Could not record '{entry.title}': {result.message}")
        recorded += 1

    for item_id in inspection.checked:
        app.toggle_checklist_item(item_id)

    return recorded


def _choose_vehicle(app: InspectionApp, name: str | None) -> VehicleWithUrls:
    if not app.vehicle_list:
        raise InvalidInputError(app.vehicles_error or MSG_NO_VEHICLE_SELECTED)
    if name:
        match = next((v for v in app.vehicle_list if v.name == name), None)
        if match is None:
            raise InvalidInputError(f"Vehicle '{name}' not found")
        app.select_vehicle(match.id)
    return app.selected_vehicle


def main() -> int:
    """
    Main entrypoint for the report job.

    Returns:
        Exit code (0 for success, 1 for failure)
    """
    setup_logging(settings.log_level, json_format=settings.log_json)
    logger.info("=" * 80)
    logger.info("Starting Fire Vehicle Inspection report job")
    logger.info("=" * 80)

    start_time = time.time()
    app: InspectionApp | None = None

    try:
        if settings.inspection_file is None:
            raise InvalidInputError("INSPECTION_INSPECTION_FILE is not set")
        if not settings.user_email or not settings.user_password:
            raise InvalidInputError("INSPECTION_USER_EMAIL and INSPECTION_USER_PASSWORD are required")

        # ===== STEP 1: Sign in and pick the vehicle =====
        logger.info("STEP 1: Signing in and loading vehicles")

        app = InspectionApp.from_settings()
        result = app.sign_in(settings.user_email, settings.user_password)
        if not result.ok:
            raise InvalidInputError(f"Sign-in failed: {result.message}")

        inspection = load_inspection_file(settings.inspection_file)
        vehicle = _choose_vehicle(app, inspection.vehicle or settings.vehicle_name)
        logger.info(f"Inspecting {vehicle.name} (station {vehicle.station})")

        # ===== STEP 2: Download side photographs =====
        logger.info("STEP 2: Downloading side photographs")

        stamp = datetime.now().strftime("%Y%m%d-%H%M%S")
        vehicle_part = re.sub(r"\s+", "_", vehicle.name)
        bundle_dir = settings.work_dir / vehicle_part / stamp
        photos_dir = settings.work_dir / "photos"
        bundle_dir.mkdir(parents=True, exist_ok=True)
        photos_dir.mkdir(parents=True, exist_ok=True)

        photos = download_side_photos(app, vehicle, photos_dir)
        logger.info(f"Downloaded {len(photos)} photographs")

        # ===== STEP 3: Replay the inspection =====
        logger.info("STEP 3: Replaying recorded inspection")

        recorded = replay_inspection(app, inspection)
        logger.info(
            f"Recorded {recorded}/{len(inspection.defects)} defects, "
            f"{app.session.checked_count}/{len(app.session.checklist_items)} items checked"
        )

        # ===== STEP 4: Generate the report =====
        logger.info("STEP 4: Generating report")

        report = app.generate_report()
        if report.is_error:
            logger.warning(f"Report generation returned an error: {report.markdown}")
        save_report_markdown(report, bundle_dir / "report.md")

        # ===== STEP 5: Export summary and annotated photographs =====
        logger.info("STEP 5: Exporting summary and annotated photographs")

        defects = app.session.defects
        export_summary_json(vehicle.name, defects, app.session.checklist_items, bundle_dir / "summary.json")
        export_defects_csv(defects, bundle_dir / "defects.csv")
        for side, photo_path in photos.items():
            if app.session.defects_for_side(side):
                annotate_side_photo(photo_path, defects, side, bundle_dir / f"{side.value}_annotated.jpg")

        # ===== STEP 6: Upload the bundle =====
        if settings.upload_reports:
            logger.info("STEP 6: Uploading report bundle")
            station = re.sub(r"\s+", "_", vehicle.station or "unassigned")
            prefix = f"reports/{station}/{vehicle_part}/{stamp}"
            bundle_uri = app.vehicles.storage.upload_report_bundle(bundle_dir, prefix)
            logger.info(f"Report bundle available at {bundle_uri}")

        duration = time.time() - start_time
        logger.info("=" * 80)
        logger.info(f"Report job completed in {duration:.1f}s: {bundle_dir}")
        logger.info("=" * 80)
        return 0

    except InspectionError as e:
        logger.error(f"Report job failed: {e}", exc_info=True)
        return 1
    except Exception as e:
        logger.error(f"Unexpected error: {e}", exc_info=True)
        return 1
    finally:
        if app is not None and app.is_signed_in:
            app.sign_out()


if __name__ == "__main__":
    sys.exit(main())
