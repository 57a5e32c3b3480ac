import logging

import cv2
import numpy as np
import pytest

from fire_inspection.main import download_side_photos, replay_inspection
from fire_inspection.models.geometry import ImageSize
from fire_inspection.models.inspection import InspectionFile, Side
from fire_inspection.utils.exceptions import InvalidInputError

CLICK = {"x": 400, "y": 300, "container": {"width": 800, "height": 600}, "natural": {"width": 1600, "height": 800}}


def test_replay_records_positions_clicks_and_checked_items(signed_in_app):
    inspection = InspectionFile.model_validate(
        {
            "defects": [
                {"side": "left", "title": "Bosse", "x": 10, "y": 90},
                {"side": "front", "title": "Rayure", "description": "Pare-choc", "click": CLICK},
                {"side": "front", "title": "Hors image", "click": {**CLICK, "y": 20}},
            ],
            "checked": ["cl-1", "cl-4"],
        }
    )

    recorded = replay_inspection(signed_in_app, inspection)

    assert recorded == 2
    defects = signed_in_app.session.defects
    assert [d.title for d in defects] == ["Bosse", "Rayure"]
    assert (defects[1].x, defects[1].y) == (pytest.approx(50), pytest.approx(50))
    assert signed_in_app.session.checked_count == 2


def test_replay_rejects_blank_title(signed_in_app):
    inspection = InspectionFile.model_validate(
        {"defects": [{"side": "front", "title": " ", "click": CLICK}]}
    )

    with pytest.raises(InvalidInputError):
        replay_inspection(signed_in_app, inspection)


def test_recorded_defect_needs_position_or_click():
    with pytest.raises(ValueError):
        InspectionFile.model_validate({"defects": [{"side": "front", "title": "Rayure"}]})


def test_download_side_photos_registers_sizes(signed_in_app, s3, tmp_path):
    signed_in_app.select_vehicle(10)
    ok, encoded = cv2.imencode(".png", np.zeros((30, 40, 3), dtype=np.uint8))
    assert ok
    for path in signed_in_app.selected_vehicle.stored_paths():
        s3.objects[("vehicle_images", path)] = encoded.tobytes()

    photos = download_side_photos(signed_in_app, signed_in_app.selected_vehicle, tmp_path)

    assert set(photos) == {Side.FRONT, Side.LEFT}
    assert signed_in_app.image_size(Side.FRONT) == ImageSize(width=40, height=30)
    assert signed_in_app.image_size(Side.RIGHT) is None


def test_replay_skips_click_without_photograph(signed_in_app, caplog):
    inspection = InspectionFile.model_validate(
        {"defects": [{"side": "rear", "title": "Rayure", "click": {**CLICK, "natural": None}}]}
    )

    with caplog.at_level(logging.WARNING, logger="fire_inspection.main"):
        recorded = replay_inspection(signed_in_app, inspection)

    assert recorded == 0
    assert "no rear photograph" in caplog.text
    assert "outside the image" not in caplog.text


def test_replay_rejects_blank_title_with_position(signed_in_app):
    inspection = InspectionFile.model_validate(
        {"defects": [{"side": "left", "title": "  ", "x": 10, "y": 10}]}
    )

    with pytest.raises(InvalidInputError):
        replay_inspection(signed_in_app, inspection)
