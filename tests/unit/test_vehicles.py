import pytest

from fire_inspection.config.constants import MSG_STATION_REQUIRED, MSG_VEHICLE_NAME_REQUIRED
from fire_inspection.models.inspection import Side
from fire_inspection.models.vehicle import ImageUpload, Vehicle, VehicleForm
from fire_inspection.services.vehicles import build_image_path
from fire_inspection.utils.exceptions import FormValidationError, PersistenceError, StorageUploadError

STATION = "Caserne Centrale"


def _existing(repository) -> Vehicle:
    return next(v for v in repository.list_for_station(STATION) if v.id == 10)


def test_build_image_path_replaces_whitespace():
    path = build_image_path("Caserne  Centrale", "VSAV 1 bis", Side.REAR, 1700000000000)

    assert path == "Caserne_Centrale/VSAV_1_bis-arriere-1700000000000"


def test_list_for_station_orders_by_name_and_resolves_urls(repository):
    vehicles = repository.list_for_station(STATION)

    assert [v.name for v in vehicles] == ["FPT 2", "VSAV 1"]
    vsav = vehicles[1]
    assert vsav.image_url(Side.FRONT) == (
        "https://proj.supabase.co/storage/v1/object/public/vehicle_images/Caserne_Centrale/VSAV_1-avant-1"
    )
    assert vsav.image_url(Side.RIGHT) is None
    assert vsav.image_path(Side.LEFT) == "Caserne_Centrale/VSAV_1-gauche-1"


def test_list_without_station_is_empty(repository, supabase):
    assert repository.list_for_station(None) == []
    assert supabase.calls == []


def test_list_failure_raises_persistence_error(repository, supabase):
    supabase.failing.add(("vehicles", "select"))

    with pytest.raises(PersistenceError):
        repository.list_for_station(STATION)


def test_create_uploads_images_and_inserts_row(repository, supabase, s3):
    form = VehicleForm(name="  VSR 4 ", uploads={Side.RIGHT: ImageUpload(content=b"jpeg")})

    vehicle = repository.create(form, STATION)

    expected_path = "Caserne_Centrale/VSR_4-droite-1700000000000"
    assert vehicle.name == "VSR 4"
    assert vehicle.station == STATION
    assert vehicle.image_path(Side.RIGHT) == expected_path
    assert vehicle.image_path(Side.FRONT) is None
    assert s3.objects[("vehicle_images", expected_path)] == b"jpeg"


@pytest.mark.parametrize(
    "name,station,message",
    [
        ("   ", STATION, MSG_VEHICLE_NAME_REQUIRED),
        ("VSR 4", None, MSG_STATION_REQUIRED),
        ("VSR 4", "", MSG_STATION_REQUIRED),
    ],
)
def test_create_validates_before_any_call(repository, supabase, s3, name, station, message):
    form = VehicleForm(name=name, uploads={Side.FRONT: ImageUpload(content=b"jpeg")})

    with pytest.raises(FormValidationError, match=message):
        repository.create(form, station)

    assert supabase.calls == []
    assert s3.objects == {}


def test_update_replaces_removes_and_keeps_images(repository, s3):
    vehicle = _existing(repository)
    form = VehicleForm(
        name="VSAV 1",
        uploads={Side.FRONT: ImageUpload(content=b"new-front")},
        removed={Side.LEFT},
    )

    updated = repository.update(vehicle, form, STATION)

    assert updated.image_path(Side.FRONT) == "Caserne_Centrale/VSAV_1-avant-1700000000000"
    assert updated.image_path(Side.LEFT) is None
    assert updated.image_path(Side.RIGHT) is None
    assert s3.deleted == [["Caserne_Centrale/VSAV_1-avant-1", "Caserne_Centrale/VSAV_1-gauche-1"]]


def test_update_without_image_changes_keeps_paths(repository, s3):
    vehicle = _existing(repository)

    updated = repository.update(vehicle, VehicleForm(name="VSAV 1 renommé"), STATION)

    assert updated.name == "VSAV 1 renommé"
    assert updated.image_paths == vehicle.image_paths
    assert s3.deleted == []


def test_update_upload_failure_discards_earlier_uploads(repository, supabase, s3):
    vehicle = _existing(repository)
    s3.fail_keys.add("Caserne_Centrale/VSAV_1-arriere-1700000000000")
    form = VehicleForm(
        name="VSAV 1",
        uploads={
            Side.FRONT: ImageUpload(content=b"front"),
            Side.REAR: ImageUpload(content=b"rear"),
        },
    )

    with pytest.raises(StorageUploadError, match="arriere"):
        repository.update(vehicle, form, STATION)

    assert s3.deleted == [["Caserne_Centrale/VSAV_1-avant-1700000000000"]]
    assert not any(op == "update" for _, op, _, _ in supabase.calls)


def test_update_row_failure_keeps_stored_images(repository, supabase, s3):
    vehicle = _existing(repository)
    s3.objects[("vehicle_images", "Caserne_Centrale/VSAV_1-avant-1")] = b"old-front"
    supabase.failing.add(("vehicles", "update"))
    form = VehicleForm(name="VSAV 1", uploads={Side.FRONT: ImageUpload(content=b"new-front")})

    with pytest.raises(PersistenceError):
        repository.update(vehicle, form, STATION)

    row = next(r for r in supabase.tables["vehicles"] if r["id"] == 10)
    assert row["image_avant_path"] == "Caserne_Centrale/VSAV_1-avant-1"
    assert list(s3.objects) == [("vehicle_images", "Caserne_Centrale/VSAV_1-avant-1")]
    assert s3.deleted == [["Caserne_Centrale/VSAV_1-avant-1700000000000"]]


def test_create_insert_failure_discards_uploads(repository, supabase, s3):
    supabase.failing.add(("vehicles", "insert"))
    form = VehicleForm(name="VL 9", uploads={Side.FRONT: ImageUpload(content=b"jpeg")})

    with pytest.raises(PersistenceError):
        repository.create(form, STATION)

    assert s3.objects == {}
    assert s3.deleted == [["Caserne_Centrale/VL_9-avant-1700000000000"]]


def test_update_of_missing_row_raises(repository):
    ghost = Vehicle(id=999, name="Fantôme", station=STATION)

    with pytest.raises(PersistenceError):
        repository.update(ghost, VehicleForm(name="Fantôme"), STATION)


def test_delete_removes_images_then_row(repository, supabase, s3):
    vehicle = _existing(repository)

    repository.delete(vehicle)

    assert s3.deleted == [["Caserne_Centrale/VSAV_1-avant-1", "Caserne_Centrale/VSAV_1-gauche-1"]]
    assert all(row["id"] != 10 for row in supabase.tables["vehicles"])


def test_delete_ignores_storage_failure(repository, supabase, s3):
    vehicle = _existing(repository)
    s3.fail.add("delete_objects")

    repository.delete(vehicle)

    assert all(row["id"] != 10 for row in supabase.tables["vehicles"])


def test_delete_failure_raises_persistence_error(repository, supabase):
    vehicle = _existing(repository)
    supabase.failing.add(("vehicles", "delete"))

    with pytest.raises(PersistenceError):
        repository.delete(vehicle)
