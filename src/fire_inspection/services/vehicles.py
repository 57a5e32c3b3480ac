"""Vehicle records and their side photographs."""

import re
import time
from typing import Callable

from ..config.constants import MSG_STATION_REQUIRED, MSG_VEHICLE_NAME_REQUIRED
from ..io.storage_client import StorageClient
from ..models.inspection import Side
from ..models.vehicle import Vehicle, VehicleForm, VehicleWithUrls, image_column
from ..utils.exceptions import FormValidationError, PersistenceError, StorageError, StorageUploadError
from ..utils.logger import get_logger

logger = get_logger(__name__)

VEHICLES_TABLE = "vehicles"


def _now_ms() -> int:
    return int(time.time() * 1000)


def build_image_path(station: str, vehicle_name: str, side: Side, timestamp_ms: int) -> str:
    """
    Storage path for a new side photograph.

    The timestamp keeps successive uploads for the same vehicle and side
    from overwriting each other.
    """
    station_part = re.sub(r"\s+", "_", station)
    name_part = re.sub(r"\s+", "_", vehicle_name)
    return f"{station_part}/{name_part}-{side.storage_key}-{timestamp_ms}"


class VehicleRepository:
    """CRUD for the ``vehicles`` table, keeping stored photographs in sync."""

    def __init__(self, client, storage: StorageClient, clock: Callable[[], int] = _now_ms):
        """
        Args:
            client: Supabase client
            storage: Storage client for the photographs bucket
            clock: Millisecond timestamp source used in upload paths
        """
        self.client = client
        self.storage = storage
        self.clock = clock

    def list_for_station(self, station: str | None) -> list[VehicleWithUrls]:
        """
        List the station's vehicles ordered by name, with photograph URLs.

        Raises:
            PersistenceError: If the query fails
        """
        if not station:
            return []

        logger.info(f"Loading vehicles for station {station}")
        try:
            response = (
                self.client.table(VEHICLES_TABLE)
                .select("*")
                .eq("caserne", station)
                .order("name")
                .execute()
            )
        except Exception as e:
            error_msg = f"Failed to load vehicles for station {station}: {e}"
            logger.error(error_msg)
            raise PersistenceError(error_msg) from e

        vehicles = [self._with_urls(Vehicle.from_row(row)) for row in response.data or []]
        logger.info(f"Loaded {len(vehicles)} vehicles")
        return vehicles

    def create(self, form: VehicleForm, station: str | None) -> Vehicle:
        """
        Insert a vehicle and upload its photographs.

        Raises:
            FormValidationError: If the name or the station is missing
            StorageUploadError: If a photograph cannot be uploaded
            PersistenceError: If the insert fails
        """
        name, station = self._validate(form, station)
        paths, uploaded, superseded = self._upload_images(form, name, station, current=None)

        logger.info(f"Creating vehicle {name} for station {station}")
        try:
            response = self.client.table(VEHICLES_TABLE).insert(self._row(name, station, paths)).execute()
        except Exception as e:
            error_msg = f"Failed to create vehicle {name}: {e}"
            logger.error(error_msg)
            self._discard(uploaded)
            raise PersistenceError(error_msg) from e

        self._delete_superseded(superseded)
        return Vehicle.from_row(response.data[0])

    def update(self, vehicle: Vehicle, form: VehicleForm, station: str | None) -> Vehicle:
        """
        Rename a vehicle and apply per-side photograph changes.

        Raises:
            FormValidationError: If the name or the station is missing
            StorageUploadError: If a photograph cannot be uploaded
            PersistenceError: If the update fails
        """
        name, station = self._validate(form, station)
        paths, uploaded, superseded = self._upload_images(form, name, station, current=vehicle)

        logger.info(f"Updating vehicle {vehicle.id} ({name})")
        try:
            response = (
                self.client.table(VEHICLES_TABLE)
                .update(self._row(name, station, paths))
                .eq("id", vehicle.id)
                .execute()
            )
        except Exception as e:
            error_msg = f"Failed to update vehicle {vehicle.id}: {e}"
            logger.error(error_msg)
            self._discard(uploaded)
            raise PersistenceError(error_msg) from e

        rows = response.data or []
        if not rows:
            self._discard(uploaded)
            raise PersistenceError(f"Vehicle {vehicle.id} not found")

        self._delete_superseded(superseded)
        return Vehicle.from_row(rows[0])

    def delete(self, vehicle: Vehicle) -> None:
        """
        Delete a vehicle and its photographs.

        Photograph removal failures are logged; the record is deleted anyway.

        Raises:
            PersistenceError: If the delete fails
        """
        paths = vehicle.stored_paths()
        if paths:
            try:
                self.storage.delete_objects(paths)
            except StorageError as e:
                logger.error(f"Error deleting storage files, deleting record anyway: {e}")

        logger.info(f"Deleting vehicle {vehicle.id} ({vehicle.name})")
        try:
            self.client.table(VEHICLES_TABLE).delete().eq("id", vehicle.id).execute()
        except Exception as e:
            error_msg = f"Failed to delete vehicle {vehicle.id}: {e}"
            logger.error(error_msg)
            raise PersistenceError(error_msg) from e

    def _validate(self, form: VehicleForm, station: str | None) -> tuple[str, str]:
        name = form.name.strip()
        if not name:
            raise FormValidationError(MSG_VEHICLE_NAME_REQUIRED)
        if not station:
            raise FormValidationError(MSG_STATION_REQUIRED)
        return name, station

    def _upload_images(
        self,
        form: VehicleForm,
        name: str,
        station: str,
        current: Vehicle | None,
    ) -> tuple[dict[Side, str | None], list[str], list[str]]:
        """
        Upload new photographs and work out which stored ones they replace.

        Nothing is deleted here: superseded photographs are only removed
        once the row write has succeeded.

        Returns:
            (final path for every side, new uploads, superseded paths)
        """
        paths: dict[Side, str | None] = {}
        superseded: list[str] = []
        uploaded: list[str] = []

        for side in Side:
            old_path = current.image_path(side) if current else None

            if side in form.uploads:
                upload = form.uploads[side]
                new_path = build_image_path(station, name, side, self.clock())
                try:
                    self.storage.upload_bytes(new_path, upload.content, upload.content_type)
                except StorageUploadError as e:
                    self._discard(uploaded)
                    raise StorageUploadError(
                        f"Erreur lors de l'upload de l'image {side.storage_key}: {e}"
                    ) from e
                uploaded.append(new_path)
                paths[side] = new_path
                if old_path:
                    superseded.append(old_path)
            elif side in form.removed:
                paths[side] = None
                if old_path:
                    superseded.append(old_path)
            else:
                paths[side] = old_path

        return paths, uploaded, superseded

    def _delete_superseded(self, paths: list[str]) -> None:
        if not paths:
            return
        try:
            self.storage.delete_objects(paths)
        except StorageError as e:
            logger.error(f"Could not delete superseded photographs {paths}: {e}")

    def _discard(self, paths: list[str]) -> None:
        """Remove photographs uploaded by a save that did not complete."""
        if not paths:
            return
        try:
            self.storage.delete_objects(paths)
        except StorageError as e:
            logger.error(f"Could not remove orphaned uploads {paths}: {e}")

    def _row(self, name: str, station: str, paths: dict[Side, str | None]) -> dict:
        row = {"name": name, "caserne": station}
        row.update({image_column(side): path for side, path in paths.items()})
        return row

    def _with_urls(self, vehicle: Vehicle) -> VehicleWithUrls:
        urls = {
            side: self.storage.public_url(path) if path else None
            for side, path in vehicle.image_paths.items()
        }
        return VehicleWithUrls(**vehicle.model_dump(), image_urls=urls)
