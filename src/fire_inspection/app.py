"""Application service: the inspection screen's event handlers."""

from enum import Enum

from pydantic import BaseModel, ValidationError
from supabase import create_client

from .config import settings
from .config.constants import (
    MSG_DEFECT_TITLE_REQUIRED,
    MSG_GENERIC_ERROR,
    MSG_NOT_SIGNED_IN,
    MSG_PROFILE_UPDATE_FAILED,
    MSG_VEHICLE_DELETE_FAILED,
    MSG_VEHICLES_LOAD_FAILED,
    SIDE_LABELS_FR,
)
from .io.storage_client import StorageClient
from .models.account import ProfileUpdate, UserProfile
from .models.geometry import ContainerSize, ImageSize, ViewTransform
from .models.inspection import Defect, DefectDraft, MarkerPosition, Side
from .models.report import InspectionReport
from .models.vehicle import VehicleForm, VehicleWithUrls
from .processing.coordinates import map_click_to_image, map_viewport_click_to_image
from .services.auth import AuthService
from .services.report_generator import ReportGenerator
from .services.vehicles import VehicleRepository
from .session import InspectionSession
from .utils.exceptions import (
    AuthError,
    FormValidationError,
    InvalidInputError,
    PersistenceError,
    StorageError,
)
from .utils.logger import get_logger

logger = get_logger(__name__)


class Tab(str, Enum):
    FRONT = "front"
    RIGHT = "right"
    REAR = "rear"
    LEFT = "left"
    CHECKLIST = "checklist"
    REPORT = "report"
    MANAGE_VEHICLES = "manage-vehicles"

    @property
    def side(self) -> Side | None:
        try:
            return Side(self.value)
        except ValueError:
            return None


class OperationResult(BaseModel):
    """Outcome of a user action, with the message to show inline."""

    ok: bool
    message: str | None = None


class InspectionApp:
    """
    Owns the inspection session of the signed-in user.

    The inspection state is reset whenever the selected vehicle changes or
    the user signs out, so defects never carry over between vehicles or
    sessions. Collaborator failures are turned into messages; they never
    reach the inspection state.
    """

    def __init__(
        self,
        auth: AuthService,
        vehicles: VehicleRepository,
        reports: ReportGenerator,
        session: InspectionSession | None = None,
    ):
        self.auth = auth
        self.vehicles = vehicles
        self.reports = reports
        self.session = session or InspectionSession()

        self.vehicle_list: list[VehicleWithUrls] = []
        self.vehicles_error: str | None = None
        self.selected_vehicle_id: int | None = None
        self.active_tab: Tab = Tab.FRONT
        self._image_sizes: dict[Side, ImageSize] = {}
        self._pending: tuple[Side, MarkerPosition] | None = None

        self.auth.add_sign_out_listener(self._on_signed_out)

    @classmethod
    def from_settings(cls) -> "InspectionApp":
        """Build the application with Supabase, storage and Gemini clients from settings."""
        client = create_client(settings.supabase_url, settings.supabase_key)
        storage = StorageClient()
        return cls(
            auth=AuthService(client),
            vehicles=VehicleRepository(client, storage),
            reports=ReportGenerator(),
        )

    # Session
    @property
    def profile(self) -> UserProfile | None:
        return self.auth.profile

    @property
    def is_signed_in(self) -> bool:
        return self.auth.current_session is not None

    def sign_in(self, email: str, password: str) -> OperationResult:
        try:
            self.auth.sign_in(email, password)
        except AuthError as e:
            return OperationResult(ok=False, message=str(e))
        self.refresh_vehicles()
        return OperationResult(ok=True)

    def sign_out(self) -> None:
        self.auth.sign_out()

    def _on_signed_out(self) -> None:
        self.session.reset_inspection()
        self.vehicle_list = []
        self.vehicles_error = None
        self.selected_vehicle_id = None
        self.active_tab = Tab.FRONT
        self._image_sizes = {}
        self._pending = None

    def update_profile(self, update: ProfileUpdate) -> OperationResult:
        previous_station = self.profile.station if self.profile else None
        try:
            profile = self.auth.update_profile(update)
        except AuthError as e:
            return OperationResult(ok=False, message=str(e))
        except PersistenceError:
            return OperationResult(ok=False, message=MSG_PROFILE_UPDATE_FAILED)

        if profile is not None and profile.station != previous_station:
            self.refresh_vehicles()
        return OperationResult(ok=True)

    def submit_profile_form(self, **values: str | None) -> OperationResult:
        """Save the profile edit form, sending only the fields that changed."""
        if self.profile is None:
            return OperationResult(ok=False, message=MSG_NOT_SIGNED_IN)
        return self.update_profile(ProfileUpdate.from_changes(self.profile, **values))

    # Vehicles
    @property
    def selected_vehicle(self) -> VehicleWithUrls | None:
        return next((v for v in self.vehicle_list if v.id == self.selected_vehicle_id), None)

    def refresh_vehicles(self) -> list[VehicleWithUrls]:
        """
        Reload the station's vehicles and repair the selection.

        The current vehicle stays selected when it still exists; otherwise
        the first vehicle is selected, or none when the list is empty.
        """
        station = self.profile.station if self.profile else None
        try:
            self.vehicle_list = self.vehicles.list_for_station(station)
            self.vehicles_error = None
        except PersistenceError:
            self.vehicle_list = []
            self.vehicles_error = MSG_VEHICLES_LOAD_FAILED

        if self.selected_vehicle is None:
            new_id = self.vehicle_list[0].id if self.vehicle_list else None
            if new_id != self.selected_vehicle_id:
                self._switch_vehicle(new_id)
        return self.vehicle_list

    def select_vehicle(self, vehicle_id: int) -> None:
        if not any(v.id == vehicle_id for v in self.vehicle_list):
            raise InvalidInputError(f"Unknown vehicle {vehicle_id}")
        self._switch_vehicle(vehicle_id)
        self.active_tab = Tab.FRONT

    def _switch_vehicle(self, vehicle_id: int | None) -> None:
        logger.info(f"Selected vehicle {vehicle_id}")
        self.selected_vehicle_id = vehicle_id
        self.session.reset_inspection()
        self._image_sizes = {}
        self._pending = None

    def side_views(self) -> list[tuple[Side, str, str | None]]:
        """(side, label, photograph URL) for the selected vehicle."""
        vehicle = self.selected_vehicle
        if vehicle is None:
            return []
        return [(side, SIDE_LABELS_FR[side], vehicle.image_url(side)) for side in Side]

    def save_vehicle(self, form: VehicleForm, vehicle_id: int | None = None) -> OperationResult:
        """Create a vehicle, or update ``vehicle_id`` when given."""
        station = self.profile.station if self.profile else None
        try:
            if vehicle_id is None:
                self.vehicles.create(form, station)
            else:
                existing = next((v for v in self.vehicle_list if v.id == vehicle_id), None)
                if existing is None:
                    raise InvalidInputError(f"Unknown vehicle {vehicle_id}")
                self.vehicles.update(existing, form, station)
        except FormValidationError as e:
            return OperationResult(ok=False, message=str(e))
        except StorageError as e:
            return OperationResult(ok=False, message=str(e))
        except PersistenceError:
            return OperationResult(ok=False, message=MSG_GENERIC_ERROR)

        self.refresh_vehicles()
        return OperationResult(ok=True)

    def delete_vehicle(self, vehicle_id: int) -> OperationResult:
        vehicle = next((v for v in self.vehicle_list if v.id == vehicle_id), None)
        if vehicle is None:
            raise InvalidInputError(f"Unknown vehicle {vehicle_id}")
        try:
            self.vehicles.delete(vehicle)
        except PersistenceError:
            return OperationResult(ok=False, message=MSG_VEHICLE_DELETE_FAILED)

        self.refresh_vehicles()
        return OperationResult(ok=True)

    # Navigation
    def set_active_tab(self, tab: Tab | str) -> bool:
        """Switch tab; everything but vehicle management needs a selected vehicle."""
        tab = Tab(tab)
        if self.selected_vehicle is None and tab is not Tab.MANAGE_VEHICLES:
            return False
        self.active_tab = tab
        return True

    # Annotation
    def on_image_loaded(self, side: Side, width: int, height: int) -> None:
        """
        Record the photograph's natural size; double-clicks are ignored until then.

        Raises:
            InvalidInputError: If a dimension is not positive
        """
        try:
            self._image_sizes[side] = ImageSize(width=width, height=height)
        except ValidationError as e:
            raise InvalidInputError(f"Invalid image size for {side.value}: {e}") from e

    def image_size(self, side: Side) -> ImageSize | None:
        return self._image_sizes.get(side)

    @property
    def pending_marker(self) -> tuple[Side, MarkerPosition] | None:
        return self._pending

    def double_click(
        self,
        side: Side,
        x: float,
        y: float,
        container: ContainerSize,
        transform: ViewTransform | None = None,
    ) -> MarkerPosition | None:
        """
        Start a new defect at a double-clicked point.

        Coordinates are content-space by default. When ``transform`` is given
        they are viewport coordinates and the pan/zoom is inverted first.

        Returns:
            The pending marker position, or None if the image has not loaded
            yet or the click fell on the padding
        """
        natural = self._image_sizes.get(side)
        if natural is None:
            return None

        if transform is not None:
            position = map_viewport_click_to_image(x, y, container, natural, transform)
        else:
            position = map_click_to_image(x, y, container, natural)

        if position is not None:
            self._pending = (side, position)
        return position

    def confirm_defect(self, title: str, description: str = "") -> OperationResult:
        """Store the pending marker as a defect; an empty title keeps it pending."""
        if self._pending is None:
            return OperationResult(ok=False)
        if not title.strip():
            return OperationResult(ok=False, message=MSG_DEFECT_TITLE_REQUIRED)

        side, position = self._pending
        self.session.add_defect(
            DefectDraft(side=side, x=position.x, y=position.y, title=title, description=description)
        )
        self._pending = None
        return OperationResult(ok=True)

    def cancel_defect(self) -> None:
        self._pending = None

    def record_defect(self, draft: DefectDraft | dict) -> Defect:
        """
        Store a defect whose position was already mapped.

        Raises:
            InvalidInputError: If the draft is invalid
        """
        return self.session.add_defect(draft)

    def toggle_checklist_item(self, item_id: str) -> None:
        self.session.toggle_checklist_item(item_id)

    # Report
    def generate_report(self) -> InspectionReport:
        vehicle = self.selected_vehicle
        return self.reports.generate_report(
            self.session.defects,
            self.session.checklist_items,
            vehicle_name=vehicle.name if vehicle else None,
        )
