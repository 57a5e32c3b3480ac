"""In-memory inspection state for the active vehicle."""

import uuid
from typing import Callable, Iterable

from pydantic import ValidationError

from .config.constants import CHECKLIST_TEMPLATE
from .models.inspection import ChecklistItem, Defect, DefectDraft, Side
from .utils.exceptions import InvalidInputError
from .utils.logger import get_logger

logger = get_logger(__name__)


def _new_defect_id() -> str:
    return f"defect-{uuid.uuid4().hex}"


class InspectionSession:
    """
    Defects and checklist state for one vehicle inspection.

    The collections are only changed through :meth:`add_defect`,
    :meth:`toggle_checklist_item` and :meth:`reset_inspection`; accessors
    return tuples so callers cannot mutate them in place.
    """

    def __init__(
        self,
        checklist_template: Iterable[ChecklistItem] = CHECKLIST_TEMPLATE,
        id_factory: Callable[[], str] = _new_defect_id,
    ):
        self._template = tuple(item.model_copy(update={"checked": False}) for item in checklist_template)
        self._id_factory = id_factory
        self._defects: list[Defect] = []
        self._checklist: list[ChecklistItem] = list(self._template)

    @property
    def defects(self) -> tuple[Defect, ...]:
        """Defects in insertion order."""
        return tuple(self._defects)

    @property
    def checklist_items(self) -> tuple[ChecklistItem, ...]:
        return tuple(self._checklist)

    @property
    def checked_count(self) -> int:
        return sum(1 for item in self._checklist if item.checked)

    @property
    def is_empty(self) -> bool:
        """True when nothing has been recorded since the last reset."""
        return not self._defects and self.checked_count == 0

    def defects_for_side(self, side: Side) -> list[Defect]:
        return [defect for defect in self._defects if defect.side == side]

    def add_defect(self, draft: DefectDraft | dict) -> Defect:
        """
        Record a new defect.

        Args:
            draft: Side, position, title and optional description

        Returns:
            The stored defect with its generated id

        Raises:
            InvalidInputError: If the title is empty, the position is outside
                [0, 100] or the side is unknown
        """
        try:
            draft = DefectDraft.model_validate(draft)
        except ValidationError as e:
            raise InvalidInputError(f"Invalid defect: {e}") from e

        fields = draft.model_dump(include=set(DefectDraft.model_fields))
        defect = Defect(id=self._id_factory(), **fields)
        self._defects.append(defect)
        logger.info(
            f"Added defect {defect.id} on {defect.side.value} at "
            f"({defect.x:.1f}%, {defect.y:.1f}%): {defect.title}"
        )
        return defect

    def toggle_checklist_item(self, item_id: str) -> None:
        """Flip the checked flag of an item; unknown ids are ignored."""
        for index, item in enumerate(self._checklist):
            if item.id == item_id:
                self._checklist[index] = item.model_copy(update={"checked": not item.checked})
                logger.debug(f"Checklist item {item_id} -> {not item.checked}")
                return
        logger.debug(f"Ignoring toggle of unknown checklist item {item_id}")

    def reset_inspection(self) -> None:
        """Drop all defects and restore the unchecked checklist template."""
        self._defects = []
        self._checklist = list(self._template)
        logger.info("Inspection state reset")
