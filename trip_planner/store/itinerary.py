"""
Itinerary editing for the selected trip project.

All writes go through ``TripProjectStore.patch`` with a rebuilt itinerary.
Items stay in insertion order; their ``time`` is never used for sorting.
"""

from collections.abc import Callable

from trip_planner.data.models import (
    DayPlan,
    ProjectPatch,
    TripItem,
    TripItemUpdate,
    TripProject,
)
from trip_planner.store.projects import TripProjectStore
from trip_planner.utils.error_handling import ResourceNotFoundError, ValidationError
from trip_planner.utils.logging import get_logger

logger = get_logger(__name__)

_CLEARABLE_FIELDS = {"booking_ref", "notes"}


class ItineraryEditor:
    """Day navigation and item CRUD on the store's selected project."""

    def __init__(self, store: TripProjectStore):
        self.store = store
        self._active_day_index = 0

    @property
    def project(self) -> TripProject:
        project = self.store.selected
        if project is None:
            raise ResourceNotFoundError("No project selected")
        return project

    # --- Day navigation ---

    @property
    def active_day_index(self) -> int:
        """Selected day index, reset to 0 once the itinerary is shorter than it."""
        project = self.store.selected
        if project is None or self._active_day_index >= project.day_count:
            self._active_day_index = 0
        return self._active_day_index

    @property
    def active_day(self) -> DayPlan | None:
        project = self.store.selected
        if project is None or not project.itinerary:
            return None
        return project.itinerary[self.active_day_index]

    def set_active_day(self, index: int) -> DayPlan:
        days = self.project.itinerary
        if not 0 <= index < len(days):
            raise ValidationError(
                f"Day index {index} out of range for {len(days)} days"
            )
        self._active_day_index = index
        return days[index]

    def reset(self) -> None:
        self._active_day_index = 0

    # --- Items ---

    def add_item(self, day_id: str) -> TripItem | None:
        """Append a default item to a day; None if the day does not exist."""
        item = TripItem()
        found = self._edit_day(day_id, lambda items: [*items, item])
        if not found:
            return None
        logger.debug(f"Added item {item.id} to day {day_id}")
        return item

    def update_item(
        self, day_id: str, item_id: str, update: TripItemUpdate | dict
    ) -> TripItem | None:
        """Merge the fields set on ``update`` into one item."""
        if isinstance(update, dict):
            update = TripItemUpdate.model_validate(update)
        changes = {
            name: getattr(update, name)
            for name in update.model_fields_set
            if getattr(update, name) is not None or name in _CLEARABLE_FIELDS
        }

        updated: list[TripItem] = []

        def merge(items: list[TripItem]) -> list[TripItem]:
            result = []
            for item in items:
                if item.id == item_id:
                    item = TripItem.model_validate({**item.model_dump(), **changes})
                    updated.append(item)
                result.append(item)
            return result

        self._edit_day(day_id, merge)
        return updated[0] if updated else None

    def toggle_completed(self, day_id: str, item_id: str) -> TripItem | None:
        day = self.project.get_day(day_id)
        item = next((i for i in day.items if i.id == item_id), None) if day else None
        if item is None:
            return None
        return self.update_item(
            day_id, item_id, TripItemUpdate(completed=not item.completed)
        )

    def delete_item(self, day_id: str, item_id: str) -> bool:
        removed = []

        def drop(items: list[TripItem]) -> list[TripItem]:
            kept = [item for item in items if item.id != item_id]
            if len(kept) != len(items):
                removed.append(item_id)
            return kept

        self._edit_day(day_id, drop)
        return bool(removed)

    def _edit_day(
        self, day_id: str, edit: Callable[[list[TripItem]], list[TripItem]]
    ) -> bool:
        project = self.project
        if project.get_day(day_id) is None:
            logger.warning(f"Day {day_id} not found in project {project.id}")
            return False

        itinerary = [
            day.model_copy(update={"items": edit(day.items)})
            if day.id == day_id
            else day
            for day in project.itinerary
        ]
        self.store.patch(project.id, ProjectPatch(itinerary=itinerary))
        return True
