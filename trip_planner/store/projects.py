"""
Trip project store.

Holds the ordered list of trip projects (newest first) and the selected
project id. Every mutation replaces the whole list with a new one built
from copied projects, so readers holding an older list never observe a
partial edit.
"""

import datetime as dt
from collections.abc import Iterable
from typing import Any

from trip_planner.data.models import DayPlan, ProjectDraft, ProjectPatch, TripProject
from trip_planner.utils.error_handling import ResourceNotFoundError, ValidationError
from trip_planner.utils.helpers import parse_iso_date
from trip_planner.utils.logging import get_logger

logger = get_logger(__name__)


def day_count(start_date: dt.date, end_date: dt.date) -> int:
    """Inclusive number of calendar days between two dates (0 if reversed)."""
    return max((end_date - start_date).days + 1, 0)


def build_days(start_date: dt.date | str, end_date: dt.date | str) -> list[DayPlan]:
    """
    Generate one empty DayPlan per calendar day from start to end, inclusive.

    Works on plain calendar dates, so month and year rollover come from
    ``timedelta`` and no timezone conversion is involved.
    """
    current = parse_iso_date(start_date)
    end = parse_iso_date(end_date)
    days = []
    while current <= end:
        days.append(DayPlan(date=current))
        current += dt.timedelta(days=1)
    return days


def rebuild_days(
    existing: list[DayPlan], start_date: dt.date | str, end_date: dt.date | str
) -> list[DayPlan]:
    """
    Regenerate a project's days for a new date range.

    Every day gets a fresh id. Items are carried over by position: the
    n-th new day keeps the items of the n-th old day, whatever its date.
    Extra new days start empty and surplus old days are dropped.
    """
    days = build_days(start_date, end_date)
    return [
        day.model_copy(update={"items": list(existing[index].items)})
        if index < len(existing)
        else day
        for index, day in enumerate(days)
    ]


class TripProjectStore:
    """In-memory aggregate root for all trip projects."""

    def __init__(self, projects: Iterable[TripProject] | None = None):
        self._projects: list[TripProject] = list(projects or [])
        self._selected_id: str | None = None

    # --- Reads ---

    @property
    def projects(self) -> list[TripProject]:
        return list(self._projects)

    @property
    def selected_id(self) -> str | None:
        return self._selected_id

    @property
    def selected(self) -> TripProject | None:
        """The selected project, or None if nothing is selected or it was deleted."""
        if self._selected_id is None:
            return None
        return self.get(self._selected_id)

    def get(self, project_id: str) -> TripProject | None:
        return next((p for p in self._projects if p.id == project_id), None)

    def require(self, project_id: str) -> TripProject:
        project = self.get(project_id)
        if project is None:
            raise ResourceNotFoundError(f"Project not found: {project_id}")
        return project

    # --- Mutations ---

    def load(self, projects: Iterable[TripProject]) -> None:
        """Replace the whole project list, e.g. after reading from storage."""
        self._projects = list(projects)
        logger.debug(f"Loaded {len(self._projects)} projects")

    def create_or_update(
        self, draft: ProjectDraft | dict[str, Any]
    ) -> TripProject | None:
        """
        Save dashboard form data.

        Without an id a new project with empty days is prepended. With an id,
        the matching project gets the new title and date range and its days
        are rebuilt keeping items by position. Incomplete drafts and unknown
        ids are ignored.

        Returns:
            The saved project, or None when nothing was saved

        Raises:
            ValidationError: If the end date is before the start date
        """
        if isinstance(draft, dict):
            draft = ProjectDraft.model_validate(draft)

        if not draft.is_complete:
            logger.debug("Ignoring incomplete project draft")
            return None

        if draft.end_date < draft.start_date:
            raise ValidationError(
                f"End date {draft.end_date} is before start date {draft.start_date}"
            )

        if draft.id is None:
            project = TripProject(
                title=draft.title,
                start_date=draft.start_date,
                end_date=draft.end_date,
                itinerary=build_days(draft.start_date, draft.end_date),
            )
            self._projects = [project, *self._projects]
            logger.info(f"Created project {project.id} ({project.day_count} days)")
            return project

        existing = self.get(draft.id)
        if existing is None:
            logger.warning(f"Ignoring update for unknown project {draft.id}")
            return None

        updated = existing.model_copy(
            update={
                "title": draft.title,
                "start_date": draft.start_date,
                "end_date": draft.end_date,
                "itinerary": rebuild_days(
                    existing.itinerary, draft.start_date, draft.end_date
                ),
            }
        )
        self._replace(updated)
        logger.info(f"Updated project {updated.id} ({updated.day_count} days)")
        return updated

    def delete(self, project_id: str) -> bool:
        """Remove a project. The selection is left for the views to resolve."""
        remaining = [p for p in self._projects if p.id != project_id]
        removed = len(remaining) != len(self._projects)
        self._projects = remaining
        if removed:
            logger.info(f"Deleted project {project_id}")
        return removed

    def select(self, project_id: str) -> TripProject:
        """Mark a project as the one shown in the trip workspace."""
        project = self.require(project_id)
        self._selected_id = project_id
        return project

    def patch(
        self, project_id: str, patch: ProjectPatch | dict[str, Any]
    ) -> TripProject | None:
        """
        Shallow-merge the fields set on ``patch`` into a project.

        This is the single write path nested features (itinerary, chat,
        banner) use to persist their changes.
        """
        if isinstance(patch, dict):
            patch = ProjectPatch.model_validate(patch)

        project = self.get(project_id)
        if project is None:
            logger.warning(f"Ignoring patch for unknown project {project_id}")
            return None

        changes = {name: getattr(patch, name) for name in patch.model_fields_set}
        # banner_url may be cleared; the collections may only be replaced
        changes = {
            name: value
            for name, value in changes.items()
            if value is not None or name == "banner_url"
        }
        updated = project.model_copy(update=changes)
        self._replace(updated)
        return updated

    def _replace(self, project: TripProject) -> None:
        self._projects = [project if p.id == project.id else p for p in self._projects]
