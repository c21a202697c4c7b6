"""
Top-level view routing between the dashboard and a trip workspace.
"""

from enum import StrEnum

from trip_planner.data.models import TripProject
from trip_planner.store.projects import TripProjectStore
from trip_planner.utils.error_handling import ValidationError
from trip_planner.utils.logging import get_logger

logger = get_logger(__name__)


class View(StrEnum):
    DASHBOARD = "dashboard"
    TRIP = "trip"


class WorkspaceTab(StrEnum):
    PLANNER = "planner"
    MAP = "map"
    TRANSLATOR = "translator"
    CURRENCY = "currency"
    AI = "ai"


class ViewRouter:
    """Dashboard/trip mode switch plus the trip workspace's active tab."""

    def __init__(self, store: TripProjectStore):
        self.store = store
        self.view = View.DASHBOARD
        self.tab = WorkspaceTab.PLANNER
        self.map_location = ""

    def open_trip(self, project_id: str) -> TripProject:
        """Enter the workspace for a project, always landing on the planner."""
        project = self.store.select(project_id)
        self.view = View.TRIP
        self.tab = WorkspaceTab.PLANNER
        logger.debug(f"Opened trip {project_id}")
        return project

    def back(self) -> None:
        self.view = View.DASHBOARD

    def switch_tab(self, tab: WorkspaceTab | str) -> WorkspaceTab:
        if self.view != View.TRIP:
            raise ValidationError("Tabs are only available inside a trip")
        self.tab = WorkspaceTab(tab)
        return self.tab

    def show_on_map(self, location: str) -> None:
        """Jump from an itinerary item to the map tab centred on its location."""
        self.map_location = location
        self.switch_tab(WorkspaceTab.MAP)
