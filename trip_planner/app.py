"""
Composition root for the trip planner workspace.

Builds one TripProjectStore and threads it through the router, the
itinerary editor and the chat composer, so every feature reads and writes
the same project list.
"""

from typing import Any

from trip_planner.config import TripPlannerConfig
from trip_planner.data.models import ProjectDraft, ProjectPatch, TripProject
from trip_planner.gateway.gemini import GeminiGateway, WeatherReport
from trip_planner.store.chat import ChatComposer
from trip_planner.store.itinerary import ItineraryEditor
from trip_planner.store.projects import TripProjectStore
from trip_planner.store.router import ViewRouter
from trip_planner.tools.currency import CurrencyCalculator
from trip_planner.tools.translator import Translator
from trip_planner.utils.error_handling import ResourceNotFoundError
from trip_planner.utils.logging import get_logger

logger = get_logger(__name__)


class TripPlannerApp:
    """All workspace state plus the actions the UI dispatches."""

    def __init__(
        self,
        config: TripPlannerConfig | None = None,
        store: TripProjectStore | None = None,
        gateway: Any | None = None,
    ):
        self.config = config or TripPlannerConfig()
        self.store = store or TripProjectStore()
        self.gateway = gateway or GeminiGateway(
            models=self.config.models, api_key=self.config.api.gemini_api_key or None
        )
        self.router = ViewRouter(self.store)
        self.itinerary = ItineraryEditor(self.store)
        self.chat = ChatComposer(
            self.store,
            self.gateway,
            models=(self.config.models.chat_model, self.config.models.pro_chat_model),
        )
        self.translator = Translator(self.gateway)
        self.currency = CurrencyCalculator()

    # --- Dashboard ---

    def save_project(self, draft: ProjectDraft | dict[str, Any]) -> TripProject | None:
        return self.store.create_or_update(draft)

    def delete_project(self, project_id: str) -> bool:
        return self.store.delete(project_id)

    def select_project(self, project_id: str) -> TripProject:
        """Open a project's workspace on the planner tab."""
        project = self.router.open_trip(project_id)
        if self.chat.project_id != project_id:
            self.itinerary.reset()
        self.chat.bind(project_id)
        logger.debug(f"Selected project {project_id}")
        return project

    def back(self) -> None:
        self.router.back()

    # --- Banner and weather ---

    def _selected(self) -> TripProject:
        project = self.store.selected
        if project is None:
            raise ResourceNotFoundError("No project selected")
        return project

    async def generate_banner(self) -> str | None:
        """Generate an AI banner for the selected project; keeps the old one on failure."""
        project = self._selected()
        url = await self.gateway.generate_banner(project.title)
        if url:
            self.store.patch(project.id, ProjectPatch(banner_url=url))
        else:
            logger.warning(f"Banner generation failed for {project.id}")
        return url

    def upload_banner(self, data_url: str) -> TripProject | None:
        project = self._selected()
        return self.store.patch(project.id, ProjectPatch(banner_url=data_url))

    async def current_weather(self) -> WeatherReport | None:
        return await self.gateway.fetch_weather(self._selected().title)
