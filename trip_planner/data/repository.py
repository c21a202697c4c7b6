"""
DynamoDB repository for trip projects.

Each project is stored whole (itinerary and chats included) as one item:
PK=OWNER#{owner_id}, SK=PROJECT#{project_id}. ``Position`` keeps the
dashboard's newest-first order across reloads.
"""

from datetime import UTC, datetime
from typing import Any

from trip_planner.data.dynamodb import DynamoDBClient
from trip_planner.data.models import TripProject
from trip_planner.utils.error_handling import TripPlannerError, handle_errors
from trip_planner.utils.logging import get_logger

logger = get_logger(__name__)

ENTITY_TYPE = "TripProject"


def owner_pk(owner_id: str) -> str:
    return f"OWNER#{owner_id}"


def project_sk(project_id: str) -> str:
    return f"PROJECT#{project_id}"


class ProjectRepository:
    """Persistence boundary between the in-memory store and DynamoDB."""

    def __init__(self, db: DynamoDBClient):
        self.db = db

    def _to_item(
        self, owner_id: str, project: TripProject, position: int
    ) -> dict[str, Any]:
        """Convert a project to a DynamoDB item."""
        return {
            "PK": owner_pk(owner_id),
            "SK": project_sk(project.id),
            "EntityType": ENTITY_TYPE,
            "Version": 1,
            "Position": position,
            "Data": project.to_json_dict(),
            "Metadata": {"updatedAt": datetime.now(UTC).isoformat()},
        }

    @handle_errors(error_cls=TripPlannerError)
    def save_project(
        self, owner_id: str, project: TripProject, position: int = 0
    ) -> None:
        self.db.put_item(self._to_item(owner_id, project, position))

    @handle_errors(error_cls=TripPlannerError)
    def save_all(self, owner_id: str, projects: list[TripProject]) -> None:
        """
        Replace the owner's stored projects with ``projects``.

        Positions follow list order; stored projects missing from the list
        are deleted.
        """
        keep = {project_sk(project.id) for project in projects}
        stale = [
            (owner_pk(owner_id), item["SK"])
            for item in self.db.query(pk=owner_pk(owner_id), sk_prefix="PROJECT#")
            if item["SK"] not in keep
        ]
        self.db.batch_write(
            [
                self._to_item(owner_id, project, position)
                for position, project in enumerate(projects)
            ],
            deletes=stale,
        )
        logger.debug(
            f"Saved {len(projects)} projects for {owner_id}, removed {len(stale)}"
        )

    @handle_errors(error_cls=TripPlannerError)
    def get_project(self, owner_id: str, project_id: str) -> TripProject | None:
        item = self.db.get_item(owner_pk(owner_id), project_sk(project_id))
        if not item:
            return None
        return TripProject.model_validate(item["Data"])

    @handle_errors(error_cls=TripPlannerError)
    def list_projects(self, owner_id: str) -> list[TripProject]:
        items = self.db.query(pk=owner_pk(owner_id), sk_prefix="PROJECT#")
        items = sorted(items, key=lambda i: int(i.get("Position", 0)))
        return [TripProject.model_validate(i["Data"]) for i in items]

    @handle_errors(error_cls=TripPlannerError)
    def delete_project(self, owner_id: str, project_id: str) -> None:
        self.db.delete_item(owner_pk(owner_id), project_sk(project_id))
