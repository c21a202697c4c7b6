"""Tests for the DynamoDB project repository."""

from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from trip_planner.data.models import TripItem, TripProject
from trip_planner.data.repository import ProjectRepository
from trip_planner.store.projects import build_days
from trip_planner.utils.error_handling import TripPlannerError


@pytest.fixture
def mock_db():
    return MagicMock()


@pytest.fixture
def repo(mock_db):
    return ProjectRepository(mock_db)


@pytest.fixture
def project():
    days = build_days("2025-04-01", "2025-04-02")
    days[0] = days[0].model_copy(
        update={"items": [TripItem(activity="Fushimi Inari", booking_ref="BK-1")]}
    )
    return TripProject(
        id="p1",
        title="Kyoto",
        start_date="2025-04-01",
        end_date="2025-04-02",
        itinerary=days,
    )


def test_save_project(repo, mock_db, project):
    repo.save_project("owner-1", project, position=3)
    mock_db.put_item.assert_called_once()
    item = mock_db.put_item.call_args[0][0]
    assert item["PK"] == "OWNER#owner-1"
    assert item["SK"] == "PROJECT#p1"
    assert item["EntityType"] == "TripProject"
    assert item["Position"] == 3
    assert item["Data"]["startDate"] == "2025-04-01"
    assert item["Data"]["itinerary"][0]["items"][0]["bookingRef"] == "BK-1"
    assert "updatedAt" in item["Metadata"]


def test_save_all_records_positions(repo, mock_db, project):
    other = project.model_copy(update={"id": "p2", "title": "Nara"})
    mock_db.query.return_value = []
    repo.save_all("owner-1", [other, project])
    items = mock_db.batch_write.call_args[0][0]
    assert [(i["SK"], i["Position"]) for i in items] == [
        ("PROJECT#p2", 0),
        ("PROJECT#p1", 1),
    ]


def test_save_all_deletes_removed_projects(repo, mock_db, project):
    mock_db.query.return_value = [
        {"PK": "OWNER#owner-1", "SK": "PROJECT#p1"},
        {"PK": "OWNER#owner-1", "SK": "PROJECT#deleted"},
    ]
    repo.save_all("owner-1", [project])
    assert mock_db.batch_write.call_args[1]["deletes"] == [
        ("OWNER#owner-1", "PROJECT#deleted")
    ]


def test_get_project(repo, mock_db, project):
    mock_db.get_item.return_value = {
        "PK": "OWNER#owner-1",
        "SK": "PROJECT#p1",
        "Data": project.to_json_dict(),
    }
    loaded = repo.get_project("owner-1", "p1")
    assert loaded == project
    mock_db.get_item.assert_called_with("OWNER#owner-1", "PROJECT#p1")


def test_get_project_not_found(repo, mock_db):
    mock_db.get_item.return_value = None
    assert repo.get_project("owner-1", "missing") is None


def test_list_projects_sorted_by_position(repo, mock_db, project):
    data = project.to_json_dict()
    # DynamoDB returns numbers as Decimal
    data["chats"] = [
        {
            "id": "c1",
            "title": "Food",
            "lastUpdated": Decimal("1735689600000"),
            "model": "gemini-3-flash-preview",
            "messages": [
                {
                    "role": "user",
                    "parts": [{"text": "Ramen?"}],
                    "timestamp": Decimal("1735689600000"),
                }
            ],
        }
    ]
    second = project.model_copy(update={"id": "p2", "title": "Nara"}).to_json_dict()
    mock_db.query.return_value = [
        {"SK": "PROJECT#p2", "Position": Decimal(1), "Data": second},
        {"SK": "PROJECT#p1", "Position": Decimal(0), "Data": data},
    ]

    projects = repo.list_projects("owner-1")
    assert [p.id for p in projects] == ["p1", "p2"]
    assert projects[0].chats[0].messages[0].text == "Ramen?"
    mock_db.query.assert_called_once_with(pk="OWNER#owner-1", sk_prefix="PROJECT#")


def test_delete_project(repo, mock_db):
    repo.delete_project("owner-1", "p1")
    mock_db.delete_item.assert_called_once_with("OWNER#owner-1", "PROJECT#p1")


def test_storage_errors_are_wrapped(repo, mock_db, project):
    mock_db.put_item.side_effect = RuntimeError("throttled")
    with pytest.raises(TripPlannerError) as exc_info:
        repo.save_project("owner-1", project)
    assert isinstance(exc_info.value.original_error, RuntimeError)
