"""
AWS Lambda handler for the trip planner workspace.

Routes events by "action" field. Each invocation loads the owner's projects
from DynamoDB into a fresh store, applies the action through the workspace
app, and writes the changed projects back.
"""

import asyncio
from typing import Any

from trip_planner.app import TripPlannerApp
from trip_planner.config import initialize_config
from trip_planner.data.dynamodb import DynamoDBClient
from trip_planner.data.models import InlineData, ProjectDraft, TripItemUpdate
from trip_planner.data.repository import ProjectRepository
from trip_planner.store.projects import TripProjectStore
from trip_planner.tools.currency import CurrencyCalculator
from trip_planner.utils.error_handling import TripPlannerError
from trip_planner.utils.logging import get_logger, setup_logging

config = initialize_config()
setup_logging(config.system.log_level, config.system.log_file)

logger = get_logger(__name__)


def _extract_owner_id(owner_id_raw: str) -> str:
    """Extract owner ID from OWNER#123 format."""
    if owner_id_raw.startswith("OWNER#"):
        return owner_id_raw[6:]
    return owner_id_raw


def _get_db() -> DynamoDBClient:
    return DynamoDBClient(
        table_name=config.api.dynamodb_table_name,
        endpoint_url=config.api.dynamodb_endpoint,
        region=config.api.aws_region,
    )


def _get_repo() -> ProjectRepository:
    return ProjectRepository(_get_db())


def route_event(event: dict[str, Any]) -> tuple[str, dict[str, Any]]:
    """Parse event and extract action + parameters."""
    action = event.get("action", "unknown")
    params: dict[str, Any] = {}

    owner_id_raw = event.get("ownerId", "")
    if owner_id_raw:
        params["owner_id"] = _extract_owner_id(owner_id_raw)

    params["project_id"] = event.get("projectId")
    params["project"] = event.get("project", {})
    params["day_id"] = event.get("dayId")
    params["item_id"] = event.get("itemId")
    params["updates"] = event.get("updates", {})

    # Chat fields
    params["message"] = event.get("message", "")
    params["image"] = event.get("image")
    params["chat_id"] = event.get("chatId")
    params["model"] = event.get("model")

    # Translator and currency fields
    params["text"] = event.get("text", "")
    params["source"] = event.get("source", "Auto-detect")
    params["target"] = event.get("target", "")
    params["amount"] = event.get("amount", "")
    params["from_currency"] = event.get("fromCurrency", "")
    params["to_currency"] = event.get("toCurrency", "")

    return action, params


def _load_app(repo: ProjectRepository, owner_id: str) -> TripPlannerApp:
    store = TripProjectStore(repo.list_projects(owner_id))
    return TripPlannerApp(config=config, store=store)


def _open_project(repo: ProjectRepository, params: dict[str, Any]) -> TripPlannerApp:
    app = _load_app(repo, params["owner_id"])
    app.select_project(params["project_id"])
    return app


def _save(repo: ProjectRepository, owner_id: str, app: TripPlannerApp) -> None:
    repo.save_all(owner_id, app.store.projects)


async def _handle_list_projects(params: dict[str, Any]) -> dict[str, Any]:
    repo = _get_repo()
    projects = repo.list_projects(params["owner_id"])
    return {"status": "ok", "data": [p.to_json_dict() for p in projects]}


async def _handle_save_project(params: dict[str, Any]) -> dict[str, Any]:
    repo = _get_repo()
    app = _load_app(repo, params["owner_id"])
    project = app.save_project(ProjectDraft.model_validate(params["project"]))
    if project is None:
        return {"status": "ignored"}
    _save(repo, params["owner_id"], app)
    return {"status": "ok", "data": project.to_json_dict()}


async def _handle_delete_project(params: dict[str, Any]) -> dict[str, Any]:
    repo = _get_repo()
    repo.delete_project(params["owner_id"], params["project_id"])
    return {"status": "ok"}


async def _handle_add_item(params: dict[str, Any]) -> dict[str, Any]:
    repo = _get_repo()
    app = _open_project(repo, params)
    item = app.itinerary.add_item(params["day_id"])
    if item is None:
        return {"status": "error", "error": f"Day not found: {params['day_id']}"}
    _save(repo, params["owner_id"], app)
    return {"status": "ok", "data": item.to_json_dict()}


async def _handle_update_item(params: dict[str, Any]) -> dict[str, Any]:
    repo = _get_repo()
    app = _open_project(repo, params)
    item = app.itinerary.update_item(
        params["day_id"],
        params["item_id"],
        TripItemUpdate.model_validate(params["updates"]),
    )
    if item is None:
        return {"status": "error", "error": f"Item not found: {params['item_id']}"}
    _save(repo, params["owner_id"], app)
    return {"status": "ok", "data": item.to_json_dict()}


async def _handle_delete_item(params: dict[str, Any]) -> dict[str, Any]:
    repo = _get_repo()
    app = _open_project(repo, params)
    removed = app.itinerary.delete_item(params["day_id"], params["item_id"])
    if removed:
        _save(repo, params["owner_id"], app)
    return {"status": "ok", "removed": removed}


async def _handle_send_chat(params: dict[str, Any]) -> dict[str, Any]:
    repo = _get_repo()
    app = _open_project(repo, params)
    if params.get("chat_id"):
        app.chat.select_session(params["chat_id"])
    if params.get("model"):
        app.chat.select_model(params["model"])

    image = InlineData.model_validate(params["image"]) if params.get("image") else None
    reply = await app.chat.send(params["message"], image)
    if reply is None:
        return {"status": "ignored"}

    _save(repo, params["owner_id"], app)
    return {
        "status": "ok",
        "chat_id": app.chat.current_chat_id,
        "response": reply.text,
    }


async def _handle_delete_chat(params: dict[str, Any]) -> dict[str, Any]:
    repo = _get_repo()
    app = _open_project(repo, params)
    removed = app.chat.delete(params["chat_id"])
    if removed:
        _save(repo, params["owner_id"], app)
    return {"status": "ok", "removed": removed}


async def _handle_generate_banner(params: dict[str, Any]) -> dict[str, Any]:
    repo = _get_repo()
    app = _open_project(repo, params)
    url = await app.generate_banner()
    if url is None:
        return {"status": "error", "error": "Banner generation failed"}
    _save(repo, params["owner_id"], app)
    return {"status": "ok", "banner_url": url}


async def _handle_weather(params: dict[str, Any]) -> dict[str, Any]:
    repo = _get_repo()
    app = _open_project(repo, params)
    report = await app.current_weather()
    return {"status": "ok", "data": report.model_dump() if report else None}


async def _handle_translate(params: dict[str, Any]) -> dict[str, Any]:
    app = TripPlannerApp(config=config)
    app.translator.set_languages(params["source"], params["target"])
    translation = await app.translator.translate_text(params["text"])
    return {"status": "ok", "translation": translation or ""}


async def _handle_convert_currency(params: dict[str, Any]) -> dict[str, Any]:
    calculator = CurrencyCalculator(amount=str(params["amount"]))
    rate = calculator.set_pair(params["from_currency"], params["to_currency"])
    return {"status": "ok", "rate": rate, "converted": calculator.converted}


# Action handlers map
_HANDLERS = {
    "list_projects": _handle_list_projects,
    "save_project": _handle_save_project,
    "delete_project": _handle_delete_project,
    "add_item": _handle_add_item,
    "update_item": _handle_update_item,
    "delete_item": _handle_delete_item,
    "send_chat": _handle_send_chat,
    "delete_chat": _handle_delete_chat,
    "generate_banner": _handle_generate_banner,
    "weather": _handle_weather,
    "translate": _handle_translate,
    "convert_currency": _handle_convert_currency,
}


async def async_handler(event: dict[str, Any]) -> dict[str, Any]:
    """Main async handler."""
    action, params = route_event(event)

    handler_fn = _HANDLERS.get(action)
    if not handler_fn:
        return {"status": "error", "error": f"Unknown action: {action}"}

    try:
        return await handler_fn(params)
    except (TripPlannerError, ValueError, KeyError) as e:
        logger.error(f"Error handling {action}: {e}")
        return {"status": "error", "error": str(e)}


def handler(event: dict[str, Any], context: Any = None) -> dict[str, Any]:
    """Lambda entry point (sync wrapper)."""
    return asyncio.run(async_handler(event))
