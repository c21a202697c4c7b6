"""
In-memory state for trip projects, itineraries, chats and view routing.
"""

from trip_planner.store.chat import ChatComposer, ChatRequestToken, derive_title
from trip_planner.store.itinerary import ItineraryEditor
from trip_planner.store.projects import (
    TripProjectStore,
    build_days,
    day_count,
    rebuild_days,
)
from trip_planner.store.router import View, ViewRouter, WorkspaceTab

__all__ = [
    "ChatComposer",
    "ChatRequestToken",
    "ItineraryEditor",
    "TripProjectStore",
    "View",
    "ViewRouter",
    "WorkspaceTab",
    "build_days",
    "day_count",
    "derive_title",
    "rebuild_days",
]
