"""
Domain models for trip projects, itineraries and AI chat sessions.

Models serialize with camelCase aliases (``startDate``, ``bannerUrl``,
``inlineData``...) so stored and exchanged JSON keeps the client's shape,
while Python code uses snake_case attributes.
"""

import datetime as dt
from enum import StrEnum
from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel

from trip_planner.utils.helpers import generate_id, now_ms

TIME_PATTERN = r"^([01]\d|2[0-3]):[0-5]\d$"

DEFAULT_ITEM_TIME = "12:00"
DEFAULT_ITEM_ACTIVITY = "New Activity"


class ItemType(StrEnum):
    FOOD = "food"
    TRANSPORT = "transport"
    SIGHTSEEING = "sightseeing"
    HOTEL = "hotel"


class MessageRole(StrEnum):
    USER = "user"
    MODEL = "model"


class CamelModel(BaseModel):
    """Base model serializing to camelCase and accepting either spelling."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_json_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class TripItem(CamelModel):
    """A single scheduled activity. ``time`` is display-only and never sorts."""

    id: str = Field(default_factory=generate_id)
    time: str = Field(default=DEFAULT_ITEM_TIME, pattern=TIME_PATTERN)
    activity: str = DEFAULT_ITEM_ACTIVITY
    location: str = ""
    type: ItemType = ItemType.SIGHTSEEING
    booking_ref: str | None = None
    notes: str | None = None
    completed: bool = False


class DayPlan(CamelModel):
    """One calendar day of a project, items kept in insertion order."""

    id: str = Field(default_factory=generate_id)
    date: dt.date
    items: list[TripItem] = Field(default_factory=list)


class InlineData(CamelModel):
    mime_type: str
    data: str


class MessagePart(CamelModel):
    """One part of a chat message: text, inline binary data, or both."""

    text: str | None = None
    inline_data: InlineData | None = None

    @model_validator(mode="after")
    def require_content(self) -> "MessagePart":
        if self.text is None and self.inline_data is None:
            raise ValueError("A message part needs text or inline data")
        return self


class ChatMessage(CamelModel):
    role: MessageRole
    parts: list[MessagePart]
    timestamp: int = Field(default_factory=now_ms)

    @property
    def text(self) -> str:
        """Concatenated text of all text parts."""
        return "".join(part.text for part in self.parts if part.text)


class ChatSession(CamelModel):
    """One conversation thread with the travel assistant."""

    id: str = Field(default_factory=generate_id)
    title: str
    messages: list[ChatMessage] = Field(default_factory=list)
    last_updated: int = Field(default_factory=now_ms)
    model: str


class TripProject(CamelModel):
    """
    A trip: destination title, inclusive date range, itinerary and chats.

    The itinerary holds exactly one DayPlan per calendar day between
    ``start_date`` and ``end_date`` in date order. Chats are stored
    most-recent-first by creation.
    """

    id: str = Field(default_factory=generate_id)
    title: str
    start_date: dt.date
    end_date: dt.date
    itinerary: list[DayPlan] = Field(default_factory=list)
    banner_url: str | None = None
    chats: list[ChatSession] = Field(default_factory=list)

    @model_validator(mode="after")
    def check_date_range(self) -> "TripProject":
        if self.end_date < self.start_date:
            raise ValueError(
                f"end_date {self.end_date} is before start_date {self.start_date}"
            )
        return self

    @property
    def day_count(self) -> int:
        return len(self.itinerary)

    def get_day(self, day_id: str) -> DayPlan | None:
        return next((day for day in self.itinerary if day.id == day_id), None)

    def get_chat(self, session_id: str) -> ChatSession | None:
        return next((chat for chat in self.chats if chat.id == session_id), None)


# --- Update variants ---


class ProjectDraft(CamelModel):
    """
    Dashboard form data for creating (no ``id``) or editing a project.

    Empty strings are accepted and treated as missing so an incomplete form
    can be passed straight through; ``is_complete`` reports whether it can
    be saved.
    """

    id: str | None = None
    title: str = ""
    start_date: dt.date | None = None
    end_date: dt.date | None = None

    @field_validator("title", mode="before")
    @classmethod
    def missing_title_to_blank(cls, value: Any) -> Any:
        # A form without a usable title is incomplete, not invalid
        return value if isinstance(value, str) else ""

    @field_validator("id", "start_date", "end_date", mode="before")
    @classmethod
    def blank_to_none(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @property
    def is_complete(self) -> bool:
        return bool(self.title.strip()) and bool(self.start_date) and bool(self.end_date)


class ProjectPatch(CamelModel):
    """Fields nested features may replace on a project. Identity is not patchable."""

    banner_url: str | None = None
    itinerary: list[DayPlan] | None = None
    chats: list[ChatSession] | None = None


class TripItemUpdate(CamelModel):
    """Editable fields of a TripItem; only fields explicitly set are applied."""

    time: str | None = Field(default=None, pattern=TIME_PATTERN)
    activity: str | None = None
    location: str | None = None
    type: ItemType | None = None
    booking_ref: str | None = None
    notes: str | None = None
    completed: bool | None = None
