"""
Chat sessions with the AI travel assistant, scoped to one trip project.

Handles: build the user message, create or extend the active session,
persist it right away, ask the gateway, append the reply.
"""

from dataclasses import dataclass
from typing import Any

from trip_planner.data.models import (
    ChatMessage,
    ChatSession,
    InlineData,
    MessagePart,
    MessageRole,
    ProjectPatch,
    TripProject,
)
from trip_planner.store.projects import TripProjectStore
from trip_planner.utils.error_handling import ResourceNotFoundError, ValidationError
from trip_planner.utils.helpers import now_ms, truncate_text
from trip_planner.utils.logging import get_logger

logger = get_logger(__name__)

TITLE_LENGTH = 25
IMAGE_ONLY_TITLE = "Image Query"
EMPTY_REPLY = "..."


def derive_title(text: str | None, image: InlineData | None = None) -> str:
    """
    Session title: the first 25 characters of the text, else a placeholder.

    Empty input without an image gets "New Chat". ``send`` rejects empty
    input before asking for a title, so only direct callers see it.
    """
    if text and text.strip():
        return truncate_text(text, TITLE_LENGTH)
    if image is not None:
        return IMAGE_ONLY_TITLE
    return "New Chat"


def to_gateway_history(messages: list[ChatMessage]) -> list[dict[str, Any]]:
    """Convert stored messages to ``[{"role", "parts"}]`` dicts for the gateway."""
    return [
        {
            "role": message.role.value,
            "parts": [part.model_dump(exclude_none=True) for part in message.parts],
        }
        for message in messages
    ]


@dataclass(frozen=True)
class ChatRequestToken:
    """Identifies the context an in-flight chat request belongs to."""

    project_id: str
    session_id: str
    generation: int


class ChatComposer:
    """
    Composer for the AI assistant tab of one project.

    Only one request may be in flight per context: ``send`` marks the current
    generation busy before its first suspension point and rejects calls while
    it is marked. ``bind``/``reset`` start a new generation, which is free.
    Replies arriving after ``bind``/``reset`` moved the composer to another
    context, or after their project or session was deleted, are dropped.
    """

    def __init__(
        self,
        store: TripProjectStore,
        gateway: Any,
        models: tuple[str, ...] = ("gemini-3-flash-preview", "gemini-3-pro-preview"),
        project_id: str | None = None,
    ):
        if not models:
            raise ValidationError("At least one chat model is required")
        self.store = store
        self.gateway = gateway
        self.models = models
        self.model = models[0]
        self.project_id = project_id
        self.current_chat_id: str | None = None
        self._busy_generation: int | None = None
        self._generation = 0

    # --- Context ---

    @property
    def is_typing(self) -> bool:
        # Busy only within the context that started the request
        return self._busy_generation == self._generation

    @property
    def project(self) -> TripProject:
        if self.project_id is None:
            raise ResourceNotFoundError("Chat composer is not bound to a project")
        return self.store.require(self.project_id)

    @property
    def sessions(self) -> list[ChatSession]:
        return list(self.project.chats)

    @property
    def active_session(self) -> ChatSession | None:
        if self.current_chat_id is None or self.project_id is None:
            return None
        project = self.store.get(self.project_id)
        if project is None:
            return None
        return project.get_chat(self.current_chat_id)

    def bind(self, project_id: str) -> None:
        """Point the composer at a project; switching projects resets it."""
        if project_id != self.project_id:
            self.project_id = project_id
            self.reset()

    def reset(self) -> None:
        """Forget the active session and orphan any in-flight reply."""
        self.current_chat_id = None
        self._generation += 1

    def new_chat(self) -> None:
        self.current_chat_id = None

    def select_session(self, session_id: str) -> ChatSession:
        session = self.project.get_chat(session_id)
        if session is None:
            raise ResourceNotFoundError(f"Chat session not found: {session_id}")
        self.current_chat_id = session_id
        return session

    def select_model(self, model: str) -> None:
        if model not in self.models:
            raise ValidationError(
                f"Unknown chat model {model!r}, expected one of {self.models}"
            )
        self.model = model

    # --- Operations ---

    async def send(
        self, text: str | None = None, image: InlineData | None = None
    ) -> ChatMessage | None:
        """
        Send a user message and append the assistant's reply.

        Returns:
            The appended model message, or None when the send was rejected
            (empty input, another send in flight) or the reply was discarded
        """
        text = text or ""
        if not text.strip() and image is None:
            return None
        if self.is_typing:
            logger.warning("Chat send rejected: a reply is already pending")
            return None

        project = self.project
        generation = self._generation
        self._busy_generation = generation
        try:
            parts = []
            if text.strip():
                parts.append(MessagePart(text=text))
            if image is not None:
                parts.append(MessagePart(inline_data=image))
            user_message = ChatMessage(role=MessageRole.USER, parts=parts)

            session = self.active_session
            if session is None:
                session = ChatSession(
                    title=derive_title(text, image),
                    messages=[user_message],
                    model=self.model,
                )
                chats = [session, *project.chats]
                self.current_chat_id = session.id
                logger.info(f"Started chat session {session.id} in {project.id}")
            else:
                session = session.model_copy(
                    update={
                        "messages": [*session.messages, user_message],
                        "last_updated": now_ms(),
                    }
                )
                chats = [session if c.id == session.id else c for c in project.chats]

            self.store.patch(project.id, ProjectPatch(chats=chats))

            token = ChatRequestToken(project.id, session.id, generation)
            history = to_gateway_history(session.messages[:-1])
            reply = await self.gateway.chat(
                message=text, history=history, model=self.model, image=image
            )
            return self._append_reply(token, reply)
        finally:
            if self._busy_generation == generation:
                self._busy_generation = None

    def delete(self, session_id: str) -> bool:
        """Remove a session, clearing the active pointer if it pointed there."""
        project = self.project
        chats = [c for c in project.chats if c.id != session_id]
        if len(chats) == len(project.chats):
            return False
        self.store.patch(project.id, ProjectPatch(chats=chats))
        if self.current_chat_id == session_id:
            self.current_chat_id = None
        logger.info(f"Deleted chat session {session_id}")
        return True

    def _append_reply(
        self, token: ChatRequestToken, reply: str | None
    ) -> ChatMessage | None:
        if token.generation != self._generation:
            logger.info(f"Discarding reply for {token.session_id}: context changed")
            return None

        project = self.store.get(token.project_id)
        session = project.get_chat(token.session_id) if project else None
        if session is None:
            logger.info(f"Discarding reply for {token.session_id}: session gone")
            return None

        model_message = ChatMessage(
            role=MessageRole.MODEL, parts=[MessagePart(text=reply or EMPTY_REPLY)]
        )
        session = session.model_copy(
            update={
                "messages": [*session.messages, model_message],
                "last_updated": now_ms(),
            }
        )
        chats = [session if c.id == session.id else c for c in project.chats]
        self.store.patch(project.id, ProjectPatch(chats=chats))
        return model_message
