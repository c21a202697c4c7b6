"""
Gemini gateway for every AI-backed feature of the workspace.

Each public coroutine is a stateless request/response call. Failures are
retried for transient errors and then converted to a fallback value (None
or a user-facing message), so callers never see an exception.
"""

import base64
from typing import Any

from google import genai
from google.genai import types
from pydantic import BaseModel

from trip_planner.config import GatewayModelConfig
from trip_planner.data.models import InlineData
from trip_planner.gateway.prompts import (
    AUDIO_TRANSLATION_PROMPT,
    BANNER_PROMPT,
    CHAT_SYSTEM_INSTRUCTION,
    TEXT_TRANSLATION_PROMPT,
    VISION_TRANSLATION_PROMPT,
    WEATHER_PROMPT,
    render_template,
)
from trip_planner.utils.error_handling import (
    GatewayError,
    fallback_on_error,
    with_retry,
)
from trip_planner.utils.helpers import strip_data_url, to_data_url
from trip_planner.utils.logging import GatewayLogger

CHAT_FALLBACK = "Sorry, something went wrong! Please try again. ✨"
TRANSLATION_EMPTY = "Could not translate."
TRANSLATION_FAILED = "Error during translation."
AUDIO_EMPTY = "Could not understand audio."
AUDIO_FAILED = "Error during audio processing."


class WeatherReport(BaseModel):
    """Current weather for a destination."""

    high: float
    low: float
    condition: str
    city: str


def _attempts(gateway: "GeminiGateway") -> int:
    return gateway.models.max_retries


def _part_from_dict(part: dict[str, Any]) -> types.Part:
    inline = part.get("inline_data")
    if inline:
        return types.Part.from_bytes(
            data=base64.b64decode(inline["data"]), mime_type=inline["mime_type"]
        )
    return types.Part.from_text(text=part.get("text", ""))


def _first_image(response: Any) -> str | None:
    """Return the first inline image of a response as a PNG data URL."""
    candidates = response.candidates or []
    if not candidates or candidates[0].content is None:
        return None
    for part in candidates[0].content.parts or []:
        if part.inline_data and part.inline_data.data:
            data = part.inline_data.data
            if isinstance(data, bytes):
                data = base64.b64encode(data).decode("ascii")
            return to_data_url(data, "image/png")
    return None


class GeminiGateway:
    """Async wrapper around ``google.genai`` for banners, weather, chat,
    photo edits and translation."""

    def __init__(
        self,
        models: GatewayModelConfig | None = None,
        api_key: str | None = None,
        client: Any | None = None,
    ):
        self.models = models or GatewayModelConfig()
        self._api_key = api_key
        self._client = client

    @property
    def client(self) -> Any:
        # Created on first use so a missing API key degrades to fallbacks
        if self._client is None:
            if self._api_key:
                self._client = genai.Client(api_key=self._api_key)
            else:
                self._client = genai.Client()
        return self._client

    async def _generate(
        self,
        operation: str,
        model: str,
        contents: Any,
        config: types.GenerateContentConfig | None = None,
    ) -> Any:
        log = GatewayLogger(operation, model)
        log.request(_describe(contents))
        try:
            response = await self.client.aio.models.generate_content(
                model=model,
                contents=contents,
                config=config,
            )
        except Exception as e:
            log.failure(e)
            raise GatewayError("request failed", operation, original_error=e) from e
        log.response(getattr(response, "text", None))
        return response

    # --- Images ---

    @fallback_on_error(None)
    @with_retry(max_attempts=_attempts, min_wait_seconds=0.5, max_wait_seconds=4)
    async def generate_banner(self, destination: str) -> str | None:
        """Generate a 16:9 landscape banner for a destination as a data URL."""
        response = await self._generate(
            "generate_banner",
            self.models.image_model,
            render_template(BANNER_PROMPT, destination=destination),
            types.GenerateContentConfig(
                image_config=types.ImageConfig(aspect_ratio="16:9"),
            ),
        )
        return _first_image(response)

    @fallback_on_error(None)
    @with_retry(max_attempts=_attempts, min_wait_seconds=0.5, max_wait_seconds=4)
    async def edit_photo(self, image: str, instruction: str) -> str | None:
        """Apply an edit instruction to a JPEG photo (base64 or data URL)."""
        contents = [
            types.Part.from_bytes(
                data=base64.b64decode(strip_data_url(image)), mime_type="image/jpeg"
            ),
            types.Part.from_text(text=instruction),
        ]
        response = await self._generate(
            "edit_photo", self.models.image_model, contents
        )
        return _first_image(response)

    # --- Weather ---

    @fallback_on_error(None)
    @with_retry(max_attempts=_attempts, min_wait_seconds=0.5, max_wait_seconds=4)
    async def fetch_weather(self, location: str) -> WeatherReport | None:
        """Look up today's weather for a location using Google Search grounding."""
        response = await self._generate(
            "fetch_weather",
            self.models.weather_model,
            render_template(WEATHER_PROMPT, location=location),
            types.GenerateContentConfig(
                tools=[types.Tool(google_search=types.GoogleSearch())],
                response_mime_type="application/json",
                response_schema=WeatherReport,
            ),
        )
        if not response.text:
            return None
        return WeatherReport.model_validate_json(response.text)

    # --- Chat ---

    @fallback_on_error(CHAT_FALLBACK)
    @with_retry(max_attempts=_attempts, min_wait_seconds=0.5, max_wait_seconds=4)
    async def chat(
        self,
        message: str,
        history: list[dict[str, Any]] | None = None,
        model: str | None = None,
        image: InlineData | None = None,
    ) -> str:
        """
        Send one user turn to the travel assistant.

        Args:
            message: User's message text (may be empty for image-only turns)
            history: Prior turns as [{"role": "user/model", "parts": [...]}]
            model: Gemini model id, defaults to the configured chat model
            image: Optional image attached to this turn

        Returns:
            Assistant reply text (may be empty)
        """
        contents = [
            types.Content(
                role=turn["role"],
                parts=[_part_from_dict(part) for part in turn["parts"]],
            )
            for turn in history or []
        ]

        parts = []
        if message:
            parts.append(types.Part.from_text(text=message))
        if image is not None:
            parts.append(
                types.Part.from_bytes(
                    data=base64.b64decode(image.data), mime_type=image.mime_type
                )
            )
        if not parts:
            parts.append(types.Part.from_text(text=message))
        contents.append(types.Content(role="user", parts=parts))

        response = await self._generate(
            "chat",
            model or self.models.chat_model,
            contents,
            types.GenerateContentConfig(system_instruction=CHAT_SYSTEM_INSTRUCTION),
        )
        return response.text or ""

    # --- Translation ---

    @fallback_on_error(TRANSLATION_FAILED)
    @with_retry(max_attempts=_attempts, min_wait_seconds=0.5, max_wait_seconds=4)
    async def translate_text(self, text: str, source: str, target: str) -> str:
        response = await self._generate(
            "translate_text",
            self.models.translate_model,
            render_template(
                TEXT_TRANSLATION_PROMPT, text=text, source=source, target=target
            ),
        )
        return response.text or TRANSLATION_EMPTY

    @fallback_on_error(TRANSLATION_FAILED)
    @with_retry(max_attempts=_attempts, min_wait_seconds=0.5, max_wait_seconds=4)
    async def translate_vision(self, image: str, source: str, target: str) -> str:
        """Translate the text visible in a JPEG image (base64 or data URL)."""
        contents = [
            types.Part.from_bytes(
                data=base64.b64decode(strip_data_url(image)), mime_type="image/jpeg"
            ),
            types.Part.from_text(
                text=render_template(
                    VISION_TRANSLATION_PROMPT, source=source, target=target
                )
            ),
        ]
        response = await self._generate(
            "translate_vision", self.models.translate_model, contents
        )
        return response.text or TRANSLATION_EMPTY

    @fallback_on_error(AUDIO_FAILED)
    @with_retry(max_attempts=_attempts, min_wait_seconds=0.5, max_wait_seconds=4)
    async def translate_audio(self, audio: str, source: str, target: str) -> str:
        """Transcribe and translate a WebM audio clip (base64 or data URL)."""
        contents = [
            types.Part.from_bytes(
                data=base64.b64decode(strip_data_url(audio)), mime_type="audio/webm"
            ),
            types.Part.from_text(
                text=render_template(
                    AUDIO_TRANSLATION_PROMPT, source=source, target=target
                )
            ),
        ]
        response = await self._generate(
            "translate_audio", self.models.audio_model, contents
        )
        return response.text or AUDIO_EMPTY


def _describe(contents: Any) -> Any:
    """Loggable summary of request contents without binary payloads."""
    if isinstance(contents, str):
        return contents
    if isinstance(contents, list):
        return [_describe(item) for item in contents]
    if isinstance(contents, types.Content):
        return {"role": contents.role, "parts": _describe(contents.parts or [])}
    if isinstance(contents, types.Part):
        if contents.inline_data is not None:
            size = len(contents.inline_data.data or b"")
            return {"mime_type": contents.inline_data.mime_type, "bytes": size}
        return contents.text
    return str(contents)
