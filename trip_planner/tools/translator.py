"""
Translator tab: text, camera and voice translation through the gateway.
"""

from enum import StrEnum
from typing import Any

from trip_planner.utils.error_handling import ValidationError

AUTO_DETECT = "Auto-detect"

LANGUAGES: list[str] = [
    AUTO_DETECT,
    "Japanese",
    "Traditional Chinese",
    "Simplified Chinese",
    "English",
    "Korean",
    "Thai",
    "Vietnamese",
    "French",
    "German",
    "Spanish",
    "Italian",
    "Portuguese",
    "Russian",
]


class TranslationMode(StrEnum):
    TEXT = "text"
    CAMERA = "camera"
    VOICE = "voice"


class Translator:
    """Holds the language pair and last result; delegates work to the gateway."""

    def __init__(self, gateway: Any, source: str = AUTO_DETECT, target: str = ""):
        self.gateway = gateway
        self.mode = TranslationMode.TEXT
        self.source = source
        self.target = target
        self.translation = ""
        self.is_processing = False

    def set_languages(self, source: str, target: str) -> None:
        if source not in LANGUAGES:
            raise ValidationError(f"Unsupported source language: {source}")
        if target not in LANGUAGES or target == AUTO_DETECT:
            raise ValidationError(f"Unsupported target language: {target}")
        self.source = source
        self.target = target

    def set_mode(self, mode: TranslationMode | str) -> None:
        self.mode = TranslationMode(mode)
        self.translation = ""

    async def translate_text(self, text: str) -> str | None:
        """Translate typed text; None when there is nothing to translate."""
        if not text.strip() or not self.target:
            return None
        return await self._run(self.gateway.translate_text(text, self.source, self.target))

    async def translate_image(self, image: str) -> str | None:
        if not self.target:
            return None
        return await self._run(
            self.gateway.translate_vision(image, self.source, self.target)
        )

    async def translate_audio(self, audio: str) -> str | None:
        if not self.target:
            return None
        return await self._run(
            self.gateway.translate_audio(audio, self.source, self.target)
        )

    async def _run(self, call) -> str:
        self.is_processing = True
        try:
            self.translation = await call
        finally:
            self.is_processing = False
        return self.translation
