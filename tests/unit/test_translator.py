"""Tests for the translator tab."""

import pytest

from trip_planner.tools.translator import AUTO_DETECT, TranslationMode, Translator
from trip_planner.utils.error_handling import ValidationError


@pytest.fixture
def translator(mock_gateway):
    translator = Translator(mock_gateway)
    translator.set_languages("Japanese", "English")
    return translator


def test_defaults(mock_gateway):
    translator = Translator(mock_gateway)
    assert translator.source == AUTO_DETECT
    assert translator.target == ""
    assert translator.mode == TranslationMode.TEXT


def test_target_cannot_be_auto_detect(mock_gateway):
    translator = Translator(mock_gateway)
    with pytest.raises(ValidationError):
        translator.set_languages("English", AUTO_DETECT)
    with pytest.raises(ValidationError):
        translator.set_languages("Elvish", "English")


async def test_translate_text(translator, mock_gateway):
    assert await translator.translate_text("こんにちは") == "Hello"
    assert translator.translation == "Hello"
    assert not translator.is_processing
    mock_gateway.translate_text.assert_awaited_once_with("こんにちは", "Japanese", "English")


async def test_blank_text_is_skipped(translator, mock_gateway):
    assert await translator.translate_text("   ") is None
    mock_gateway.translate_text.assert_not_awaited()


async def test_no_target_is_skipped(mock_gateway):
    translator = Translator(mock_gateway)
    assert await translator.translate_text("hola") is None
    assert await translator.translate_image("aGk=") is None
    assert await translator.translate_audio("aGk=") is None


async def test_translate_image_and_audio(translator, mock_gateway):
    translator.set_mode("camera")
    assert await translator.translate_image("aGk=") == "Exit"
    mock_gateway.translate_vision.assert_awaited_once_with("aGk=", "Japanese", "English")

    translator.set_mode(TranslationMode.VOICE)
    assert translator.translation == ""
    assert await translator.translate_audio("d2VibQ==") == "Thank you"


def test_unknown_mode(translator):
    with pytest.raises(ValueError):
        translator.set_mode("telepathy")
