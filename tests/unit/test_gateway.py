"""Tests for the Gemini gateway."""

import base64
import json

import pytest

from trip_planner.config import GatewayModelConfig
from trip_planner.data.models import InlineData
from trip_planner.gateway.gemini import (
    AUDIO_EMPTY,
    AUDIO_FAILED,
    CHAT_FALLBACK,
    TRANSLATION_EMPTY,
    TRANSLATION_FAILED,
    GeminiGateway,
    WeatherReport,
)

JPEG_B64 = base64.b64encode(b"\xff\xd8\xff-fake-jpeg").decode()


@pytest.fixture
def gateway(test_config, mock_genai):
    return GeminiGateway(models=test_config.models, api_key="test-key")


def _call_kwargs(mock_genai):
    return mock_genai.aio.models.generate_content.await_args.kwargs


def test_client_is_lazy(test_config, mock_genai):
    from trip_planner.gateway import gemini

    gateway = GeminiGateway(models=test_config.models, api_key="abc")
    gemini.genai.Client.assert_not_called()
    assert gateway.client is mock_genai
    gemini.genai.Client.assert_called_once_with(api_key="abc")


async def test_generate_banner_returns_data_url(gateway, mock_genai, response_factory):
    mock_genai.aio.models.generate_content.return_value = response_factory(
        image_bytes=b"png-bytes"
    )
    url = await gateway.generate_banner("Kyoto")

    assert url == "data:image/png;base64," + base64.b64encode(b"png-bytes").decode()
    kwargs = _call_kwargs(mock_genai)
    assert kwargs["model"] == gateway.models.image_model
    assert "Kyoto" in kwargs["contents"]
    assert kwargs["config"].image_config.aspect_ratio == "16:9"


async def test_generate_banner_without_image(gateway, mock_genai, response_factory):
    mock_genai.aio.models.generate_content.return_value = response_factory(
        text="I cannot draw that"
    )
    assert await gateway.generate_banner("Kyoto") is None


async def test_generate_banner_failure_returns_none(gateway, mock_genai):
    mock_genai.aio.models.generate_content.side_effect = RuntimeError("quota")
    assert await gateway.generate_banner("Kyoto") is None


async def test_edit_photo(gateway, mock_genai, response_factory):
    mock_genai.aio.models.generate_content.return_value = response_factory(
        image_bytes=b"edited"
    )
    url = await gateway.edit_photo(
        f"data:image/jpeg;base64,{JPEG_B64}", "Add a retro filter"
    )

    assert url.endswith(base64.b64encode(b"edited").decode())
    contents = _call_kwargs(mock_genai)["contents"]
    assert contents[0].inline_data.mime_type == "image/jpeg"
    assert contents[0].inline_data.data == b"\xff\xd8\xff-fake-jpeg"
    assert contents[1].text == "Add a retro filter"


async def test_fetch_weather(gateway, mock_genai, response_factory):
    payload = {"high": 24, "low": 15.5, "condition": "Sunny", "city": "Kyoto"}
    mock_genai.aio.models.generate_content.return_value = response_factory(
        text=json.dumps(payload)
    )
    report = await gateway.fetch_weather("Kyoto")

    assert report == WeatherReport(high=24, low=15.5, condition="Sunny", city="Kyoto")
    config = _call_kwargs(mock_genai)["config"]
    assert config.response_mime_type == "application/json"
    assert config.tools[0].google_search is not None


async def test_fetch_weather_bad_json(gateway, mock_genai, response_factory):
    mock_genai.aio.models.generate_content.return_value = response_factory(
        text="It is sunny"
    )
    assert await gateway.fetch_weather("Kyoto") is None


async def test_fetch_weather_empty(gateway, mock_genai, response_factory):
    mock_genai.aio.models.generate_content.return_value = response_factory(text=None)
    assert await gateway.fetch_weather("Kyoto") is None


async def test_chat_builds_history(gateway, mock_genai, response_factory):
    mock_genai.aio.models.generate_content.return_value = response_factory(
        text="Visit Arashiyama early."
    )
    history = [
        {"role": "user", "parts": [{"text": "Hi"}]},
        {"role": "model", "parts": [{"text": "Hello!"}]},
    ]
    reply = await gateway.chat("Where for bamboo?", history=history)

    assert reply == "Visit Arashiyama early."
    kwargs = _call_kwargs(mock_genai)
    assert kwargs["model"] == gateway.models.chat_model
    contents = kwargs["contents"]
    assert [c.role for c in contents] == ["user", "model", "user"]
    assert contents[-1].parts[0].text == "Where for bamboo?"
    assert "travel" in kwargs["config"].system_instruction.lower()


async def test_chat_with_image_and_model(gateway, mock_genai):
    image = InlineData(mime_type="image/jpeg", data=JPEG_B64)
    await gateway.chat("", image=image, model="gemini-3-pro-preview")

    kwargs = _call_kwargs(mock_genai)
    assert kwargs["model"] == "gemini-3-pro-preview"
    parts = kwargs["contents"][-1].parts
    assert len(parts) == 1
    assert parts[0].inline_data.mime_type == "image/jpeg"


async def test_chat_history_with_image(gateway, mock_genai):
    history = [
        {
            "role": "user",
            "parts": [
                {"text": "What is this?"},
                {"inline_data": {"mime_type": "image/jpeg", "data": JPEG_B64}},
            ],
        }
    ]
    await gateway.chat("And this?", history=history)
    first = _call_kwargs(mock_genai)["contents"][0]
    assert first.parts[1].inline_data.data == b"\xff\xd8\xff-fake-jpeg"


async def test_chat_empty_reply(gateway, mock_genai, response_factory):
    mock_genai.aio.models.generate_content.return_value = response_factory(text=None)
    assert await gateway.chat("Hi") == ""


async def test_chat_failure_returns_fallback(gateway, mock_genai):
    mock_genai.aio.models.generate_content.side_effect = RuntimeError("boom")
    assert await gateway.chat("Hi") == CHAT_FALLBACK


async def test_chat_retries_transient_failure(mock_genai, response_factory):
    gateway = GeminiGateway(
        models=GatewayModelConfig(max_retries=2), api_key="test-key"
    )
    mock_genai.aio.models.generate_content.side_effect = [
        RuntimeError("503"),
        response_factory(text="Recovered"),
    ]
    assert await gateway.chat("Hi") == "Recovered"
    assert mock_genai.aio.models.generate_content.await_count == 2


async def test_translate_text(gateway, mock_genai, response_factory):
    mock_genai.aio.models.generate_content.return_value = response_factory(
        text="Where is the station?"
    )
    result = await gateway.translate_text("駅はどこですか", "Japanese", "English")

    assert result == "Where is the station?"
    prompt = _call_kwargs(mock_genai)["contents"]
    assert "駅はどこですか" in prompt
    assert "English" in prompt


@pytest.mark.parametrize(
    "method, payload",
    [
        ("translate_text", "こんにちは"),
        ("translate_vision", JPEG_B64),
    ],
)
async def test_translation_empty_and_failed(
    gateway, mock_genai, response_factory, method, payload
):
    mock_genai.aio.models.generate_content.return_value = response_factory(text="")
    assert await getattr(gateway, method)(payload, "Japanese", "English") == (
        TRANSLATION_EMPTY
    )

    mock_genai.aio.models.generate_content.side_effect = RuntimeError("down")
    assert await getattr(gateway, method)(payload, "Japanese", "English") == (
        TRANSLATION_FAILED
    )


async def test_translate_vision_sends_jpeg(gateway, mock_genai):
    await gateway.translate_vision(f"data:image/jpeg;base64,{JPEG_B64}", "Auto-detect", "English")
    contents = _call_kwargs(mock_genai)["contents"]
    assert contents[0].inline_data.mime_type == "image/jpeg"
    assert "English" in contents[1].text


async def test_translate_audio(gateway, mock_genai, response_factory):
    audio = base64.b64encode(b"webm").decode()
    mock_genai.aio.models.generate_content.return_value = response_factory(
        text="Thank you"
    )
    assert await gateway.translate_audio(audio, "Japanese", "English") == "Thank you"
    kwargs = _call_kwargs(mock_genai)
    assert kwargs["model"] == gateway.models.audio_model
    assert kwargs["contents"][0].inline_data.mime_type == "audio/webm"

    mock_genai.aio.models.generate_content.return_value = response_factory(text="")
    assert await gateway.translate_audio(audio, "Japanese", "English") == AUDIO_EMPTY

    mock_genai.aio.models.generate_content.side_effect = RuntimeError("down")
    assert await gateway.translate_audio(audio, "Japanese", "English") == AUDIO_FAILED
