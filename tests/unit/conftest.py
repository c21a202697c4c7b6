"""
Test configuration for unit tests.
"""

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock, patch

import pytest


def make_response(text=None, image_bytes=None):
    """Build an object shaped like a google-genai GenerateContentResponse."""
    parts = []
    if image_bytes is not None:
        parts.append(
            SimpleNamespace(
                text=None,
                inline_data=SimpleNamespace(data=image_bytes, mime_type="image/png"),
            )
        )
    content = SimpleNamespace(parts=parts)
    return SimpleNamespace(
        text=text, candidates=[SimpleNamespace(content=content)]
    )


@pytest.fixture
def mock_genai():
    """Patch the genai client used by the gateway."""
    with patch("trip_planner.gateway.gemini.genai") as mock:
        mock_client = MagicMock()
        mock.Client.return_value = mock_client
        mock_client.aio.models.generate_content = AsyncMock(
            return_value=make_response(text="Test response")
        )
        yield mock_client


@pytest.fixture
def response_factory():
    return make_response
