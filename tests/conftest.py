"""
Pytest configuration for the Trip Planner tests.
"""

import os
from unittest.mock import AsyncMock, MagicMock

import pytest

os.environ.setdefault("GEMINI_API_KEY", "test-key")

pytest.importorskip("pytest_asyncio")

from trip_planner.config import (  # noqa: E402
    APIConfig,
    GatewayModelConfig,
    SystemConfig,
    TripPlannerConfig,
)
from trip_planner.store.projects import TripProjectStore  # noqa: E402
from trip_planner.utils import LogLevel, setup_logging  # noqa: E402


@pytest.fixture(scope="session", autouse=True)
def setup_test_logging():
    """Set up logging for tests."""
    setup_logging(LogLevel.DEBUG)


@pytest.fixture
def test_config():
    """Test application configuration."""
    return TripPlannerConfig(
        api=APIConfig(
            gemini_api_key="test-key",
            aws_region="ap-northeast-1",
            dynamodb_table_name="trip-planner-test",
        ),
        system=SystemConfig(log_level=LogLevel.DEBUG, environment="test"),
        models=GatewayModelConfig(max_retries=1),
    )


@pytest.fixture
def mock_gateway():
    """Gateway double whose coroutines return canned values."""
    gateway = MagicMock()
    gateway.chat = AsyncMock(return_value="Try the kaiseki dinner in Gion!")
    gateway.generate_banner = AsyncMock(return_value="data:image/png;base64,AAAA")
    gateway.fetch_weather = AsyncMock(return_value=None)
    gateway.translate_text = AsyncMock(return_value="Hello")
    gateway.translate_vision = AsyncMock(return_value="Exit")
    gateway.translate_audio = AsyncMock(return_value="Thank you")
    return gateway


@pytest.fixture
def store():
    return TripProjectStore()


@pytest.fixture
def kyoto(store):
    """A three-day Kyoto project, selected in the store."""
    project = store.create_or_update(
        {"title": "Kyoto", "startDate": "2025-04-01", "endDate": "2025-04-03"}
    )
    store.select(project.id)
    return project
