"""
Configuration for the Trip Planner workspace.

Settings come from environment variables, optionally seeded from a ``.env``
file. Three groups exist:

- ``APIConfig``: the Gemini API key and the DynamoDB table used by the
  Lambda handler
- ``SystemConfig``: log level, log file and deployment environment
- ``GatewayModelConfig``: which Gemini model serves each gateway call

Missing settings are reported, never fatal: without a Gemini key every AI
feature still answers, with its fallback value.
"""

import os
from dataclasses import dataclass, field
from enum import Enum

from dotenv import load_dotenv
from loguru import logger
from pydantic import BaseModel, Field, field_validator

load_dotenv()


class LogLevel(str, Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class GatewayModelConfig(BaseModel):
    """Gemini model ids per gateway call, plus the retry budget."""

    chat_model: str = "gemini-3-flash-preview"
    pro_chat_model: str = "gemini-3-pro-preview"
    image_model: str = "gemini-2.5-flash-image"
    weather_model: str = "gemini-3-flash-preview"
    translate_model: str = "gemini-3-flash-preview"
    audio_model: str = "gemini-2.5-flash-native-audio-preview-09-2025"
    max_retries: int = Field(
        default=2, description="Attempts per gateway call before falling back"
    )

    @field_validator("max_retries")
    @classmethod
    def at_least_one_attempt(cls, value: int) -> int:
        if value < 1:
            raise ValueError(f"max_retries must be at least 1, got {value}")
        return value

    @classmethod
    def from_env(cls) -> "GatewayModelConfig":
        # Each model id can be overridden by its upper-cased field name
        overrides = {
            name: os.environ[name.upper()]
            for name in cls.model_fields
            if name.endswith("_model") and os.environ.get(name.upper())
        }
        retries = os.environ.get("GATEWAY_MAX_RETRIES")
        if retries:
            overrides["max_retries"] = int(retries)
        return cls(**overrides)


class APIConfig(BaseModel):
    """Credentials and endpoints of the services the workspace talks to."""

    gemini_api_key: str = Field(default="", description="Gemini API key")
    aws_region: str = "ap-northeast-1"
    dynamodb_table_name: str = "trip-planner"
    dynamodb_endpoint: str | None = Field(
        default=None, description="Set for DynamoDB Local, leave empty for AWS"
    )

    class ValidationError(Exception):
        """Raised when required settings are missing."""

        def __init__(self, missing_keys: list[str]):
            self.missing_keys = missing_keys
            super().__init__(f"Missing required settings: {', '.join(missing_keys)}")

    @classmethod
    def from_env(cls) -> "APIConfig":
        return cls(
            gemini_api_key=os.getenv("GEMINI_API_KEY", ""),
            aws_region=os.getenv("AWS_REGION", "ap-northeast-1"),
            dynamodb_table_name=os.getenv("DYNAMODB_TABLE_NAME", "trip-planner"),
            dynamodb_endpoint=os.getenv("DYNAMODB_ENDPOINT") or None,
        )

    def missing_keys(self) -> list[str]:
        missing = []
        if not self.gemini_api_key:
            missing.append("GEMINI_API_KEY")
        if not self.dynamodb_table_name:
            missing.append("DYNAMODB_TABLE_NAME")
        return missing

    def validate(self, raise_error: bool = False) -> bool:
        """
        Check that every required setting is present.

        Raises:
            APIConfig.ValidationError: If something is missing and
                ``raise_error`` is set
        """
        missing = self.missing_keys()
        if not missing:
            return True
        logger.error(f"Missing required settings: {', '.join(missing)}")
        if raise_error:
            raise self.ValidationError(missing)
        return False


class SystemConfig(BaseModel):
    log_level: LogLevel = LogLevel.INFO
    environment: str = Field(
        default="development", description="development, staging or production"
    )
    log_file: str | None = None

    @classmethod
    def from_env(cls) -> "SystemConfig":
        return cls(
            log_level=LogLevel(os.getenv("LOG_LEVEL", "INFO").upper()),
            environment=os.getenv("ENVIRONMENT", "development"),
            log_file=os.getenv("LOG_FILE") or None,
        )


@dataclass
class TripPlannerConfig:
    """All settings of the workspace, read from the environment by default."""

    api: APIConfig = field(default_factory=APIConfig.from_env)
    system: SystemConfig = field(default_factory=SystemConfig.from_env)
    models: GatewayModelConfig = field(default_factory=GatewayModelConfig.from_env)

    class ConfigurationError(Exception):
        pass

    def validate(self, raise_error: bool = False) -> bool:
        try:
            return self.api.validate(raise_error=True)
        except APIConfig.ValidationError as e:
            if raise_error:
                raise self.ConfigurationError(f"Invalid configuration: {e!s}") from e
            return False

    def reload(self) -> None:
        """Re-read every group from the current environment."""
        self.api = APIConfig.from_env()
        self.system = SystemConfig.from_env()
        self.models = GatewayModelConfig.from_env()


# Shared instance; reloaded in place so importers keep a valid reference
config = TripPlannerConfig()


def initialize_config(
    custom_config_path: str | None = None,
    validate: bool = True,
    raise_on_error: bool = False,
) -> TripPlannerConfig:
    """
    Load an optional extra ``.env`` file and validate the shared config.

    Args:
        custom_config_path: ``.env`` file whose values override the environment
        validate: Whether to check required settings
        raise_on_error: Raise instead of logging when validation fails

    Returns:
        The shared ``config`` instance

    Raises:
        FileNotFoundError: If ``custom_config_path`` does not exist
        TripPlannerConfig.ConfigurationError: If validation fails and
            ``raise_on_error`` is set
    """
    if custom_config_path:
        if not os.path.exists(custom_config_path):
            raise FileNotFoundError(
                f"Custom configuration file not found: {custom_config_path}"
            )
        logger.info(f"Loading configuration overrides from {custom_config_path}")
        load_dotenv(custom_config_path, override=True)
        config.reload()

    if validate and not config.validate(raise_error=raise_on_error):
        missing = ", ".join(config.api.missing_keys())
        logger.warning(
            f"Configuration incomplete ({missing}). Without GEMINI_API_KEY the "
            "AI features return their fallback results."
        )

    return config
