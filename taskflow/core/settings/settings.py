"""Settings and logging configuration for TaskFlow.

Settings are read from environment variables (prefix ``TASKFLOW_``), an
optional ``.env`` file, and optionally a YAML or JSON configuration file.
"""

import json
import logging
from functools import lru_cache
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class TaskflowSettings(BaseSettings):
    """Application settings with environment variable support."""

    environment: str = Field(default="development", validation_alias=AliasChoices("TASKFLOW_ENV", "environment"))
    log_level: str = Field(default="INFO", validation_alias=AliasChoices("TASKFLOW_LOG_LEVEL", "log_level"))

    # Generation service
    google_api_key: str = Field(
        default="",
        validation_alias=AliasChoices("TASKFLOW_GOOGLE_API_KEY", "GOOGLE_API_KEY", "google_api_key"),
    )
    text_model: str = Field(default="gemini-2.0-flash", validation_alias=AliasChoices("TASKFLOW_TEXT_MODEL", "text_model"))
    image_model: str = Field(
        default="gemini-2.0-flash-preview-image-generation",
        validation_alias=AliasChoices("TASKFLOW_IMAGE_MODEL", "image_model"),
    )
    speech_model: str = Field(
        default="gemini-2.5-flash-preview-tts",
        validation_alias=AliasChoices("TASKFLOW_SPEECH_MODEL", "speech_model"),
    )
    speech_voice: str = Field(default="Algenib", validation_alias=AliasChoices("TASKFLOW_SPEECH_VOICE", "speech_voice"))
    temperature: float = Field(default=0.7, validation_alias=AliasChoices("TASKFLOW_TEMPERATURE", "temperature"))
    max_tokens: int = Field(default=2048, validation_alias=AliasChoices("TASKFLOW_MAX_TOKENS", "max_tokens"))
    request_timeout: float = Field(default=60.0, validation_alias=AliasChoices("TASKFLOW_REQUEST_TIMEOUT", "request_timeout"))

    # Persistence
    storage_dir: Path = Field(
        default=Path.home() / ".taskflow",
        validation_alias=AliasChoices("TASKFLOW_STORAGE_DIR", "storage_dir"),
    )
    notification_limit: int = Field(default=100, validation_alias=AliasChoices("TASKFLOW_NOTIFICATION_LIMIT", "notification_limit"))
    seed_new_users: bool = Field(default=True, validation_alias=AliasChoices("TASKFLOW_SEED_NEW_USERS", "seed_new_users"))

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Log level must be one of: {valid_levels}")
        return v.upper()

    @field_validator("temperature")
    @classmethod
    def validate_temperature(cls, v: float) -> float:
        """Validate temperature range."""
        if not (0.0 <= v <= 2.0):
            raise ValueError("Temperature must be between 0.0 and 2.0")
        return v

    @field_validator("notification_limit", "max_tokens")
    @classmethod
    def validate_positive_integers(cls, v: int) -> int:
        """Validate positive integer fields."""
        if v <= 0:
            raise ValueError("Value must be positive")
        return v


def _read_config_file(config_file: Path) -> dict[str, Any]:
    with open(config_file, "r", encoding="utf-8") as f:
        if config_file.suffix.lower() in [".yml", ".yaml"]:
            data = yaml.safe_load(f)
        else:
            data = json.load(f)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Configuration file {config_file} must contain a mapping")
    # A file may nest everything under a 'taskflow' section
    section = data.get("taskflow", data)
    if not isinstance(section, dict):
        raise ValueError(f"'taskflow' section in {config_file} must be a mapping")
    return section


def load_settings(config_file: Optional[Path] = None, **overrides: Any) -> TaskflowSettings:
    """Build settings from the environment, an optional file and overrides.

    File values take precedence over the environment; explicit keyword
    overrides take precedence over both.

    Args:
        config_file: Optional YAML or JSON configuration file
        **overrides: Explicit setting values

    Returns:
        TaskflowSettings instance
    """
    values: dict[str, Any] = {}
    if config_file is not None:
        config_file = Path(config_file)
        if config_file.exists():
            values.update(_read_config_file(config_file))
            logger.info(f"Loaded configuration from {config_file}")
        else:
            logger.warning(f"Configuration file not found: {config_file}")
    values.update(overrides)
    return TaskflowSettings(**values)


@lru_cache()
def get_settings() -> TaskflowSettings:
    """Return the process-wide settings built from the environment."""
    return TaskflowSettings()


def configure_logging(settings: Optional[TaskflowSettings] = None) -> None:
    """Configure root logging from settings.

    Args:
        settings: Settings to read the level from (defaults to get_settings())
    """
    settings = settings or get_settings()
    logging.basicConfig(level=getattr(logging, settings.log_level), format=LOG_FORMAT)
    logger.debug(f"Logging configured at {settings.log_level} ({settings.environment})")
