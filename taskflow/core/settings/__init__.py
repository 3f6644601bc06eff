"""Settings loading and logging configuration."""

from .settings import (
    TaskflowSettings,
    configure_logging,
    get_settings,
    load_settings,
)

__all__ = ["TaskflowSettings", "configure_logging", "get_settings", "load_settings"]
