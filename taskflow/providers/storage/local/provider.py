"""Local directory key-value storage.

Each key is stored as one UTF-8 file named after the (URL-quoted) key.
Writes go to a temporary file first and are then moved into place.
"""

import logging
import os
from pathlib import Path
from typing import Any, Optional
from urllib.parse import quote

from pydantic import Field, field_validator

from taskflow.providers.core.decorators import provider
from taskflow.providers.storage.base import KeyValueStorageProvider, StorageProviderSettings

logger = logging.getLogger(__name__)


class LocalStorageSettings(StorageProviderSettings):
    """Local directory storage settings."""

    base_path: str = Field(default="./storage", description="Directory holding one file per key")
    create_dirs: bool = Field(default=True, description="Whether to create the directory if it doesn't exist")
    suffix: str = Field(default=".json", description="File name suffix appended to each key")

    @field_validator("base_path")
    @classmethod
    def validate_base_path(cls, v: str) -> str:
        """Normalize to an absolute path."""
        return os.path.abspath(os.path.expanduser(v))


@provider(provider_type="storage", name="local", settings_class=LocalStorageSettings)
class LocalStorageProvider(KeyValueStorageProvider[LocalStorageSettings]):
    """Filesystem implementation of the KeyValueStore port."""

    def __init__(
        self,
        name: str = "local",
        provider_type: str = "storage",
        settings: Optional[LocalStorageSettings] = None,
        **kwargs: Any,
    ):
        super().__init__(name=name, provider_type=provider_type, settings=settings, **kwargs)

    @property
    def base_path(self) -> Path:
        return Path(self.settings.base_path)

    async def _initialize(self) -> None:
        if self.settings.create_dirs:
            self.base_path.mkdir(parents=True, exist_ok=True)
            logger.debug(f"Ensured storage directory: {self.base_path}")
        if not os.access(self.base_path, os.W_OK):
            raise self._provider_error(
                f"Base directory {self.base_path} is not writable", operation="initialize"
            )

    def _path_for(self, key: str) -> Path:
        # Quoted keys always map to a single file directly under base_path
        return self.base_path / f"{quote(key, safe='-_.@')}{self.settings.suffix}"

    def get(self, key: str) -> Optional[str]:
        path = self._path_for(key)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except OSError as e:
            logger.error(f"Failed to read key '{key}' from {path}: {e}")
            return None

    def set(self, key: str, value: str) -> bool:
        path = self._path_for(key)
        tmp_path = path.with_name(path.name + ".tmp")
        try:
            if self.settings.create_dirs:
                self.base_path.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(value, encoding="utf-8")
            os.replace(tmp_path, path)
        except OSError as e:
            logger.error(f"Failed to write key '{key}' to {path}: {e}")
            return False
        logger.debug(f"Wrote {len(value)} characters to {path}")
        return True

    def delete(self, key: str) -> bool:
        try:
            self._path_for(key).unlink()
        except FileNotFoundError:
            return False
        return True
