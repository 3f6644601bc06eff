"""In-process key-value storage, used for tests and throwaway sessions."""

import logging
from typing import Any, Optional

from pydantic import PrivateAttr

from taskflow.providers.core.decorators import provider
from taskflow.providers.storage.base import KeyValueStorageProvider, StorageProviderSettings

logger = logging.getLogger(__name__)


class MemoryStorageSettings(StorageProviderSettings):
    """Memory storage has no settings beyond the common provider ones."""


@provider(provider_type="storage", name="memory", settings_class=MemoryStorageSettings)
class MemoryStorageProvider(KeyValueStorageProvider[MemoryStorageSettings]):
    """Dictionary-backed key-value store."""

    _data: dict[str, str] = PrivateAttr(default_factory=dict)

    def __init__(
        self,
        name: str = "memory",
        provider_type: str = "storage",
        settings: Optional[MemoryStorageSettings] = None,
        **kwargs: Any,
    ):
        super().__init__(name=name, provider_type=provider_type, settings=settings, **kwargs)

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> bool:
        self._data[key] = value
        return True

    def delete(self, key: str) -> bool:
        return self._data.pop(key, None) is not None

    def keys(self) -> list[str]:
        return sorted(self._data)
