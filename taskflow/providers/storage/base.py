"""Key-value storage port and the provider base class implementing it.

The persistence adapter only needs two synchronous operations: read the
text stored under a key, and write text under a key reporting success.
"""

import logging
from typing import Generic, Optional, Protocol, TypeVar, runtime_checkable

from taskflow.providers.core.base import Provider, ProviderSettings

logger = logging.getLogger(__name__)


@runtime_checkable
class KeyValueStore(Protocol):
    """Minimal durable key-value store."""

    def get(self, key: str) -> Optional[str]:
        """Return the text stored under ``key``, or None if absent."""
        ...

    def set(self, key: str, value: str) -> bool:
        """Store ``value`` under ``key``; return False if the write failed."""
        ...


class StorageProviderSettings(ProviderSettings):
    """Base settings for key-value storage providers."""


SettingsT = TypeVar("SettingsT", bound=StorageProviderSettings)


class KeyValueStorageProvider(Provider[SettingsT], Generic[SettingsT]):
    """Base class for providers that satisfy the KeyValueStore port."""

    def get(self, key: str) -> Optional[str]:
        raise NotImplementedError("Subclasses must implement get()")

    def set(self, key: str, value: str) -> bool:
        raise NotImplementedError("Subclasses must implement set()")

    def delete(self, key: str) -> bool:
        """Remove ``key``; return True if something was removed."""
        raise NotImplementedError("Subclasses must implement delete()")

    async def _initialize(self) -> None:
        pass
