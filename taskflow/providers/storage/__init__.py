"""Key-value storage providers backing the persistence adapter."""

from .base import KeyValueStorageProvider, KeyValueStore, StorageProviderSettings
from .local import LocalStorageProvider, LocalStorageSettings
from .memory import MemoryStorageProvider, MemoryStorageSettings

__all__ = [
    "KeyValueStorageProvider",
    "KeyValueStore",
    "LocalStorageProvider",
    "LocalStorageSettings",
    "MemoryStorageProvider",
    "MemoryStorageSettings",
    "StorageProviderSettings",
]
