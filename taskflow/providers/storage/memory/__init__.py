from .provider import MemoryStorageProvider, MemoryStorageSettings

__all__ = ["MemoryStorageProvider", "MemoryStorageSettings"]
