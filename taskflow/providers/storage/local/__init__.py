from .provider import LocalStorageProvider, LocalStorageSettings

__all__ = ["LocalStorageProvider", "LocalStorageSettings"]
