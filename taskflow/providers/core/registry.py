"""Registry of provider factories keyed by (provider_type, name)."""

import logging
from collections.abc import Callable
from typing import Any, Optional

from .base import Provider

logger = logging.getLogger(__name__)

ProviderFactory = Callable[[Optional[dict[str, Any]]], Provider]


class ProviderRegistry:
    """Provider factories registered by the @provider decorator."""

    def __init__(self) -> None:
        self._factories: dict[tuple[str, str], ProviderFactory] = {}
        self._settings_classes: dict[tuple[str, str], type] = {}

    def register_factory(
        self,
        provider_type: str,
        name: str,
        factory: ProviderFactory,
        settings_class: Optional[type] = None,
    ) -> None:
        """Register a factory for creating providers.

        Args:
            provider_type: Type of provider (e.g., llm, storage)
            name: Unique name for this provider
            factory: Factory function that creates the provider
            settings_class: Pydantic settings class for the provider
        """
        key = (provider_type, name)
        self._factories[key] = factory
        if settings_class is not None:
            self._settings_classes[key] = settings_class
        logger.debug(f"Registered provider factory: {name} (type: {provider_type})")

    def contains(self, provider_type: str, name: str) -> bool:
        return (provider_type, name) in self._factories

    def get_settings_class(self, provider_type: str, name: str) -> Optional[type]:
        return self._settings_classes.get((provider_type, name))

    def list_providers(self, provider_type: Optional[str] = None) -> list[str]:
        """Names of registered providers, optionally filtered by type."""
        return sorted(name for (ptype, name) in self._factories if provider_type in (None, ptype))

    def create(self, provider_type: str, name: str, settings: Optional[dict[str, Any]] = None) -> Provider:
        """Create a provider from its registered factory.

        Args:
            provider_type: Type of provider
            name: Registered provider name
            settings: Optional settings dict validated by the provider's settings class

        Raises:
            KeyError: If no factory is registered under this type and name
        """
        key = (provider_type, name)
        if key not in self._factories:
            raise KeyError(f"Provider '{name}' of type '{provider_type}' not found")
        provider = self._factories[key](settings)
        logger.info(f"Created provider '{name}' (type: {provider_type})")
        return provider


provider_registry = ProviderRegistry()
