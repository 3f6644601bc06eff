"""Provider base classes, the @provider decorator and the provider registry."""

from .base import Provider, ProviderSettings
from .decorators import provider
from .registry import ProviderRegistry, provider_registry

__all__ = ["Provider", "ProviderRegistry", "ProviderSettings", "provider", "provider_registry"]
