from collections.abc import Callable
from typing import Any, Optional

from .base import Provider, ProviderSettings
from .registry import provider_registry


def provider(
    name: str, provider_type: str = "llm", *, settings_class: Optional[type[ProviderSettings]] = None
) -> Callable[[type], type]:
    """
    Register a class as a provider factory.
    Only Provider subclasses can be registered, and a settings_class
    (a ProviderSettings subclass) is required so that factory settings
    can be validated.
    """
    if settings_class is None:
        raise TypeError(f"Provider '{name}' must supply a 'settings_class' argument")

    def decorator(cls: type) -> type:
        if not isinstance(cls, type) or not issubclass(cls, Provider):
            raise TypeError(f"Provider '{name}' must be a Provider subclass, got {cls!r}")

        def factory(runtime_settings: Optional[dict[str, Any]] = None) -> Provider:
            try:
                settings = settings_class(**(runtime_settings or {}))
            except Exception as e:
                raise ValueError(
                    f"Error parsing settings for '{name}' with {settings_class.__name__}: {e}"
                ) from e
            return cls(name=name, provider_type=provider_type, settings=settings)

        provider_registry.register_factory(
            provider_type=provider_type, name=name, factory=factory, settings_class=settings_class
        )
        cls.__provider_name__ = name  # type: ignore[attr-defined]
        cls.__provider_type__ = provider_type  # type: ignore[attr-defined]
        cls.settings_class = settings_class  # type: ignore[attr-defined]
        return cls

    return decorator
