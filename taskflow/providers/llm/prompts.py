"""Prompt registration.

Prompts are plain classes with a ``template`` class attribute (and an
optional ``config`` of type PromptConfigOverride). ``@prompt(name)``
validates and registers them so they can be looked up by name.
"""

import logging
from collections.abc import Callable

from .base import PromptConfigOverride

logger = logging.getLogger(__name__)


class PromptRegistry:
    """Registered prompt classes keyed by name."""

    def __init__(self) -> None:
        self._prompts: dict[str, type] = {}

    def register(self, name: str, prompt_cls: type) -> None:
        if name in self._prompts and self._prompts[name] is not prompt_cls:
            raise ValueError(f"Prompt '{name}' is already registered")
        self._prompts[name] = prompt_cls
        logger.debug(f"Registered prompt: {name}")

    def get(self, name: str) -> type:
        if name not in self._prompts:
            raise KeyError(f"Prompt '{name}' not found")
        return self._prompts[name]

    def list_prompts(self) -> list[str]:
        return sorted(self._prompts)


prompt_registry = PromptRegistry()


def prompt(name: str) -> Callable[[type], type]:
    """Register a class as a prompt.

    Args:
        name: Unique name for the prompt

    Raises:
        ValueError: If the decorated class has no string 'template' attribute
        TypeError: If 'config' is present but not a PromptConfigOverride
    """

    def decorator(cls: type) -> type:
        template = getattr(cls, "template", None)
        if not isinstance(template, str) or not template.strip():
            raise ValueError(f"Prompt '{name}' must have a 'template' attribute")
        config = getattr(cls, "config", None)
        if config is not None and not isinstance(config, PromptConfigOverride):
            raise TypeError(f"Prompt '{name}' config must be a PromptConfigOverride, got {type(config)}")

        prompt_registry.register(name, cls)
        return cls

    return decorator
