"""Generation service contract, prompt registration and LLM providers."""

from .base import (
    GenerationService,
    LLMProvider,
    LLMProviderSettings,
    MediaOutput,
    PromptConfigOverride,
    PromptTemplate,
    format_template,
)
from .google_ai import GoogleAIProvider, GoogleAISettings
from .prompts import prompt, prompt_registry

__all__ = [
    "GenerationService",
    "GoogleAIProvider",
    "GoogleAISettings",
    "LLMProvider",
    "LLMProviderSettings",
    "MediaOutput",
    "PromptConfigOverride",
    "PromptTemplate",
    "format_template",
    "prompt",
    "prompt_registry",
]
