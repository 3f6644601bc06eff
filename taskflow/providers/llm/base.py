"""Generation service contract and the LLM provider base class.

Flows depend only on the ``GenerationService`` protocol: structured text
generation into a pydantic model, image generation and speech synthesis.
``LLMProvider`` adds settings, prompt handling and template formatting for
concrete providers.
"""

import logging
import re
from typing import Any, Generic, Optional, Protocol, TypeVar, runtime_checkable

from pydantic import BaseModel, Field, field_validator

from taskflow.core.models import StrictBaseModel
from taskflow.providers.core.base import Provider, ProviderSettings

logger = logging.getLogger(__name__)

_PLACEHOLDER = re.compile(r"\{\{([^}]+)\}\}")


class PromptTemplate(Protocol):
    template: str


class PromptConfigOverride(BaseModel):
    """Prompt-specific generation parameter overrides.

    All parameters are optional; only the ones specified override the
    provider settings.
    """

    model_config = {"extra": "forbid"}

    temperature: Optional[float] = None
    max_tokens: Optional[int] = None
    top_p: Optional[float] = None
    top_k: Optional[int] = None

    @field_validator("temperature")
    @classmethod
    def validate_temperature(cls, v: Optional[float]) -> Optional[float]:
        if v is not None and (v < 0 or v > 2):
            raise ValueError("Temperature must be between 0 and 2")
        return v

    @field_validator("top_p")
    @classmethod
    def validate_top_p(cls, v: Optional[float]) -> Optional[float]:
        if v is not None and (v < 0 or v > 1):
            raise ValueError("Top_p must be between 0 and 1")
        return v


class MediaOutput(StrictBaseModel):
    """Binary generation result rendered as a data URI."""

    mime_type: str = Field(..., description="MIME type of the payload, e.g. image/png")
    data_uri: str = Field(..., min_length=1, description="data:<mime>;base64,<payload>")


ModelType = TypeVar("ModelType", bound=BaseModel)


@runtime_checkable
class GenerationService(Protocol):
    """External text, image and speech generation collaborator."""

    async def generate_structured(
        self,
        prompt: PromptTemplate,
        output_type: type[ModelType],
        prompt_variables: Optional[dict[str, object]] = None,
    ) -> ModelType: ...

    async def generate_image(
        self, prompt: PromptTemplate, prompt_variables: Optional[dict[str, object]] = None
    ) -> MediaOutput: ...

    async def generate_speech(self, text: str) -> MediaOutput: ...


class LLMProviderSettings(ProviderSettings):
    """Settings for LLM providers.

    Model ids name the text, image and speech models used by the three
    kinds of generation.
    """

    text_model: str = Field(..., min_length=1, description="Model id used for structured text generation")
    image_model: str = Field(..., min_length=1, description="Model id used for image generation")
    speech_model: str = Field(..., min_length=1, description="Model id used for speech synthesis")

    temperature: float = Field(default=0.7, description="Sampling temperature (0.0 = deterministic)")
    max_tokens: int = Field(default=2048, description="Maximum tokens to generate")
    top_p: Optional[float] = Field(default=None, description="Top-p (nucleus) sampling threshold")

    @field_validator("temperature")
    @classmethod
    def validate_temperature(cls, v: float) -> float:
        if v < 0 or v > 2:
            raise ValueError("Temperature must be between 0 and 2")
        return v


SettingsT = TypeVar("SettingsT", bound=LLMProviderSettings)


class LLMProvider(Provider[SettingsT], Generic[SettingsT]):
    """Base class for generation providers.

    Subclasses implement the three ``GenerationService`` operations; this
    class supplies prompt formatting and per-prompt config merging.
    """

    async def generate_structured(
        self,
        prompt: PromptTemplate,
        output_type: type[ModelType],
        prompt_variables: Optional[dict[str, object]] = None,
    ) -> ModelType:
        raise NotImplementedError("Subclasses must implement generate_structured()")

    async def generate_image(
        self, prompt: PromptTemplate, prompt_variables: Optional[dict[str, object]] = None
    ) -> MediaOutput:
        raise NotImplementedError("Subclasses must implement generate_image()")

    async def generate_speech(self, text: str) -> MediaOutput:
        raise NotImplementedError("Subclasses must implement generate_speech()")

    def render_prompt(self, prompt: PromptTemplate, prompt_variables: Optional[dict[str, object]] = None) -> str:
        """Return the prompt's template with variables substituted."""
        if not hasattr(prompt, "template"):
            raise TypeError(
                f"prompt must be a template object with 'template' attribute, got {type(prompt).__name__}"
            )
        return format_template(prompt.template, prompt_variables or {})

    def _extract_prompt_config(self, prompt: PromptTemplate) -> Optional[PromptConfigOverride]:
        config_attr = getattr(prompt, "config", None)
        if config_attr is None:
            return None
        if not isinstance(config_attr, PromptConfigOverride):
            raise TypeError(f"Prompt config must be PromptConfigOverride instance, got {type(config_attr)}")
        return config_attr

    def _generation_params(self, prompt: Optional[PromptTemplate] = None) -> dict[str, Any]:
        """Provider defaults overridden by the prompt's config, None values dropped."""
        params: dict[str, Any] = {
            "temperature": self.settings.temperature,
            "max_tokens": self.settings.max_tokens,
            "top_p": self.settings.top_p,
        }
        prompt_config = self._extract_prompt_config(prompt) if prompt is not None else None
        if prompt_config:
            params.update(prompt_config.model_dump(exclude_none=True))
        return {k: v for k, v in params.items() if v is not None}


def format_template(template: str, variables: dict[str, object]) -> str:
    """Replace ``{{variable}}`` placeholders with their values.

    Double braces avoid conflicts with literal JSON in templates. Only
    placeholders in the template are substituted; substituted values are
    not scanned again.

    Raises:
        ValueError: If any placeholder has no value
    """
    remaining: list[str] = []

    def _replace(match: "re.Match[str]") -> str:
        key = match.group(1).strip()
        if key not in variables:
            remaining.append(key)
            return match.group(0)
        return str(variables[key])

    result = _PLACEHOLDER.sub(_replace, template)
    if remaining:
        logger.error(f"Unreplaced placeholders remain: {remaining}")
        raise ValueError(
            f"Template has unreplaced placeholders: {remaining}. "
            f"All template variables must be provided in prompt_variables."
        )
    return result
