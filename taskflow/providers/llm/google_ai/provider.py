"""GoogleAI (Gemini) provider implementation.

This module implements the generation service on Google's Gemini models
using the google-genai library: JSON structured output, image generation
with an image-capable model, and text-to-speech wrapped into WAV audio.
"""

import asyncio
import base64
import io
import json
import logging
import re
import wave
from typing import Any, Optional

from google import genai
from google.genai import types
from pydantic import Field, PrivateAttr
from pydantic import ValidationError as PydanticValidationError

from taskflow.providers.core.decorators import provider
from taskflow.providers.llm.base import (
    LLMProvider,
    LLMProviderSettings,
    MediaOutput,
    ModelType,
    PromptTemplate,
)

logger = logging.getLogger(__name__)

# JSON schema keys the Gemini response schema understands
_SCHEMA_KEYS = {"type", "format", "description", "enum", "items", "properties", "required", "nullable"}
_RATE_PATTERN = re.compile(r"rate=(\d+)")


class GoogleAISettings(LLMProviderSettings):
    """Settings for the GoogleAI (Gemini) provider.

    Google AI is a cloud API service that requires an API key; model ids
    select the text, image and speech models.
    """

    api_key: str = Field(default="", description="Google AI API key (get from Google AI Studio)")

    text_model: str = Field(default="gemini-2.0-flash", min_length=1)
    image_model: str = Field(default="gemini-2.0-flash-preview-image-generation", min_length=1)
    speech_model: str = Field(default="gemini-2.5-flash-preview-tts", min_length=1)

    speech_voice: str = Field(default="Algenib", description="Prebuilt voice used for narration")
    audio_sample_rate: int = Field(default=24000, description="Sample rate of returned PCM when the MIME type omits it")
    audio_channels: int = Field(default=1, description="Channels of returned PCM audio")
    audio_sample_width: int = Field(default=2, description="Bytes per PCM sample")


def pcm_to_wav(pcm: bytes, sample_rate: int = 24000, channels: int = 1, sample_width: int = 2) -> bytes:
    """Wrap raw little-endian PCM samples in a WAV container."""
    buffer = io.BytesIO()
    with wave.open(buffer, "wb") as wav:
        wav.setnchannels(channels)
        wav.setsampwidth(sample_width)
        wav.setframerate(sample_rate)
        wav.writeframes(pcm)
    return buffer.getvalue()


def data_uri(mime_type: str, payload: bytes) -> str:
    return f"data:{mime_type};base64,{base64.b64encode(payload).decode('ascii')}"


def to_gemini_schema(schema: dict[str, Any], defs: Optional[dict[str, Any]] = None) -> dict[str, Any]:
    """Convert a pydantic JSON schema into the subset Gemini accepts.

    ``$ref`` entries are inlined, ``Optional[X]`` (``anyOf`` with null)
    becomes a nullable X, and unsupported keys such as
    ``additionalProperties`` and ``title`` are dropped.
    """
    defs = schema.get("$defs", {}) if defs is None else defs
    if "$ref" in schema:
        result = to_gemini_schema(defs[schema["$ref"].split("/")[-1]], defs)
        if "description" in schema:
            result["description"] = schema["description"]
        return result

    if "allOf" in schema and len(schema["allOf"]) == 1:
        merged = {k: v for k, v in schema.items() if k != "allOf"}
        return to_gemini_schema({**schema["allOf"][0], **merged}, defs)

    if "anyOf" in schema:
        variants = [v for v in schema["anyOf"] if v.get("type") != "null"]
        result = to_gemini_schema(variants[0], defs) if variants else {}
        if len(variants) < len(schema["anyOf"]):
            result["nullable"] = True
        if "description" in schema:
            result["description"] = schema["description"]
        return result

    result: dict[str, Any] = {}
    for key, value in schema.items():
        if key not in _SCHEMA_KEYS:
            continue
        if key == "type":
            result[key] = str(value).upper()
        elif key == "properties":
            result[key] = {name: to_gemini_schema(prop, defs) for name, prop in value.items()}
        elif key == "items":
            result[key] = to_gemini_schema(value, defs)
        else:
            result[key] = value
    return result


@provider(provider_type="llm", name="googleai", settings_class=GoogleAISettings)
class GoogleAIProvider(LLMProvider[GoogleAISettings]):
    """Provider for Google AI (Gemini) models.

    This provider supports:
    1. Structured output generation using Gemini's JSON response schema.
    2. Image generation with an image-capable Gemini model.
    3. Speech synthesis with a Gemini TTS model.

    Every operation is a single attempt; failures raise ProviderError.
    """

    _client: Optional[genai.Client] = PrivateAttr(default=None)

    def __init__(
        self,
        name: str = "googleai",
        provider_type: str = "llm",
        settings: Optional[GoogleAISettings] = None,
        **kwargs: Any,
    ):
        super().__init__(name=name, provider_type=provider_type, settings=settings, **kwargs)
        if not isinstance(self.settings, GoogleAISettings):
            raise TypeError(f"settings must be a GoogleAISettings instance, got {type(self.settings)}")

    async def _initialize(self) -> None:
        if not self.settings.api_key:
            raise self._provider_error(
                "Google AI API key not configured.", operation="api_key_check", error_type="ConfigurationError"
            )
        self._client = genai.Client(api_key=self.settings.api_key)
        logger.info("GoogleAIProvider initialized with client.")

    async def _shutdown(self) -> None:
        self._client = None

    def _require_client(self, operation: str) -> genai.Client:
        if not self._initialized or self._client is None:
            raise self._provider_error(
                "Provider not initialized", operation=operation, error_type="InitializationError"
            )
        return self._client

    def _render(self, prompt: PromptTemplate, prompt_variables: Optional[dict[str, object]], operation: str) -> str:
        try:
            return self.render_prompt(prompt, prompt_variables)
        except (TypeError, ValueError) as e:
            raise self._provider_error(
                f"Failed to render prompt: {str(e)}", operation=operation, cause=e, error_type="PromptError"
            ) from e

    def _create_generation_config(self, prompt: Optional[PromptTemplate] = None, **extra: Any) -> types.GenerateContentConfig:
        params = self._generation_params(prompt)
        config_kwargs: dict[str, Any] = {
            "temperature": params["temperature"],
            "max_output_tokens": params["max_tokens"],
        }
        if "top_p" in params:
            config_kwargs["top_p"] = params["top_p"]
        if "top_k" in params:
            config_kwargs["top_k"] = params["top_k"]
        config_kwargs.update(extra)
        return types.GenerateContentConfig(**config_kwargs)

    async def _generate_content(
        self, operation: str, model: str, contents: str, config: types.GenerateContentConfig
    ) -> types.GenerateContentResponse:
        client = self._require_client(operation)
        logger.info(f"Calling Gemini model '{model}' for {operation}")
        logger.debug(f"Prompt: {contents[:200]}...")
        try:
            response = await asyncio.wait_for(
                client.aio.models.generate_content(model=model, contents=contents, config=config),
                timeout=self.settings.timeout,
            )
        except asyncio.TimeoutError as e:
            raise self._provider_error(
                f"Google AI {operation} timed out after {self.settings.timeout}s",
                operation=operation,
                cause=e,
                error_type="TimeoutError",
            ) from e
        except Exception as e:
            raise self._provider_error(
                f"Google AI {operation} failed: {str(e)}", operation=operation, cause=e, error_type="GenerationError"
            ) from e

        if response.prompt_feedback and response.prompt_feedback.block_reason:
            logger.warning(f"Prompt blocked for model '{model}'. Reason: {response.prompt_feedback.block_reason}")
            raise self._provider_error(
                f"Prompt blocked by Google AI safety filters: {response.prompt_feedback.block_reason}",
                operation=operation,
                error_type="BlockedPromptError",
            )

        if not response.candidates or not response.candidates[0].content or not response.candidates[0].content.parts:
            raise self._provider_error(
                f"No content generated by Gemini model '{model}'.", operation=operation, error_type="NoContentError"
            )
        return response

    async def generate_structured(
        self,
        prompt: PromptTemplate,
        output_type: type[ModelType],
        prompt_variables: Optional[dict[str, object]] = None,
    ) -> ModelType:
        operation = f"generate_structured_{output_type.__name__}"
        contents = self._render(prompt, prompt_variables, operation)
        config = self._create_generation_config(
            prompt,
            response_mime_type="application/json",
            response_schema=to_gemini_schema(output_type.model_json_schema()),
        )
        response = await self._generate_content(operation, self.settings.text_model, contents, config)

        generated_text = (response.text or "").strip()
        if not generated_text:
            raise self._provider_error(
                "Empty response text from Gemini, cannot parse for structured output.",
                operation=operation,
                error_type="EmptyResponseError",
            )

        # Models occasionally wrap JSON in markdown fences
        if generated_text.startswith("```json"):
            generated_text = generated_text[7:-3].strip()
        elif generated_text.startswith("```"):
            generated_text = generated_text[3:-3].strip()

        try:
            return output_type.model_validate(json.loads(generated_text))
        except json.JSONDecodeError as e:
            logger.error(f"JSON parsing failed for structured output: {e}. Response text: {generated_text[:200]}")
            raise self._provider_error(
                f"Failed to parse structured response: {e}", operation=operation, cause=e, error_type="JSONParseError"
            ) from e
        except PydanticValidationError as e:
            raise self._provider_error(
                f"Failed to validate Google AI response against model {output_type.__name__}: {str(e)}",
                operation=operation,
                cause=e,
                error_type="ValidationError",
            ) from e

    async def generate_image(
        self, prompt: PromptTemplate, prompt_variables: Optional[dict[str, object]] = None
    ) -> MediaOutput:
        operation = "generate_image"
        contents = self._render(prompt, prompt_variables, operation)
        config = types.GenerateContentConfig(response_modalities=["TEXT", "IMAGE"])
        response = await self._generate_content(operation, self.settings.image_model, contents, config)

        for part in response.candidates[0].content.parts:
            if part.inline_data is not None and part.inline_data.data:
                mime_type = part.inline_data.mime_type or "image/png"
                logger.info(f"Generated image ({mime_type}, {len(part.inline_data.data)} bytes)")
                return MediaOutput(mime_type=mime_type, data_uri=data_uri(mime_type, part.inline_data.data))

        raise self._provider_error(
            "Gemini response contained no image data.", operation=operation, error_type="NoContentError"
        )

    async def generate_speech(self, text: str) -> MediaOutput:
        operation = "generate_speech"
        config = types.GenerateContentConfig(
            response_modalities=["AUDIO"],
            speech_config=types.SpeechConfig(
                voice_config=types.VoiceConfig(
                    prebuilt_voice_config=types.PrebuiltVoiceConfig(voice_name=self.settings.speech_voice)
                )
            ),
        )
        response = await self._generate_content(operation, self.settings.speech_model, text, config)

        for part in response.candidates[0].content.parts:
            if part.inline_data is not None and part.inline_data.data:
                match = _RATE_PATTERN.search(part.inline_data.mime_type or "")
                sample_rate = int(match.group(1)) if match else self.settings.audio_sample_rate
                wav_bytes = pcm_to_wav(
                    part.inline_data.data,
                    sample_rate=sample_rate,
                    channels=self.settings.audio_channels,
                    sample_width=self.settings.audio_sample_width,
                )
                logger.info(f"Generated speech ({len(wav_bytes)} bytes WAV at {sample_rate} Hz)")
                return MediaOutput(mime_type="audio/wav", data_uri=data_uri("audio/wav", wav_bytes))

        raise self._provider_error(
            "Gemini response contained no audio data.", operation=operation, error_type="NoContentError"
        )


__all__ = [
    "GoogleAIProvider",
    "GoogleAISettings",
    "data_uri",
    "pcm_to_wav",
    "to_gemini_schema",
]
