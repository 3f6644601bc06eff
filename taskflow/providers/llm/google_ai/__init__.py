from .provider import GoogleAIProvider, GoogleAISettings, pcm_to_wav, to_gemini_schema

__all__ = ["GoogleAIProvider", "GoogleAISettings", "pcm_to_wav", "to_gemini_schema"]
