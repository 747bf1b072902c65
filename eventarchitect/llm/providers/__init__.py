"""Generative providers module."""

from eventarchitect.llm.providers.base import LLMProvider, BaseLLMProvider
from eventarchitect.llm.providers.gemini import GeminiProvider
from eventarchitect.llm.providers.mock import MockLLMProvider, MockCall, create_json_response_provider

__all__ = [
    "LLMProvider",
    "BaseLLMProvider",
    "GeminiProvider",
    "MockLLMProvider",
    "MockCall",
    "create_json_response_provider",
]
