"""Generative-service integration for EventArchitect."""

from eventarchitect.core.config import settings
from eventarchitect.llm.models import (
    ContentPart,
    GeneratedImage,
    ImageConfig,
    InvalidResponse,
    LLMError,
    LLMException,
    LLMResponse,
    Message,
    MessageRole,
    QuotaExceeded,
    ServiceUnavailable,
)
from eventarchitect.llm.providers import (
    BaseLLMProvider,
    GeminiProvider,
    LLMProvider,
    MockCall,
    MockLLMProvider,
)
from eventarchitect.llm.output_parser import OutputParser
from eventarchitect.llm.prompt_builder import PromptBuilder
from eventarchitect.llm.gateway import AIGateway, ModelNames
from eventarchitect.llm.chat import ChatSession


def create_gateway() -> AIGateway:
    """Build the gateway for the configured Gemini account."""
    provider = GeminiProvider(
        api_key=settings.GEMINI_API_KEY,
        base_url=settings.GEMINI_BASE_URL,
        timeout=settings.AI_TIMEOUT,
    )
    return AIGateway(provider)


__all__ = [
    # Models
    "ContentPart",
    "GeneratedImage",
    "ImageConfig",
    "InvalidResponse",
    "LLMError",
    "LLMException",
    "LLMResponse",
    "Message",
    "MessageRole",
    "QuotaExceeded",
    "ServiceUnavailable",
    # Providers
    "BaseLLMProvider",
    "GeminiProvider",
    "LLMProvider",
    "MockCall",
    "MockLLMProvider",
    # Gateway
    "AIGateway",
    "ChatSession",
    "ModelNames",
    "OutputParser",
    "PromptBuilder",
    "create_gateway",
]
