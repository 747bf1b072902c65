"""Generative provider base protocol."""

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Protocol, runtime_checkable

from eventarchitect.llm.models import ImageConfig, LLMException, LLMResponse, Message

logger = logging.getLogger(__name__)


@runtime_checkable
class LLMProvider(Protocol):
    """Protocol for generative providers."""

    @property
    def provider_name(self) -> str:
        """Return the provider name (e.g., 'gemini', 'mock')."""
        ...

    async def generate(
        self,
        contents: List[Message],
        model: str,
        system_instruction: Optional[str] = None,
        response_schema: Optional[Dict[str, Any]] = None,
        image_config: Optional[ImageConfig] = None,
    ) -> LLMResponse:
        """
        Run one generation call.

        Args:
            contents: Conversation turns (text and inline data parts)
            model: Model identifier
            system_instruction: Optional system instruction
            response_schema: Structured-output schema; the response text
                is then a JSON document
            image_config: Set when images are requested

        Returns:
            LLMResponse with text, images and metadata

        Raises:
            QuotaExceeded, ServiceUnavailable: transient failures
            LLMException: any other provider failure
        """
        ...


class BaseLLMProvider(ABC):
    """Base class for generative providers with common functionality."""

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Return the provider name."""
        ...

    @abstractmethod
    async def generate(
        self,
        contents: List[Message],
        model: str,
        system_instruction: Optional[str] = None,
        response_schema: Optional[Dict[str, Any]] = None,
        image_config: Optional[ImageConfig] = None,
    ) -> LLMResponse:
        """Run one generation call."""
        ...

    async def generate_with_retry(
        self,
        contents: List[Message],
        model: str,
        system_instruction: Optional[str] = None,
        response_schema: Optional[Dict[str, Any]] = None,
        image_config: Optional[ImageConfig] = None,
        max_retries: int = 2,
        base_delay: float = 2.0,
    ) -> LLMResponse:
        """
        Generate with exponential backoff retry.

        Only transient failures (quota exhaustion, service unavailable)
        are retried, up to `max_retries` extra attempts. The delay starts
        at `base_delay` and doubles each attempt: 2s, 4s by default.
        Every other failure propagates immediately.

        Raises:
            LLMException: the last transient error once retries are
                exhausted, or the first non-transient one
        """
        delay = base_delay

        for attempt in range(max_retries + 1):
            try:
                return await self.generate(
                    contents,
                    model,
                    system_instruction=system_instruction,
                    response_schema=response_schema,
                    image_config=image_config,
                )
            except LLMException as e:
                if not e.retryable or attempt == max_retries:
                    raise
                logger.warning(
                    f"Transient {e.error.error_type} from {self.provider_name} "
                    f"(attempt {attempt + 1}/{max_retries + 1}), retrying in {delay:.1f}s",
                    extra={"attempt": attempt + 1, "delay": delay, "model": model},
                )
                await self._backoff(delay)
                delay *= 2

        raise RuntimeError("unreachable")  # pragma: no cover

    async def _backoff(self, delay: float) -> None:
        """Wait between retry attempts."""
        await asyncio.sleep(delay)
