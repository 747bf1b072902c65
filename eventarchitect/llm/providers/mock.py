"""Mock generative provider for testing."""

import asyncio
import json
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Union

from eventarchitect.llm.models import (
    GeneratedImage,
    ImageConfig,
    LLMException,
    LLMResponse,
    Message,
)
from eventarchitect.llm.providers.base import BaseLLMProvider

# 1x1 transparent PNG
DEFAULT_IMAGE_DATA = (
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNkYPhfDwAChwGA60e6kgAAAABJRU5ErkJggg=="
)


@dataclass
class MockCall:
    """Record of a mock generation call."""
    contents: List[Message]
    model: str
    system_instruction: Optional[str]
    response_schema: Optional[Dict[str, Any]]
    image_config: Optional[ImageConfig]
    timestamp: float = field(default_factory=time.time)

    @property
    def text(self) -> str:
        """All text sent with the call (system instruction included)."""
        parts = [self.system_instruction or ""]
        parts.extend(m.text for m in self.contents)
        return "\n".join(parts)


@dataclass
class _FailureRule:
    trigger: str
    error: LLMException
    remaining: Optional[int]


class MockLLMProvider(BaseLLMProvider):
    """Mock provider for testing without API calls."""

    def __init__(
        self,
        default_response: Union[str, Dict[str, Any]] = "Mock response",
        responses: Optional[Dict[str, Union[str, Dict[str, Any]]]] = None,
        response_fn: Optional[Callable[[MockCall], Union[str, Dict[str, Any]]]] = None,
        image_data: str = DEFAULT_IMAGE_DATA,
        latency_s: float = 0.0,
    ):
        """
        Initialize mock provider.

        Args:
            default_response: Default response when no trigger matches
            responses: Dict mapping prompt substrings to responses
            response_fn: Custom function to generate responses
            image_data: Base64 image returned for image requests
            latency_s: Simulated latency (awaited, so batches interleave)

        Dict responses are serialized to JSON.
        """
        self._default_response = default_response
        self._responses = dict(responses or {})
        self._response_fn = response_fn
        self._image_data = image_data
        self._latency_s = latency_s
        self._calls: List[MockCall] = []
        self._error_queue: List[LLMException] = []
        self._failure_rules: List[_FailureRule] = []

    @property
    def provider_name(self) -> str:
        return "mock"

    @property
    def calls(self) -> List[MockCall]:
        """Get list of all calls made to this provider."""
        return self._calls

    @property
    def call_count(self) -> int:
        """Get number of calls made."""
        return len(self._calls)

    def last_call(self) -> Optional[MockCall]:
        """Get the most recent call."""
        return self._calls[-1] if self._calls else None

    def calls_containing(self, trigger: str) -> List[MockCall]:
        return [c for c in self._calls if trigger in c.text]

    def set_error_on_next(self, error: LLMException) -> None:
        """Configure an error to be raised on the next call."""
        self._error_queue = [error]

    def set_error_sequence(self, errors: List[LLMException]) -> None:
        """Raise these errors on the next calls, in order."""
        self._error_queue = list(errors)

    def fail_when(self, trigger: str, error: LLMException, times: Optional[int] = None) -> None:
        """Raise `error` for calls whose text contains `trigger` (`times` limits it)."""
        self._failure_rules.append(_FailureRule(trigger=trigger, error=error, remaining=times))

    def set_response(self, trigger: str, response: Union[str, Dict[str, Any]]) -> None:
        """Set a response for prompts containing the trigger string."""
        self._responses[trigger] = response

    def clear_calls(self) -> None:
        """Clear call history."""
        self._calls.clear()

    async def generate(
        self,
        contents: List[Message],
        model: str,
        system_instruction: Optional[str] = None,
        response_schema: Optional[Dict[str, Any]] = None,
        image_config: Optional[ImageConfig] = None,
    ) -> LLMResponse:
        """Generate mock content."""
        call = MockCall(
            contents=list(contents),
            model=model,
            system_instruction=system_instruction,
            response_schema=response_schema,
            image_config=image_config,
        )
        self._calls.append(call)

        if self._latency_s:
            await asyncio.sleep(self._latency_s)
        else:
            await asyncio.sleep(0)

        if self._error_queue:
            raise self._error_queue.pop(0)

        for rule in self._failure_rules:
            if rule.trigger in call.text and rule.remaining != 0:
                if rule.remaining is not None:
                    rule.remaining -= 1
                raise rule.error

        if image_config is not None:
            return LLMResponse(
                text="",
                model=model,
                images=[GeneratedImage(mime_type="image/png", data=self._image_data)],
            )

        return LLMResponse(text=self._get_response(call), model=model)

    def _get_response(self, call: MockCall) -> str:
        """Determine response based on configuration."""
        if self._response_fn:
            response = self._response_fn(call)
        else:
            response = self._default_response
            for trigger, candidate in self._responses.items():
                if trigger in call.text:
                    response = candidate
                    break
        if isinstance(response, (dict, list)):
            return json.dumps(response)
        return response


def create_json_response_provider(payload: Dict[str, Any]) -> MockLLMProvider:
    """Create a mock provider that always returns `payload` as JSON."""
    return MockLLMProvider(default_response=payload)
