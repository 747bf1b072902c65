"""Gemini generative provider (REST API over httpx)."""

import logging
import time
from typing import Any, Dict, List, Optional

import httpx

from eventarchitect.llm.models import (
    GeneratedImage,
    ImageConfig,
    InvalidResponse,
    LLMError,
    LLMException,
    LLMResponse,
    Message,
    QuotaExceeded,
    ServiceUnavailable,
)
from eventarchitect.llm.providers.base import BaseLLMProvider

logger = logging.getLogger(__name__)


# Statuses the service reports for transient server trouble
TRANSIENT_STATUS_CODES = frozenset((500, 502, 503, 504))
TRANSIENT_STATUS_NAMES = frozenset(("INTERNAL", "UNAVAILABLE", "DEADLINE_EXCEEDED"))


class GeminiProvider(BaseLLMProvider):
    """Gemini `generateContent` API provider."""

    DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"

    def __init__(
        self,
        api_key: str,
        base_url: Optional[str] = None,
        timeout: float = 120.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize Gemini provider.

        Args:
            api_key: Gemini API key
            base_url: Optional custom base URL
            timeout: Request timeout in seconds
            transport: Optional httpx transport (tests use MockTransport)
        """
        self._api_key = api_key
        self._base_url = (base_url or self.DEFAULT_BASE_URL).rstrip("/")
        self._timeout = timeout
        self._transport = transport

    @property
    def provider_name(self) -> str:
        return "gemini"

    def _build_body(
        self,
        contents: List[Message],
        system_instruction: Optional[str],
        response_schema: Optional[Dict[str, Any]],
        image_config: Optional[ImageConfig],
    ) -> Dict[str, Any]:
        body: Dict[str, Any] = {"contents": [m.to_dict() for m in contents]}
        if system_instruction:
            body["systemInstruction"] = {"parts": [{"text": system_instruction}]}

        generation_config: Dict[str, Any] = {}
        if response_schema is not None:
            generation_config["responseMimeType"] = "application/json"
            generation_config["responseSchema"] = response_schema
        if image_config is not None:
            generation_config["responseModalities"] = ["TEXT", "IMAGE"]
            generation_config["imageConfig"] = image_config.to_dict()
        if generation_config:
            body["generationConfig"] = generation_config
        return body

    async def generate(
        self,
        contents: List[Message],
        model: str,
        system_instruction: Optional[str] = None,
        response_schema: Optional[Dict[str, Any]] = None,
        image_config: Optional[ImageConfig] = None,
    ) -> LLMResponse:
        """Generate content via the Gemini API."""
        url = f"{self._base_url}/models/{model}:generateContent"
        body = self._build_body(contents, system_instruction, response_schema, image_config)
        headers = {
            "x-goog-api-key": self._api_key,
            "content-type": "application/json",
        }

        start_time = time.perf_counter()

        try:
            async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
                response = await client.post(url, json=body, headers=headers)
        except httpx.TimeoutException as e:
            raise ServiceUnavailable(str(e), error=LLMError.timeout(f"Request timed out: {e}"))
        except httpx.RequestError as e:
            raise ServiceUnavailable(f"Request failed: {e}", status_code=None)

        latency_ms = (time.perf_counter() - start_time) * 1000

        if response.status_code >= 400:
            self._raise_for_error(response)

        try:
            data = response.json()
        except ValueError as e:
            raise InvalidResponse(f"Response body is not JSON: {e}", raw=response.text)

        return self._parse_response(data, model, latency_ms)

    def _raise_for_error(self, response: httpx.Response) -> None:
        """Map an error response to the matching exception."""
        try:
            payload = response.json() if response.content else {}
        except ValueError:
            payload = {}
        error_body = payload.get("error") if isinstance(payload, dict) else None
        error_body = error_body if isinstance(error_body, dict) else {}
        message = error_body.get("message") or response.text or f"HTTP {response.status_code}"
        status_name = error_body.get("status", "")

        if response.status_code == 429 or status_name == "RESOURCE_EXHAUSTED" or "quota" in message.lower():
            raise QuotaExceeded(message, status_code=response.status_code)
        if response.status_code in TRANSIENT_STATUS_CODES or status_name in TRANSIENT_STATUS_NAMES:
            raise ServiceUnavailable(message, status_code=response.status_code)
        raise LLMException(LLMError.api_error(message, response.status_code))

    def _parse_response(self, data: Any, model: str, latency_ms: float) -> LLMResponse:
        if not isinstance(data, dict):
            raise InvalidResponse(f"Expected a JSON object, got {type(data).__name__}")

        candidates = data.get("candidates") or []
        if not isinstance(candidates, list):
            raise InvalidResponse("Malformed candidates in response")
        if not candidates:
            feedback = _mapping(data.get("promptFeedback")).get("blockReason")
            raise InvalidResponse(f"No candidates returned{f' ({feedback})' if feedback else ''}")

        candidate = candidates[0]
        if not isinstance(candidate, dict):
            raise InvalidResponse("Malformed candidate in response")
        parts = _mapping(candidate.get("content")).get("parts") or []
        if not isinstance(parts, list):
            raise InvalidResponse("Malformed content parts in response")

        text_parts: List[str] = []
        images: List[GeneratedImage] = []
        for part in parts:
            if not isinstance(part, dict):
                raise InvalidResponse("Malformed content part in response")
            if isinstance(part.get("text"), str):
                text_parts.append(part["text"])
            inline = _mapping(part.get("inlineData"))
            if inline.get("data"):
                images.append(GeneratedImage(
                    mime_type=inline.get("mimeType", "image/png"),
                    data=inline["data"],
                ))

        usage = _mapping(data.get("usageMetadata"))
        return LLMResponse(
            text="".join(text_parts),
            model=model,
            images=images,
            input_tokens=usage.get("promptTokenCount", 0),
            output_tokens=usage.get("candidatesTokenCount", 0),
            latency_ms=latency_ms,
            finish_reason=candidate.get("finishReason", "STOP"),
        )


def _mapping(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}
