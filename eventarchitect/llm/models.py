"""Generative-service domain models."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class MessageRole(str, Enum):
    """Conversation roles understood by the generative service."""
    USER = "user"
    MODEL = "model"


@dataclass
class ContentPart:
    """One piece of a message: text or inline binary data."""
    text: Optional[str] = None
    mime_type: Optional[str] = None
    data: Optional[str] = None  # base64, without data-URI prefix

    @classmethod
    def from_text(cls, text: str) -> "ContentPart":
        return cls(text=text)

    @classmethod
    def inline(cls, data: str, mime_type: str = "image/png") -> "ContentPart":
        """
        Create an inline data part.

        Accepts either raw base64 or a data URI; the URI prefix is
        stripped and its MIME type wins over `mime_type`.
        """
        if data.startswith("data:") and "," in data:
            header, data = data.split(",", 1)
            mime_type = header[5:].split(";", 1)[0] or mime_type
        return cls(mime_type=mime_type, data=data)

    @property
    def is_inline(self) -> bool:
        return self.data is not None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for API calls."""
        if self.is_inline:
            return {"inlineData": {"mimeType": self.mime_type, "data": self.data}}
        return {"text": self.text or ""}


@dataclass
class Message:
    """A message (one turn) in a generative-service conversation."""
    role: MessageRole
    parts: List[ContentPart]

    @classmethod
    def user(cls, *parts: Any) -> "Message":
        """Create a user message from strings and/or ContentParts."""
        return cls(role=MessageRole.USER, parts=[_as_part(p) for p in parts])

    @classmethod
    def model(cls, text: str) -> "Message":
        """Create a model message."""
        return cls(role=MessageRole.MODEL, parts=[ContentPart.from_text(text)])

    @property
    def text(self) -> str:
        return "\n".join(p.text for p in self.parts if p.text)

    def to_dict(self) -> Dict[str, Any]:
        return {"role": self.role.value, "parts": [p.to_dict() for p in self.parts]}


def _as_part(value: Any) -> ContentPart:
    if isinstance(value, ContentPart):
        return value
    return ContentPart.from_text(str(value))


@dataclass
class ImageConfig:
    """Image generation settings."""
    aspect_ratio: str = "16:9"
    image_size: Optional[str] = None  # 1K | 2K | 4K, pro model only

    def to_dict(self) -> Dict[str, Any]:
        data = {"aspectRatio": self.aspect_ratio}
        if self.image_size:
            data["imageSize"] = self.image_size
        return data


@dataclass
class GeneratedImage:
    mime_type: str
    data: str

    @property
    def data_uri(self) -> str:
        return f"data:{self.mime_type};base64,{self.data}"


@dataclass
class LLMResponse:
    """Response from a generative provider."""
    text: str
    model: str
    images: List[GeneratedImage] = field(default_factory=list)
    input_tokens: int = 0
    output_tokens: int = 0
    latency_ms: float = 0.0
    finish_reason: str = "STOP"

    @property
    def total_tokens(self) -> int:
        """Total tokens used."""
        return self.input_tokens + self.output_tokens

    @property
    def first_image_uri(self) -> Optional[str]:
        return self.images[0].data_uri if self.images else None


@dataclass
class LLMError:
    """Error from a generative provider."""
    error_type: str
    message: str
    retryable: bool = False
    status_code: Optional[int] = None

    @classmethod
    def quota_exceeded(cls, message: str, status_code: Optional[int] = 429) -> "LLMError":
        """Create a quota/rate-limit error."""
        return cls(
            error_type="quota_exceeded",
            message=message,
            retryable=True,
            status_code=status_code,
        )

    @classmethod
    def service_unavailable(cls, message: str, status_code: Optional[int] = 503) -> "LLMError":
        """Create a server-side unavailability error."""
        return cls(
            error_type="service_unavailable",
            message=message,
            retryable=True,
            status_code=status_code,
        )

    @classmethod
    def timeout(cls, message: str) -> "LLMError":
        """Create a timeout error (treated as service unavailable)."""
        return cls(error_type="timeout", message=message, retryable=True)

    @classmethod
    def invalid_response(cls, message: str) -> "LLMError":
        """Create an error for malformed or unusable output."""
        return cls(error_type="invalid_response", message=message, retryable=False)

    @classmethod
    def api_error(cls, message: str, status_code: int) -> "LLMError":
        """Create a non-transient API error."""
        return cls(
            error_type="api_error",
            message=message,
            retryable=False,
            status_code=status_code,
        )


class LLMException(Exception):
    """Exception wrapping generative-provider errors."""

    def __init__(self, error: LLMError):
        self.error = error
        super().__init__(error.message)

    @property
    def retryable(self) -> bool:
        return self.error.retryable


class QuotaExceeded(LLMException):
    """Quota or rate limit exhausted. Transient."""

    def __init__(self, message: str, status_code: Optional[int] = 429):
        super().__init__(LLMError.quota_exceeded(message, status_code))


class ServiceUnavailable(LLMException):
    """Service overloaded, unreachable or timed out. Transient."""

    def __init__(self, message: str, status_code: Optional[int] = 503, error: Optional[LLMError] = None):
        super().__init__(error or LLMError.service_unavailable(message, status_code))


class InvalidResponse(LLMException):
    """Output was malformed or missing required content. Never retried."""

    def __init__(self, message: str, raw: Optional[str] = None):
        self.raw = raw
        super().__init__(LLMError.invalid_response(message))
