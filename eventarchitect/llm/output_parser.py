"""Output parsing and validation for structured generation responses."""

import json
import logging
import re
from typing import Any, Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError

from eventarchitect.llm.models import InvalidResponse

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)

_FENCE_PATTERN = re.compile(r"```(?:json)?\s*(.*?)```", re.DOTALL | re.IGNORECASE)


class OutputParser:
    """
    Extracts a JSON document from response text and validates it.

    Extraction strategies, in order: the whole text, the first fenced
    code block, the outermost {...} span. Anything that fails every
    strategy or fails validation raises InvalidResponse.
    """

    def extract_json(self, text: Optional[str]) -> Any:
        if not text or not text.strip():
            raise InvalidResponse("Empty response", raw=text)

        candidates = [text.strip()]
        fence = _FENCE_PATTERN.search(text)
        if fence:
            candidates.append(fence.group(1).strip())
        start, end = text.find("{"), text.rfind("}")
        if 0 <= start < end:
            candidates.append(text[start:end + 1])

        for candidate in candidates:
            try:
                return json.loads(candidate)
            except json.JSONDecodeError:
                continue
        raise InvalidResponse("Response does not contain a JSON document", raw=text)

    def parse(self, text: Optional[str], model: Type[T]) -> T:
        """
        Parse response text into `model`.

        Raises:
            InvalidResponse: no JSON found, or the JSON does not match
        """
        data = self.extract_json(text)
        try:
            return model.model_validate(data)
        except ValidationError as e:
            logger.warning(f"{model.__name__} validation failed: {e.error_count()} errors")
            raise InvalidResponse(f"{model.__name__} does not match schema: {e}", raw=text) from e
