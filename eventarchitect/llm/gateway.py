"""
AI Gateway: the request/response boundary to the generative service.

One coroutine per call type. Structured calls return validated
response models; image calls return a data URI. Every call goes
through the provider's retry policy, so callers only see the final
outcome: a result, a transient error after retries ran out, or a
non-retryable error (InvalidResponse included).
"""

import logging
from typing import Any, Dict, List, Optional, Sequence, Type, TypeVar

from pydantic import BaseModel

from eventarchitect.core.config import settings
from eventarchitect.llm.models import ContentPart, ImageConfig, InvalidResponse, LLMResponse, Message
from eventarchitect.llm.output_parser import OutputParser
from eventarchitect.llm.prompt_builder import (
    ASSET_ANALYSIS_PROMPT,
    AUDIO_BRIEFING_PROMPT,
    CHAT_SYSTEM_INSTRUCTION,
    TEXT_BRIEFING_PROMPT,
    PromptBuilder,
)
from eventarchitect.llm.providers.base import BaseLLMProvider
from eventarchitect.llm.schemas import (
    AssetAnalysisResult,
    BriefingExtraction,
    CrestConceptSet,
    EditPromptSpec,
    MoodboardDesign,
    RefinedPrompt,
    to_response_schema,
)

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)

IMAGE_SIZES = ("1K", "2K", "4K")


class ModelNames:
    """Model identifiers per call family."""

    def __init__(
        self,
        text: Optional[str] = None,
        pro: Optional[str] = None,
        image: Optional[str] = None,
        image_pro: Optional[str] = None,
        audio: Optional[str] = None,
    ):
        self.text = text or settings.MODEL_TEXT
        self.pro = pro or settings.MODEL_PRO
        self.image = image or settings.MODEL_IMAGE
        self.image_pro = image_pro or settings.MODEL_IMAGE_PRO
        self.audio = audio or settings.MODEL_AUDIO


class AIGateway:
    """Typed, retrying facade over a generative provider."""

    def __init__(
        self,
        provider: BaseLLMProvider,
        models: Optional[ModelNames] = None,
        prompts: Optional[PromptBuilder] = None,
        parser: Optional[OutputParser] = None,
        max_retries: Optional[int] = None,
        base_delay: Optional[float] = None,
    ):
        self.provider = provider
        self.models = models or ModelNames()
        self.prompts = prompts or PromptBuilder(settings.CLIENT_LANGUAGE)
        self.parser = parser or OutputParser()
        self.max_retries = settings.AI_MAX_RETRIES if max_retries is None else max_retries
        self.base_delay = settings.AI_RETRY_BASE_DELAY if base_delay is None else base_delay

    # ------------------------------------------------------------------
    # Plumbing
    # ------------------------------------------------------------------

    async def _call(
        self,
        contents: List[Message],
        model: str,
        system_instruction: Optional[str] = None,
        response_schema: Optional[Dict[str, Any]] = None,
        image_config: Optional[ImageConfig] = None,
    ) -> LLMResponse:
        return await self.provider.generate_with_retry(
            contents,
            model,
            system_instruction=system_instruction,
            response_schema=response_schema,
            image_config=image_config,
            max_retries=self.max_retries,
            base_delay=self.base_delay,
        )

    async def _structured(self, contents: List[Message], model: str, response_model: Type[T]) -> T:
        response = await self._call(
            contents,
            model,
            response_schema=to_response_schema(response_model),
        )
        return self.parser.parse(response.text, response_model)

    async def _image(
        self,
        contents: List[Message],
        model: str,
        aspect_ratio: str = "1:1",
        image_size: Optional[str] = None,
    ) -> str:
        response = await self._call(
            contents,
            model,
            image_config=ImageConfig(aspect_ratio=aspect_ratio, image_size=image_size),
        )
        uri = response.first_image_uri
        if not uri:
            raise InvalidResponse("Image generation returned no data", raw=response.text)
        return uri

    # ------------------------------------------------------------------
    # Assets and briefing
    # ------------------------------------------------------------------

    async def analyze_asset(self, data: str, mime_type: str = "image/png") -> AssetAnalysisResult:
        contents = [Message.user(ContentPart.inline(data, mime_type), ASSET_ANALYSIS_PROMPT)]
        return await self._structured(contents, self.models.text, AssetAnalysisResult)

    async def extract_briefing_from_audio(self, data: str, mime_type: str = "audio/webm") -> BriefingExtraction:
        contents = [Message.user(ContentPart.inline(data, mime_type), AUDIO_BRIEFING_PROMPT)]
        return await self._structured(contents, self.models.audio, BriefingExtraction)

    async def extract_briefing_from_text(self, text: str) -> BriefingExtraction:
        contents = [Message.user(TEXT_BRIEFING_PROMPT.format(text=text))]
        return await self._structured(contents, self.models.text, BriefingExtraction)

    async def edit_image(self, image: str, prompt: str) -> str:
        contents = [Message.user(ContentPart.inline(image), prompt)]
        return await self._image(contents, self.models.image)

    # ------------------------------------------------------------------
    # Boards
    # ------------------------------------------------------------------

    async def build_edit_prompt(
        self,
        directives: Dict[str, Any],
        space_analysis: Optional[Dict[str, Any]],
        fixed_elements: Sequence[str],
    ) -> EditPromptSpec:
        contents = [Message.user(self.prompts.edit_prompt(directives, space_analysis, fixed_elements))]
        return await self._structured(contents, self.models.pro, EditPromptSpec)

    async def refine_image_prompt(
        self,
        user_text: str,
        space_description: Optional[str] = None,
        styles: Optional[Sequence[str]] = None,
    ) -> RefinedPrompt:
        context = {"spaceDescription": space_description or "", "styles": list(styles or [])}
        contents = [Message.user(self.prompts.refine_prompt(user_text, context))]
        return await self._structured(contents, self.models.pro, RefinedPrompt)

    async def generate_space_image(
        self,
        base_image: str,
        prompt: str,
        negative_prompt: str,
        use_pro: bool = False,
        size: str = "1K",
    ) -> str:
        """Render a decorated version of the base photo."""
        if size not in IMAGE_SIZES:
            raise ValueError(f"Unsupported image size: {size}")
        contents = [Message.user(
            ContentPart.inline(base_image),
            self.prompts.space_image(prompt, negative_prompt),
        )]
        model = self.models.image_pro if use_pro else self.models.image
        return await self._image(contents, model, image_size=size if use_pro else None)

    # ------------------------------------------------------------------
    # Moodboards
    # ------------------------------------------------------------------

    async def build_moodboard_design(self, inputs: Dict[str, Any]) -> MoodboardDesign:
        contents = [Message.user(self.prompts.moodboard(inputs))]
        return await self._structured(contents, self.models.text, MoodboardDesign)

    async def generate_moodboard_image(self, story: str) -> str:
        contents = [Message.user(self.prompts.moodboard_collage(story))]
        return await self._image(contents, self.models.image, aspect_ratio="16:9")

    # ------------------------------------------------------------------
    # Crest
    # ------------------------------------------------------------------

    async def generate_crest_concepts(
        self,
        initials: str,
        host_name: str,
        event_type: str,
        palette: Any,
        symbols: str = "",
        forbidden: str = "",
        selected_style: Optional[str] = None,
    ) -> CrestConceptSet:
        prompt = self.prompts.crest_concepts(
            initials, host_name, event_type, palette, symbols, forbidden, selected_style,
        )
        return await self._structured([Message.user(prompt)], self.models.text, CrestConceptSet)

    async def generate_crest_image(self, prompt: str, color_style: str = "default") -> str:
        contents = [Message.user(self.prompts.crest_image(prompt, color_style))]
        return await self._image(contents, self.models.image)

    async def generate_crest_variation(self, image: str, edit_prompt: str) -> str:
        contents = [Message.user(ContentPart.inline(image), self.prompts.crest_variation(edit_prompt))]
        return await self._image(contents, self.models.image)

    async def transform_crest_variant(self, image: str, variant: str) -> str:
        """Re-render a crest image as the gold or black variant."""
        contents = [Message.user(ContentPart.inline(image), self.prompts.crest_transform(variant))]
        return await self._image(contents, self.models.image)

    # ------------------------------------------------------------------
    # Conversation
    # ------------------------------------------------------------------

    async def chat(self, history: Sequence[Message], system_instruction: str = CHAT_SYSTEM_INSTRUCTION) -> str:
        """Send a conversation and return the model's reply text."""
        response = await self._call(list(history), self.models.text, system_instruction=system_instruction)
        if not response.text.strip():
            raise InvalidResponse("Empty chat reply")
        return response.text
