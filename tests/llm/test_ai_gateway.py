"""Tests for the AI Gateway: typed calls, retry policy, error classes."""

import pytest

from eventarchitect.llm import AIGateway, MockLLMProvider
from eventarchitect.llm.gateway import ModelNames
from eventarchitect.llm.models import (
    InvalidResponse,
    LLMError,
    LLMException,
    QuotaExceeded,
    ServiceUnavailable,
)
from eventarchitect.llm.schemas import AssetAnalysisResult, CrestConceptSet

from tests.helpers.scripted import (
    ANALYSIS_RESPONSE,
    CREST_CONCEPTS_RESPONSE,
    IMAGE_URI,
    SPACE_PHOTO,
    scripted_provider,
)


class TestStructuredCalls:

    @pytest.mark.asyncio
    async def test_analyze_asset_returns_validated_model(self, gateway, provider):
        result = await gateway.analyze_asset(SPACE_PHOTO, "image/jpeg")

        assert isinstance(result, AssetAnalysisResult)
        assert result.summary == ANALYSIS_RESPONSE["summary"]
        call = provider.last_call()
        assert call.response_schema["type"] == "OBJECT"
        assert call.contents[0].parts[0].mime_type == "image/jpeg"

    @pytest.mark.asyncio
    async def test_briefing_from_text_includes_text(self, gateway, provider):
        extraction = await gateway.extract_briefing_from_text("Garden wedding for 80 people")

        assert extraction.directives.palette.preferred == ["sage", "ivory"]
        assert "Garden wedding for 80 people" in provider.last_call().text

    @pytest.mark.asyncio
    async def test_crest_concepts_always_six(self, gateway):
        concepts = await gateway.generate_crest_concepts("A&B", "Ana", "Wedding", [])

        assert isinstance(concepts, CrestConceptSet)
        assert len(concepts.options) == 6

    @pytest.mark.asyncio
    async def test_schema_mismatch_is_invalid_response(self):
        provider = MockLLMProvider(default_response={"unexpected": True})
        gateway = AIGateway(provider, base_delay=0.0)

        with pytest.raises(InvalidResponse):
            await gateway.analyze_asset(SPACE_PHOTO)
        assert provider.call_count == 1

    @pytest.mark.asyncio
    async def test_wrong_number_of_crest_concepts_is_invalid_response(self):
        payload = dict(CREST_CONCEPTS_RESPONSE, options=CREST_CONCEPTS_RESPONSE["options"][:5])
        gateway = AIGateway(MockLLMProvider(default_response=payload), base_delay=0.0)

        with pytest.raises(InvalidResponse):
            await gateway.generate_crest_concepts("A&B", "Ana", "Wedding", [])


class TestImageCalls:

    @pytest.mark.asyncio
    async def test_space_image_returns_data_uri(self, gateway, provider):
        uri = await gateway.generate_space_image(SPACE_PHOTO, "Add candles", "neon")

        assert uri == IMAGE_URI
        call = provider.last_call()
        assert call.model == gateway.models.image
        assert call.image_config.image_size is None

    @pytest.mark.asyncio
    async def test_pro_image_uses_pro_model_and_size(self):
        provider = scripted_provider()
        gateway = AIGateway(provider, models=ModelNames(image_pro="pro-image"), base_delay=0.0)

        await gateway.generate_space_image(SPACE_PHOTO, "Add candles", "", use_pro=True, size="4K")

        call = provider.last_call()
        assert call.model == "pro-image"
        assert call.image_config.image_size == "4K"

    @pytest.mark.asyncio
    async def test_unsupported_size_rejected(self, gateway, provider):
        with pytest.raises(ValueError):
            await gateway.generate_space_image(SPACE_PHOTO, "x", "", use_pro=True, size="8K")
        assert provider.call_count == 0

    @pytest.mark.asyncio
    async def test_moodboard_collage_is_wide(self, gateway, provider):
        await gateway.generate_moodboard_image("A garden at dusk")
        assert provider.last_call().image_config.aspect_ratio == "16:9"

    @pytest.mark.asyncio
    async def test_crest_gold_variant_prompt(self, gateway, provider):
        await gateway.generate_crest_image("Monogram", "gold")
        assert "gold foil" in provider.last_call().text


class TestRetryPolicy:

    @pytest.mark.asyncio
    async def test_transient_failures_then_success(self, gateway, provider):
        provider.set_error_sequence([
            QuotaExceeded("quota"),
            ServiceUnavailable("overloaded"),
        ])

        result = await gateway.analyze_asset(SPACE_PHOTO)

        assert result.summary == ANALYSIS_RESPONSE["summary"]
        assert provider.call_count == 3

    @pytest.mark.asyncio
    async def test_gives_up_after_two_retries(self, gateway, provider):
        provider.set_error_sequence([ServiceUnavailable("down")] * 3)

        with pytest.raises(ServiceUnavailable):
            await gateway.analyze_asset(SPACE_PHOTO)
        assert provider.call_count == 3

    @pytest.mark.asyncio
    async def test_invalid_response_not_retried(self, gateway, provider):
        provider.set_error_on_next(InvalidResponse("garbled"))

        with pytest.raises(InvalidResponse):
            await gateway.analyze_asset(SPACE_PHOTO)
        assert provider.call_count == 1

    @pytest.mark.asyncio
    async def test_api_error_not_retried(self, gateway, provider):
        provider.set_error_on_next(LLMException(LLMError.api_error("forbidden", 403)))

        with pytest.raises(LLMException):
            await gateway.chat([])
        assert provider.call_count == 1

    @pytest.mark.asyncio
    async def test_backoff_doubles(self, provider, monkeypatch):
        delays = []

        async def fake_sleep(delay):
            delays.append(delay)

        monkeypatch.setattr(provider, "_backoff", fake_sleep)
        provider.set_error_sequence([QuotaExceeded("q"), QuotaExceeded("q")])
        gateway = AIGateway(provider, base_delay=2.0)

        await gateway.analyze_asset(SPACE_PHOTO)

        assert delays == [2.0, 4.0]
        assert provider.call_count == 3

    @pytest.mark.asyncio
    async def test_no_backoff_without_transient_error(self, provider, monkeypatch):
        delays = []

        async def fake_sleep(delay):
            delays.append(delay)

        monkeypatch.setattr(provider, "_backoff", fake_sleep)
        gateway = AIGateway(provider, base_delay=2.0)

        await gateway.analyze_asset(SPACE_PHOTO)

        assert delays == []

    @pytest.mark.asyncio
    async def test_retry_logged(self, gateway, provider, caplog):
        provider.set_error_sequence([QuotaExceeded("quota")])

        with caplog.at_level("WARNING", logger="eventarchitect.llm.providers.base"):
            await gateway.analyze_asset(SPACE_PHOTO)

        assert any(getattr(r, "attempt", None) == 1 for r in caplog.records)


class TestChat:

    @pytest.mark.asyncio
    async def test_chat_sends_system_instruction(self, gateway, provider):
        from eventarchitect.llm import Message
        from eventarchitect.llm.prompt_builder import CHAT_SYSTEM_INSTRUCTION

        reply = await gateway.chat([Message.user("Ideas for a lounge?")])

        assert reply
        assert provider.last_call().system_instruction == CHAT_SYSTEM_INSTRUCTION

    @pytest.mark.asyncio
    async def test_empty_reply_is_invalid_response(self):
        gateway = AIGateway(MockLLMProvider(default_response="  "), base_delay=0.0)
        with pytest.raises(InvalidResponse):
            await gateway.chat([])
