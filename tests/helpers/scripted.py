"""
Canned generation responses and test doubles shared across the suite.

The mock provider answers by prompt substring; the triggers below are
fragments of the prompts in eventarchitect.llm.prompt_builder.
"""

import asyncio
from typing import List, Sequence

from eventarchitect.domain.models import Project
from eventarchitect.llm import MockLLMProvider
from eventarchitect.llm.prompt_builder import CREST_STYLE_DIRECTIONS
from eventarchitect.llm.providers.mock import DEFAULT_IMAGE_DATA
from eventarchitect.persistence import StorageUnavailable, StorageWriteError


IMAGE_URI = f"data:image/png;base64,{DEFAULT_IMAGE_DATA}"
SPACE_PHOTO = "data:image/jpeg;base64,/9j/4AAQSkZJRg=="

ANALYSIS_RESPONSE = {
    "summary": "Large hall with high ceilings and wooden floor",
    "detected_style": ["Rustic", "Industrial"],
    "key_elements": ["Wooden beams", "Large windows"],
    "constraints": ["Low power outlets"],
    "risks": ["Echo"],
    "suggested_questions": ["Can we hang items from the beams?"],
}

BRIEFING_RESPONSE = {
    "transcript": "We want a romantic garden wedding in sage and ivory.",
    "directives": {
        "goal": "Romantic garden atmosphere",
        "palette": {"preferred": ["sage", "ivory"], "avoid": ["neon"]},
        "materials": ["linen", "wood"],
        "lighting": "Warm candlelight",
    },
    "missing_info_questions": ["How many guests?", "Indoor or outdoor ceremony?"],
}

EDIT_PROMPT_RESPONSE = {
    "edit_prompt": "Add sage linen tablecloths and warm candlelight",
    "negative_prompt": "neon, plastic",
    "client_summary": "Mesas com linho e luz de velas",
    "change_list": ["Tablecloths", "Candles"],
    "constraints": ["Keep the windows"],
}

REFINED_RESPONSE = {
    "refined_prompt_en": "Elegant lounge with velvet sofas and brass lamps",
    "negative_prompt": "clutter",
    "client_explanation": "Um lounge elegante",
}

MOODBOARD_RESPONSE = {
    "title": "Secret Garden",
    "palette": [
        {"name": "Sage", "hex": "#9CAF88", "role": "primary"},
        {"name": "Ivory", "hex": "#FFFFF0", "role": "background"},
    ],
    "textures": ["linen", "moss"],
    "objects": ["lanterns"],
    "symbols": ["ivy"],
    "short_story": "A quiet garden at dusk, lit by lanterns.",
}

CREST_CONCEPTS_RESPONSE = {
    "concept_summary": "Six directions around the couple's initials",
    "usage_guide": ["Invitations", "Napkins"],
    "options": [
        {
            "style_name": name,
            "visual_prompt": f"{name} crest prompt",
            "description": direction,
            "usage_suggestion": "Stationery",
        }
        for name, direction in CREST_STYLE_DIRECTIONS.items()
    ],
}

CHAT_RESPONSE = "Consider uplighting the beams."

SCRIPTED_RESPONSES = {
    "Analyze this image": ANALYSIS_RESPONSE,
    "extract structured directives": BRIEFING_RESPONSE,
    "generate a professional image prompt": EDIT_PROMPT_RESPONSE,
    "Refine this user request": REFINED_RESPONSE,
    "Generate a conceptual moodboard": MOODBOARD_RESPONSE,
    "Senior Art Director": CREST_CONCEPTS_RESPONSE,
}


def scripted_provider(**kwargs) -> MockLLMProvider:
    """Mock provider answering every gateway call type."""
    return MockLLMProvider(
        default_response=CHAT_RESPONSE,
        responses=dict(SCRIPTED_RESPONSES),
        **kwargs,
    )


class FailingRepository:
    """Storage gateway that rejects every read and write."""

    def __init__(self):
        self.save_attempts = 0

    async def save_all(self, projects: Sequence[Project]) -> None:
        self.save_attempts += 1
        raise StorageWriteError("quota exceeded")

    async def load_all(self) -> List[Project]:
        raise StorageUnavailable("database cannot be opened")


class GatedProvider(MockLLMProvider):
    """
    Scripted provider that parks every call until released.

    Lets a test change the project while a generation is in flight.
    """

    def __init__(self, **kwargs):
        super().__init__(
            default_response=CHAT_RESPONSE,
            responses=dict(SCRIPTED_RESPONSES),
            **kwargs,
        )
        self.started = asyncio.Event()
        self.release = asyncio.Event()

    async def generate(self, contents, model, **kwargs):
        self.started.set()
        await self.release.wait()
        return await super().generate(contents, model, **kwargs)
