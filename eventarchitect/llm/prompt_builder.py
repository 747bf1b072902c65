"""Prompt builder for generation calls."""

import json
from typing import Any, Dict, List, Optional, Sequence

from eventarchitect.domain.constants import CREST_OPTION_COUNT


CHAT_SYSTEM_INSTRUCTION = (
    "You are an expert event architect. Assist the user with creative and "
    "technical advice for event planning and decoration."
)

ASSET_ANALYSIS_PROMPT = (
    "Analyze this image for an event decoration project. Provide a summary, "
    "a list of detected styles, key elements, constraints, potential risks, "
    "and suggested questions for the client."
)

AUDIO_BRIEFING_PROMPT = (
    "Transcribe this event briefing and extract structured directives "
    "including the goal, color palette (preferred/avoid), materials, and "
    "lighting. Identify missing information as follow-up questions."
)

TEXT_BRIEFING_PROMPT = (
    "Read this event briefing and extract structured directives including "
    "the goal, color palette (preferred/avoid), materials, and lighting. "
    "Echo the briefing as the transcript. Identify missing information as "
    "follow-up questions.\n\nBriefing:\n{text}"
)

# Design direction per crest style, used when no style is selected
CREST_STYLE_DIRECTIONS = {
    "Classic": "Shield, serif monogram, symmetrical ornaments.",
    "Modern": "Geometry, clean lines, premium minimalism.",
    "Contemporary": "Classic/current mix, editorial typography.",
    "Minimalist": "Negative space, hairline frame, zero excess.",
    "Romantic": "Soft curves, light arabesques, organic.",
    "Gothic": "Blackletter, dramatic, elegant, angular lines.",
}

CREST_COLOR_SUFFIXES = {
    "default": "",
    "gold": " | Metallic 3D embossed gold foil texture, luxury high shine gold.",
    "black": " | Solid flat black silhouette, high contrast.",
}

CREST_TRANSFORM_INSTRUCTIONS = {
    "gold": "Apply metallic 3D embossed gold foil texture to this logo. Luxury gold.",
    "black": "Convert this logo to solid flat black, high contrast.",
}

DEFAULT_NEGATIVE_PROMPT = "blurry, distorted, low quality"


def _as_json(value: Any) -> str:
    return json.dumps(value, ensure_ascii=False, default=str)


class PromptBuilder:
    """Builds the text of each generation call."""

    def __init__(self, client_language: str = "Portuguese"):
        """
        Args:
            client_language: Language of client-facing summaries. Image
                prompts are always English.
        """
        self.client_language = client_language

    def edit_prompt(
        self,
        directives: Dict[str, Any],
        space_analysis: Optional[Dict[str, Any]],
        fixed_elements: Sequence[str],
    ) -> str:
        return (
            f"Based on these directives: {_as_json(directives)}, "
            f"space analysis: {_as_json(space_analysis or {})}, "
            f"and fixed elements: {', '.join(fixed_elements) or 'none'}, "
            "generate a professional image prompt for an event decoration proposal. "
            "Fixed elements must be preserved exactly. "
            f"Return prompts in English and the client summary in {self.client_language}."
        )

    def refine_prompt(self, user_text: str, context: Dict[str, Any]) -> str:
        return (
            f'Refine this user request for a design visualization: "{user_text}". '
            f"Context: {_as_json(context)}. Provide a detailed English prompt, a "
            f"negative prompt, and an explanation for the client in {self.client_language}."
        )

    def space_image(self, prompt: str, negative_prompt: str) -> str:
        return (
            f"Decorate this space following these instructions: {prompt}. "
            f"Do not include: {negative_prompt or DEFAULT_NEGATIVE_PROMPT}. "
            "Photorealistic, architectural style."
        )

    def moodboard(self, inputs: Dict[str, Any]) -> str:
        return (
            f"Generate a conceptual moodboard based on these inputs: {_as_json(inputs)}. "
            "Provide a title, color palette, textures, objects, symbols, and a short story."
        )

    def moodboard_collage(self, story: str) -> str:
        return f"A professional design moodboard collage for this concept: {story}"

    def crest_concepts(
        self,
        initials: str,
        host_name: str,
        event_type: str,
        palette: Any,
        symbols: str,
        forbidden: str,
        selected_style: Optional[str] = None,
    ) -> str:
        if selected_style:
            style_instruction = (
                f'The user selected the style "{selected_style}". Generate '
                f"{CREST_OPTION_COUNT} visually distinct variations WITHIN this language."
            )
        else:
            directions: List[str] = [
                f"{index}. {name.upper()}: {direction}"
                for index, (name, direction) in enumerate(CREST_STYLE_DIRECTIONS.items(), start=1)
            ]
            style_instruction = (
                f"Generate EXACTLY {CREST_OPTION_COUNT} options, one for each mandatory direction:\n"
                + "\n".join(directions)
            )

        return (
            "You are a Senior Art Director specialised in visual identity for luxury events.\n"
            f'Initials: "{initials}". Host: "{host_name}". Type: "{event_type}".\n'
            f'Palette: {_as_json(palette)}. Symbols: "{symbols}". Forbidden: "{forbidden}".\n\n'
            f"{style_instruction}\n\n"
            "TECHNICAL RULES:\n"
            "- Each option must have a UNIQUE structure, frame and typography.\n"
            "- Flat vector/logo style, pure white background.\n"
            "- For corporate events use institutional language (no crowns).\n"
            "- Image prompts must be in ENGLISH and highly detailed."
        )

    def crest_image(self, prompt: str, color_style: str = "default") -> str:
        base = (
            f"{prompt} | Isolated on pure white background, symmetrical logo, "
            "professional vector branding, flat graphics."
        )
        return base + CREST_COLOR_SUFFIXES.get(color_style, "")

    def crest_variation(self, edit_prompt: str) -> str:
        return (
            f"Create a slight visual variation of this logo based on: {edit_prompt}. "
            "Maintain core structure but adjust minor ornaments and spacing. Pure white background."
        )

    def crest_transform(self, variant: str) -> str:
        return CREST_TRANSFORM_INSTRUCTIONS[variant]
