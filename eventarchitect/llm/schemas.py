"""
Structured response types for generation calls.

Every structured call declares one of these models. The model's JSON
schema is sent as the response schema, and the reply is validated
against the same model; a mismatch is an InvalidResponse.
"""

from typing import Any, Dict, List, Type

from pydantic import BaseModel, ConfigDict, Field, field_validator

from eventarchitect.domain.constants import CREST_OPTION_COUNT


class ResponseModel(BaseModel):
    model_config = ConfigDict(extra="ignore")


class AssetAnalysisResult(ResponseModel):
    summary: str = Field(min_length=1)
    detected_style: List[str] = Field(default_factory=list)
    key_elements: List[str] = Field(default_factory=list)
    constraints: List[str] = Field(default_factory=list)
    risks: List[str] = Field(default_factory=list)
    suggested_questions: List[str] = Field(default_factory=list)


class BriefingPalette(ResponseModel):
    preferred: List[str] = Field(default_factory=list)
    avoid: List[str] = Field(default_factory=list)


class BriefingDirectives(ResponseModel):
    goal: str = ""
    palette: BriefingPalette = Field(default_factory=BriefingPalette)
    materials: List[str] = Field(default_factory=list)
    lighting: str = ""


class BriefingExtraction(ResponseModel):
    transcript: str
    directives: BriefingDirectives
    missing_info_questions: List[str] = Field(default_factory=list)

    @field_validator("transcript")
    @classmethod
    def transcript_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("transcript is empty")
        return value


class EditPromptSpec(ResponseModel):
    edit_prompt: str = Field(min_length=1)
    negative_prompt: str = ""
    client_summary: str = ""
    change_list: List[str] = Field(default_factory=list)
    constraints: List[str] = Field(default_factory=list)


class RefinedPrompt(ResponseModel):
    refined_prompt_en: str = Field(min_length=1)
    negative_prompt: str = ""
    client_explanation: str = ""


class MoodboardColor(ResponseModel):
    name: str
    hex: str
    role: str = ""


class MoodboardDesign(ResponseModel):
    title: str = Field(min_length=1)
    palette: List[MoodboardColor] = Field(default_factory=list)
    textures: List[str] = Field(default_factory=list)
    objects: List[str] = Field(default_factory=list)
    symbols: List[str] = Field(default_factory=list)
    short_story: str = Field(min_length=1)


class CrestConcept(ResponseModel):
    style_name: str = Field(min_length=1)
    visual_prompt: str = Field(min_length=1)
    description: str = ""
    usage_suggestion: str = ""


class CrestConceptSet(ResponseModel):
    concept_summary: str = ""
    usage_guide: List[str] = Field(default_factory=list)
    options: List[CrestConcept] = Field(
        min_length=CREST_OPTION_COUNT,
        max_length=CREST_OPTION_COUNT,
    )


# Keys the service's schema dialect understands
_SCHEMA_KEYS = frozenset((
    "type", "properties", "items", "required", "enum", "description",
    "format", "minItems", "maxItems", "nullable",
))


def _convert(node: Dict[str, Any], defs: Dict[str, Any]) -> Dict[str, Any]:
    if "$ref" in node:
        return _convert(defs[node["$ref"].split("/")[-1]], defs)

    converted: Dict[str, Any] = {}
    for key, value in node.items():
        if key not in _SCHEMA_KEYS:
            continue
        if key == "type":
            converted["type"] = value.upper()
        elif key == "properties":
            converted["properties"] = {name: _convert(prop, defs) for name, prop in value.items()}
        elif key == "items":
            converted["items"] = _convert(value, defs)
        else:
            converted[key] = value
    return converted


def to_response_schema(model: Type[BaseModel]) -> Dict[str, Any]:
    """
    Render a pydantic model as a response schema.

    $refs are inlined and JSON-schema types upper-cased; titles and
    defaults are dropped.
    """
    schema = model.model_json_schema()
    defs = schema.pop("$defs", {})
    return _convert(schema, defs)
