"""Crest (visual identity) entities."""

from typing import Optional, Tuple

from eventarchitect.domain.models.base import EntityModel, new_id


class CrestOption(EntityModel):
    """
    One generated identity design with three rendered variants.

    Write-once. A refined design is a new option pointing back through
    `refined_from_id`.
    """
    id: str
    svg_data: str = ""
    png_uri: str
    gold_png_uri: str
    mono_png_uri: str
    prompt_used: str = ""
    style_name: str
    description: str = ""
    usage_suggestion: str = ""
    refined_from_id: Optional[str] = None

    @classmethod
    def create(cls, style_name: str, png_uri: str, gold_png_uri: str, mono_png_uri: str, **fields) -> "CrestOption":
        return cls(
            id=new_id(),
            style_name=style_name,
            png_uri=png_uri,
            gold_png_uri=gold_png_uri,
            mono_png_uri=mono_png_uri,
            **fields,
        )


class Crest(EntityModel):
    id: str
    initials: str
    style: str = ""
    concept: str = ""
    options: Tuple[CrestOption, ...] = ()
    approved_option_id: Optional[str] = None
    usage_guide: Tuple[str, ...] = ()

    @classmethod
    def create(cls, initials: str, **fields) -> "Crest":
        return cls(id=new_id(), initials=initials, **fields)

    def find_option(self, option_id: str) -> Optional[CrestOption]:
        for option in self.options:
            if option.id == option_id:
                return option
        return None

    @property
    def approved_option(self) -> Optional[CrestOption]:
        if not self.approved_option_id:
            return None
        return self.find_option(self.approved_option_id)
