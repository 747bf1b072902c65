"""Moodboard entities. Not versioned: regeneration creates a new moodboard."""

from typing import Optional, Tuple

from eventarchitect.domain.models.base import EntityModel, new_id


class PaletteColor(EntityModel):
    name: str
    hex: str
    role: str = ""


class Moodboard(EntityModel):
    id: str
    environment_id: Optional[str] = None
    title: str
    palette: Tuple[PaletteColor, ...] = ()
    textures: Tuple[str, ...] = ()
    objects: Tuple[str, ...] = ()
    symbols: Tuple[str, ...] = ()
    short_story: str = ""
    collage_image_uri: Optional[str] = None
    tile_image_uris: Tuple[str, ...] = ()

    @classmethod
    def create(cls, title: str, **fields) -> "Moodboard":
        return cls(id=new_id(), title=title, **fields)
