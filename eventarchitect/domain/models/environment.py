"""
Environment and board entities.

An Environment is a named sub-space of the event. Each Environment owns
Boards; each Board owns an append-only history of BoardVersions, and
each BoardVersion holds one or more write-once Variations.
"""

from datetime import datetime
from enum import Enum
from typing import Iterator, Optional, Tuple

from pydantic import Field

from eventarchitect.domain.models.base import EntityModel, new_id, utc_now


class Priority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class Palette(EntityModel):
    preferred: Tuple[str, ...] = ()
    avoid: Tuple[str, ...] = ()


class Directives(EntityModel):
    """Structured creative brief driving image generation."""
    goal: str = ""
    palette: Palette = Field(default_factory=Palette)
    materials: Tuple[str, ...] = ()
    lighting: str = "Natural"
    must_have: Tuple[str, ...] = ()
    avoid: Tuple[str, ...] = ()
    level_of_sophistication: int = Field(default=3, ge=1, le=5)
    decor_density: str = "Balanced"
    budget_target: str = ""
    notes: str = ""


class BoardVariation(EntityModel):
    """One generated image result plus its prompt provenance. Write-once."""
    id: str
    name: str
    image_url: str
    client_summary: str = ""
    change_list: Tuple[str, ...] = ()
    edit_prompt: str = ""
    negative_prompt: str = ""
    constraints: Tuple[str, ...] = ()

    @classmethod
    def create(cls, name: str, image_url: str, **fields) -> "BoardVariation":
        return cls(id=new_id(), name=name, image_url=image_url, **fields)


class BoardVersion(EntityModel):
    """A timestamped batch of variations from a single generation call."""
    id: str
    created_at: datetime
    variations: Tuple[BoardVariation, ...]

    @classmethod
    def create(cls, variations) -> "BoardVersion":
        return cls(id=new_id(), created_at=utc_now(), variations=tuple(variations))


class Board(EntityModel):
    """
    Visualization workspace for one environment.

    `history` is append-only. `approved_variation_id`, when set, names a
    variation somewhere in `history`.
    """
    id: str
    environment_id: str
    base_asset_id: Optional[str] = None
    directives: Directives = Field(default_factory=Directives)
    history: Tuple[BoardVersion, ...] = ()
    approved_variation_id: Optional[str] = None
    fixed_elements: Tuple[str, ...] = ()

    @classmethod
    def create(
        cls,
        environment_id: str,
        base_asset_id: Optional[str] = None,
        directives: Optional[Directives] = None,
    ) -> "Board":
        return cls(
            id=new_id(),
            environment_id=environment_id,
            base_asset_id=base_asset_id,
            directives=directives or Directives(),
        )

    def iter_variations(self) -> Iterator[BoardVariation]:
        for version in self.history:
            yield from version.variations

    def find_variation(self, variation_id: str) -> Optional[BoardVariation]:
        for variation in self.iter_variations():
            if variation.id == variation_id:
                return variation
        return None

    @property
    def approved_variation(self) -> Optional[BoardVariation]:
        if not self.approved_variation_id:
            return None
        return self.find_variation(self.approved_variation_id)

    @property
    def latest_version(self) -> Optional[BoardVersion]:
        return self.history[-1] if self.history else None


class Environment(EntityModel):
    """A named sub-space of the event (e.g. "Lounge")."""
    id: str
    name: str
    goal: str = ""
    priority: Priority = Priority.MEDIUM
    before_asset_id: Optional[str] = None
    reference_asset_ids: Tuple[str, ...] = ()
    furniture_asset_ids: Tuple[str, ...] = ()
    boards: Tuple[Board, ...] = ()

    @classmethod
    def create(cls, name: str, goal: str = "", priority: Priority = Priority.MEDIUM) -> "Environment":
        return cls(id=new_id(), name=name, goal=goal, priority=priority)

    def find_board(self, board_id: str) -> Optional[Board]:
        for board in self.boards:
            if board.id == board_id:
                return board
        return None

    @property
    def primary_board(self) -> Optional[Board]:
        """The first board; dossier and expert proposals target it."""
        return self.boards[0] if self.boards else None
