"""Project: the root aggregate."""

from enum import Enum
from typing import Optional, Tuple

from pydantic import Field

from eventarchitect.domain.models.asset import Asset
from eventarchitect.domain.models.base import EntityModel
from eventarchitect.domain.models.crest import Crest
from eventarchitect.domain.models.environment import Directives, Environment
from eventarchitect.domain.models.moodboard import Moodboard
from eventarchitect.domain.models.production import Production


class ProjectStatus(str, Enum):
    """Project lifecycle states."""
    ACTIVE = "active"
    ARCHIVED = "archived"
    COMPLETED = "completed"


class Project(EntityModel):
    """
    An event being designed.

    Ownership is a tree: environments, assets, moodboards, the crest and
    the production record belong to the project. Asset and variation ids
    held by environments and boards are lookups and may dangle after a
    delete.
    """
    id: str
    name: str
    date: str = ""
    location: str = ""
    type: str = ""
    guest_count: int = Field(default=0, ge=0)
    budget_range: str = ""
    style_tags: Tuple[str, ...] = ()
    keywords: Tuple[str, ...] = ()
    restrictions: Tuple[str, ...] = ()
    status: ProjectStatus = ProjectStatus.ACTIVE
    environments: Tuple[Environment, ...] = ()
    assets: Tuple[Asset, ...] = ()
    moodboards: Tuple[Moodboard, ...] = ()
    crest: Optional[Crest] = None
    briefing_transcript: Optional[str] = None
    briefing_directives: Optional[Directives] = None
    production: Production = Field(default_factory=Production)

    def find_environment(self, environment_id: str) -> Optional[Environment]:
        for environment in self.environments:
            if environment.id == environment_id:
                return environment
        return None

    def find_asset(self, asset_id: Optional[str]) -> Optional[Asset]:
        if not asset_id:
            return None
        for asset in self.assets:
            if asset.id == asset_id:
                return asset
        return None

    def find_moodboard(self, moodboard_id: str) -> Optional[Moodboard]:
        for moodboard in self.moodboards:
            if moodboard.id == moodboard_id:
                return moodboard
        return None
