"""
Entity model for EventArchitect.

Project -> Environments -> Boards -> BoardVersions -> Variations
Project -> Assets, Moodboards, Crest -> CrestOptions, Production
"""

from eventarchitect.domain.models.base import EntityModel, new_id, utc_now
from eventarchitect.domain.models.asset import (
    AI_EDITED_TAG,
    UPLOAD_CONTEXT_TAGS,
    Asset,
    AssetAnalysis,
    AssetType,
)
from eventarchitect.domain.models.environment import (
    Board,
    BoardVariation,
    BoardVersion,
    Directives,
    Environment,
    Palette,
    Priority,
)
from eventarchitect.domain.models.moodboard import Moodboard, PaletteColor
from eventarchitect.domain.models.crest import Crest, CrestOption
from eventarchitect.domain.models.production import (
    BudgetItem,
    ChecklistItem,
    PaymentStatus,
    Production,
    TimelineItem,
    TimelineStatus,
)
from eventarchitect.domain.models.project import Project, ProjectStatus

__all__ = [
    "EntityModel",
    "new_id",
    "utc_now",
    "AI_EDITED_TAG",
    "UPLOAD_CONTEXT_TAGS",
    "Asset",
    "AssetAnalysis",
    "AssetType",
    "Board",
    "BoardVariation",
    "BoardVersion",
    "Directives",
    "Environment",
    "Palette",
    "Priority",
    "Moodboard",
    "PaletteColor",
    "Crest",
    "CrestOption",
    "BudgetItem",
    "ChecklistItem",
    "PaymentStatus",
    "Production",
    "TimelineItem",
    "TimelineStatus",
    "Project",
    "ProjectStatus",
]
