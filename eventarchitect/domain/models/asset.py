"""Asset entities: uploaded or AI-derived binary resources."""

from enum import Enum
from typing import Optional, Tuple

from eventarchitect.domain.models.base import EntityModel, new_id


class AssetType(str, Enum):
    """Asset kinds."""
    SPACE_PHOTO = "space_photo"
    REFERENCE = "reference"
    FURNITURE = "furniture"
    PLAN_PDF = "plan_pdf"
    AUDIO = "audio"

    @classmethod
    def from_mime_type(cls, mime_type: str) -> "AssetType":
        """Classify an upload by MIME type."""
        mime_type = (mime_type or "").lower()
        if mime_type.startswith("image/"):
            return cls.SPACE_PHOTO
        if mime_type == "application/pdf":
            return cls.PLAN_PDF
        if mime_type.startswith("audio/"):
            return cls.AUDIO
        return cls.REFERENCE


# Tag applied to an asset uploaded from an environment slot
UPLOAD_CONTEXT_TAGS = {
    AssetType.SPACE_PHOTO: "Original",
    AssetType.FURNITURE: "Furniture",
    AssetType.REFERENCE: "Reference",
}

AI_EDITED_TAG = "AI Edited"


class AssetAnalysis(EntityModel):
    """Design analysis attached to an asset after upload."""
    summary: str
    detected_style: Tuple[str, ...] = ()
    key_elements: Tuple[str, ...] = ()
    constraints: Tuple[str, ...] = ()
    risks: Tuple[str, ...] = ()
    suggested_questions: Tuple[str, ...] = ()


class Asset(EntityModel):
    """
    An uploaded or generated resource owned by a project.

    Only `analysis` and `tags` may change after creation, and only once,
    when the analysis pass completes.
    """
    id: str
    type: AssetType
    data: str  # data URI or raw base64
    mime_type: Optional[str] = None
    tags: Tuple[str, ...] = ()
    analysis: Optional[AssetAnalysis] = None

    @classmethod
    def create(
        cls,
        type: AssetType,
        data: str,
        mime_type: Optional[str] = None,
        tags: Tuple[str, ...] = (),
    ) -> "Asset":
        """Create a new asset with generated ID."""
        return cls(id=new_id(), type=type, data=data, mime_type=mime_type, tags=tuple(tags))

    @property
    def is_analyzable(self) -> bool:
        """Only photos and references go through analysis."""
        return self.type in (AssetType.SPACE_PHOTO, AssetType.REFERENCE)
