"""Request/response models for the v1 API."""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from eventarchitect.domain.models import (
    AssetType,
    PaymentStatus,
    Priority,
    Project,
    ProjectStatus,
    TimelineStatus,
)
from eventarchitect.domain.workflow import WorkflowOutcome


# =============================================================================
# Projects
# =============================================================================

class ProjectCreateRequest(BaseModel):
    """Request body for creating a project. Omitted fields take defaults."""
    name: Optional[str] = Field(None, max_length=200)
    date: Optional[str] = None
    location: str = ""
    type: Optional[str] = None
    guest_count: Optional[int] = Field(None, ge=0)
    budget_range: Optional[str] = None
    style_tags: List[str] = Field(default_factory=list)
    keywords: List[str] = Field(default_factory=list)
    restrictions: List[str] = Field(default_factory=list)


class ProjectUpdateRequest(BaseModel):
    """Partial update; only fields present in the body are changed."""
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    date: Optional[str] = None
    location: Optional[str] = None
    type: Optional[str] = None
    guest_count: Optional[int] = Field(None, ge=0)
    budget_range: Optional[str] = None
    style_tags: Optional[List[str]] = None
    keywords: Optional[List[str]] = None
    restrictions: Optional[List[str]] = None


class ProjectStatusRequest(BaseModel):
    status: ProjectStatus


class ProjectListResponse(BaseModel):
    projects: List[Dict[str, Any]]
    total: int
    active_project_id: Optional[str] = None
    warnings: List[str] = Field(default_factory=list)


# =============================================================================
# Environments, assets, boards
# =============================================================================

class EnvironmentCreateRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    goal: str = ""
    priority: Priority = Priority.MEDIUM


class EnvironmentUpdateRequest(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    goal: Optional[str] = None
    priority: Optional[Priority] = None


class AssetUploadRequest(BaseModel):
    """
    Upload one asset.

    Without `type` the asset is classified by MIME type. Uploading into
    an environment also attaches the asset to the matching slot.
    """
    data: str = Field(..., min_length=1)
    mime_type: str = "image/png"
    type: Optional[AssetType] = None
    tags: Optional[List[str]] = None
    environment_id: Optional[str] = None


class BoardCreateRequest(BaseModel):
    base_asset_id: Optional[str] = None


class FixedElementsRequest(BaseModel):
    elements: List[str] = Field(default_factory=list)


class VariationApprovalRequest(BaseModel):
    variation_id: str


class CrestApprovalRequest(BaseModel):
    option_id: str


# =============================================================================
# Production
# =============================================================================

class TimelineItemRequest(BaseModel):
    task: str = Field(..., min_length=1)
    start: str = ""
    end: str = ""
    responsible: str = ""
    supplier: str = ""
    status: TimelineStatus = TimelineStatus.PENDING


class TimelineItemUpdateRequest(BaseModel):
    task: Optional[str] = Field(None, min_length=1)
    start: Optional[str] = None
    end: Optional[str] = None
    responsible: Optional[str] = None
    supplier: Optional[str] = None
    status: Optional[TimelineStatus] = None


class BudgetItemRequest(BaseModel):
    category: str = Field(..., min_length=1)
    item: str = Field(..., min_length=1)
    supplier: str = ""
    budgeted: float = 0.0
    actual: float = 0.0
    payment_method: str = ""
    installments: int = Field(1, ge=1)
    payment_dates: List[str] = Field(default_factory=list)
    status: PaymentStatus = PaymentStatus.PENDING
    notes: str = ""


class BudgetItemUpdateRequest(BaseModel):
    category: Optional[str] = None
    item: Optional[str] = None
    supplier: Optional[str] = None
    budgeted: Optional[float] = None
    actual: Optional[float] = None
    payment_method: Optional[str] = None
    installments: Optional[int] = Field(None, ge=1)
    payment_dates: Optional[List[str]] = None
    status: Optional[PaymentStatus] = None
    notes: Optional[str] = None


# =============================================================================
# Generation
# =============================================================================

class BriefingTextRequest(BaseModel):
    text: str = ""


class BriefingAudioRequest(BaseModel):
    data: str = ""
    mime_type: str = "audio/webm"


class QuickEditRequest(BaseModel):
    prompt: str = ""


class RefinePromptRequest(BaseModel):
    text: str = ""


class ProposalRequest(BaseModel):
    refined_prompt_en: str = Field(..., min_length=1)
    negative_prompt: str = ""
    client_explanation: str = ""
    use_pro: bool = False
    size: str = "1K"


class CrestGenerateRequest(BaseModel):
    initials: str = ""
    host_name: str = ""
    symbols: str = ""
    forbidden: str = ""
    selected_style: Optional[str] = None


class CrestRefineRequest(BaseModel):
    edit_prompt: Optional[str] = None


class MoodboardRequest(BaseModel):
    environment_id: Optional[str] = None


# =============================================================================
# Chat
# =============================================================================

class ChatMessageRequest(BaseModel):
    text: str = ""


# =============================================================================
# Helpers
# =============================================================================

def project_body(project: Project) -> Dict[str, Any]:
    return project.model_dump(mode="json")


def outcome_body(outcome: WorkflowOutcome) -> Dict[str, Any]:
    """Outcome summary plus the merged project, when there is one."""
    body = outcome.to_dict()
    body["project"] = project_body(outcome.project) if outcome.project else None
    return body
