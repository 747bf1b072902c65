"""Workflow outcomes: what a generation run reports back to its caller."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from eventarchitect.domain.models import Project
from eventarchitect.llm.models import InvalidResponse, LLMException, QuotaExceeded, ServiceUnavailable


class OutcomeStatus(str, Enum):
    """Terminal states of a workflow run."""
    COMPLETED = "completed"   # everything succeeded and was merged
    PARTIAL = "partial"       # some batch items failed, the rest were merged
    FAILED = "failed"         # nothing merged; state untouched
    DISCARDED = "discarded"   # result dropped because its target vanished


@dataclass
class ItemFailure:
    """One failed item of a parallel batch."""
    index: int
    label: str
    error_type: str
    message: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "index": self.index,
            "label": self.label,
            "error_type": self.error_type,
            "message": self.message,
        }


@dataclass
class WorkflowOutcome:
    """Result of a workflow run. Workflows return this instead of raising."""
    workflow: str
    status: OutcomeStatus
    message: str = ""
    project: Optional[Project] = None
    failures: List[ItemFailure] = field(default_factory=list)
    data: Dict[str, Any] = field(default_factory=dict)
    warnings: List[str] = field(default_factory=list)

    @property
    def succeeded(self) -> bool:
        return self.status in (OutcomeStatus.COMPLETED, OutcomeStatus.PARTIAL)

    @classmethod
    def completed(cls, workflow: str, project: Optional[Project] = None, message: str = "", **data) -> "WorkflowOutcome":
        return cls(workflow=workflow, status=OutcomeStatus.COMPLETED, message=message, project=project, data=data)

    @classmethod
    def failed(cls, workflow: str, message: str, **data) -> "WorkflowOutcome":
        return cls(workflow=workflow, status=OutcomeStatus.FAILED, message=message, data=data)

    @classmethod
    def discarded(cls, workflow: str, message: str) -> "WorkflowOutcome":
        return cls(workflow=workflow, status=OutcomeStatus.DISCARDED, message=message)

    def to_dict(self) -> Dict[str, Any]:
        """Summary without the project body (API responses add it separately)."""
        return {
            "workflow": self.workflow,
            "status": self.status.value,
            "message": self.message,
            "failures": [f.to_dict() for f in self.failures],
            "data": self.data,
            "warnings": self.warnings,
        }


def describe_llm_error(error: LLMException) -> str:
    """User-facing text for a generation failure."""
    if isinstance(error, InvalidResponse):
        return "Could not extract usable information from the AI response. Try again with more detail."
    if isinstance(error, QuotaExceeded):
        return "The AI service quota is exhausted. Please try again later."
    if isinstance(error, ServiceUnavailable):
        return "The AI service is temporarily unavailable. Please try again."
    return f"The AI request failed: {error}"
