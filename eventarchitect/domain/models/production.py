"""Production record: checklist, timeline and budget."""

from enum import Enum
from typing import Tuple

from pydantic import Field

from eventarchitect.domain.models.base import EntityModel, new_id


class TimelineStatus(str, Enum):
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class PaymentStatus(str, Enum):
    PAID = "paid"
    PENDING = "pending"


class ChecklistItem(EntityModel):
    id: str
    label: str
    category: str
    completed: bool = False

    @classmethod
    def create(cls, label: str, category: str) -> "ChecklistItem":
        return cls(id=new_id(), label=label, category=category)


class TimelineItem(EntityModel):
    id: str
    task: str
    start: str = ""
    end: str = ""
    responsible: str = ""
    supplier: str = ""
    status: TimelineStatus = TimelineStatus.PENDING

    @classmethod
    def create(cls, task: str, **fields) -> "TimelineItem":
        return cls(id=new_id(), task=task, **fields)


class BudgetItem(EntityModel):
    id: str
    category: str
    item: str
    supplier: str = ""
    budgeted: float = 0.0
    actual: float = 0.0
    payment_method: str = ""
    installments: int = Field(default=1, ge=1)
    payment_dates: Tuple[str, ...] = ()
    status: PaymentStatus = PaymentStatus.PENDING
    notes: str = ""

    @classmethod
    def create(cls, category: str, item: str, **fields) -> "BudgetItem":
        return cls(id=new_id(), category=category, item=item, **fields)


class Production(EntityModel):
    checklist: Tuple[ChecklistItem, ...] = ()
    timeline: Tuple[TimelineItem, ...] = ()
    budget: Tuple[BudgetItem, ...] = ()
