"""Pure edits over the production record (checklist, timeline, budget)."""

from dataclasses import dataclass
from typing import Sequence

from pydantic import ValidationError

from eventarchitect.domain.exceptions import DuplicateIdentity, InvalidEdit, ProductionItemNotFound
from eventarchitect.domain.models import (
    BudgetItem,
    EntityModel,
    PaymentStatus,
    Production,
    Project,
    TimelineItem,
)


TIMELINE_EDITABLE_FIELDS = frozenset(("task", "start", "end", "responsible", "supplier", "status"))

BUDGET_EDITABLE_FIELDS = frozenset((
    "category", "item", "supplier", "budgeted", "actual", "payment_method",
    "installments", "payment_dates", "status", "notes",
))


@dataclass(frozen=True)
class BudgetTotals:
    """Sums over the budget lines."""
    budgeted: float
    actual: float
    paid: float
    pending: float


def _with_production(project: Project, **changes) -> Project:
    return project.model_copy(update={"production": project.production.model_copy(update=changes)})


def _find(items: Sequence[EntityModel], item_id: str) -> EntityModel:
    for item in items:
        if item.id == item_id:
            return item
    raise ProductionItemNotFound(item_id)


def _edited(item: EntityModel, fields: dict, allowed: frozenset) -> EntityModel:
    unknown = set(fields) - allowed
    if unknown:
        raise InvalidEdit(f"Fields cannot be edited: {', '.join(sorted(unknown))}")
    data = item.model_dump()
    data.update(fields)
    try:
        return type(item).model_validate(data)
    except ValidationError as e:
        raise InvalidEdit(f"Invalid value: {e.errors()[0].get('msg', str(e))}") from e


def _replace(items: Sequence[EntityModel], replacement: EntityModel) -> tuple:
    return tuple(replacement if item.id == replacement.id else item for item in items)


def toggle_checklist_item(project: Project, item_id: str) -> Project:
    item = _find(project.production.checklist, item_id)
    toggled = item.model_copy(update={"completed": not item.completed})
    return _with_production(project, checklist=_replace(project.production.checklist, toggled))


def add_timeline_item(project: Project, item: TimelineItem) -> Project:
    if any(existing.id == item.id for existing in project.production.timeline):
        raise DuplicateIdentity("timeline", item.id)
    return _with_production(project, timeline=project.production.timeline + (item,))


def update_timeline_item(project: Project, item_id: str, **fields) -> Project:
    item = _find(project.production.timeline, item_id)
    updated = _edited(item, fields, TIMELINE_EDITABLE_FIELDS)
    return _with_production(project, timeline=_replace(project.production.timeline, updated))


def remove_timeline_item(project: Project, item_id: str) -> Project:
    _find(project.production.timeline, item_id)
    return _with_production(
        project,
        timeline=tuple(i for i in project.production.timeline if i.id != item_id),
    )


def add_budget_item(project: Project, item: BudgetItem) -> Project:
    if any(existing.id == item.id for existing in project.production.budget):
        raise DuplicateIdentity("budget", item.id)
    return _with_production(project, budget=project.production.budget + (item,))


def update_budget_item(project: Project, item_id: str, **fields) -> Project:
    item = _find(project.production.budget, item_id)
    updated = _edited(item, fields, BUDGET_EDITABLE_FIELDS)
    return _with_production(project, budget=_replace(project.production.budget, updated))


def remove_budget_item(project: Project, item_id: str) -> Project:
    _find(project.production.budget, item_id)
    return _with_production(
        project,
        budget=tuple(i for i in project.production.budget if i.id != item_id),
    )


def budget_totals(production: Production) -> BudgetTotals:
    """
    Paid sums the actual cost of settled lines; pending sums what is
    still owed on open lines (actual when known, otherwise budgeted).
    """
    paid = 0.0
    pending = 0.0
    for line in production.budget:
        if line.status == PaymentStatus.PAID:
            paid += line.actual
        else:
            pending += line.actual or line.budgeted
    return BudgetTotals(
        budgeted=sum((line.budgeted for line in production.budget), 0.0),
        actual=sum((line.actual for line in production.budget), 0.0),
        paid=paid,
        pending=pending,
    )
