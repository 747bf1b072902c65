"""Production API router: checklist, timeline and budget."""

import logging
from dataclasses import asdict

from fastapi import APIRouter, Depends, status

from eventarchitect.api.dependencies import get_store
from eventarchitect.api.schemas import (
    BudgetItemRequest,
    BudgetItemUpdateRequest,
    TimelineItemRequest,
    TimelineItemUpdateRequest,
)
from eventarchitect.domain.models import BudgetItem, Project, TimelineItem
from eventarchitect.domain.services import production_edits
from eventarchitect.domain.services.project_store import ProjectStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/projects/{project_id}/production", tags=["production"])


def _production_response(store: ProjectStore, project: Project, **extra):
    body = {
        "production": project.production.model_dump(mode="json"),
        "totals": asdict(production_edits.budget_totals(project.production)),
        "warnings": [w.message for w in store.drain_warnings()],
    }
    body.update(extra)
    return body


@router.get("")
async def get_production(project_id: str, store: ProjectStore = Depends(get_store)):
    return _production_response(store, store.get(project_id))


@router.post("/checklist/{item_id}/toggle")
async def toggle_checklist_item(project_id: str, item_id: str, store: ProjectStore = Depends(get_store)):
    project = await store.apply(project_id, lambda p: production_edits.toggle_checklist_item(p, item_id))
    return _production_response(store, project)


@router.post("/timeline", status_code=status.HTTP_201_CREATED)
async def add_timeline_item(
    project_id: str,
    request: TimelineItemRequest,
    store: ProjectStore = Depends(get_store),
):
    fields = request.model_dump()
    item = TimelineItem.create(fields.pop("task"), **fields)
    project = await store.apply(project_id, lambda p: production_edits.add_timeline_item(p, item))
    return _production_response(store, project, item_id=item.id)


@router.patch("/timeline/{item_id}")
async def update_timeline_item(
    project_id: str,
    item_id: str,
    request: TimelineItemUpdateRequest,
    store: ProjectStore = Depends(get_store),
):
    fields = request.model_dump(exclude_unset=True)
    project = await store.apply(project_id, lambda p: production_edits.update_timeline_item(p, item_id, **fields))
    return _production_response(store, project)


@router.delete("/timeline/{item_id}")
async def remove_timeline_item(project_id: str, item_id: str, store: ProjectStore = Depends(get_store)):
    project = await store.apply(project_id, lambda p: production_edits.remove_timeline_item(p, item_id))
    return _production_response(store, project)


@router.post("/budget", status_code=status.HTTP_201_CREATED)
async def add_budget_item(
    project_id: str,
    request: BudgetItemRequest,
    store: ProjectStore = Depends(get_store),
):
    fields = request.model_dump()
    item = BudgetItem.create(fields.pop("category"), fields.pop("item"), **fields)
    project = await store.apply(project_id, lambda p: production_edits.add_budget_item(p, item))
    return _production_response(store, project, item_id=item.id)


@router.patch("/budget/{item_id}")
async def update_budget_item(
    project_id: str,
    item_id: str,
    request: BudgetItemUpdateRequest,
    store: ProjectStore = Depends(get_store),
):
    fields = request.model_dump(exclude_unset=True)
    project = await store.apply(project_id, lambda p: production_edits.update_budget_item(p, item_id, **fields))
    return _production_response(store, project)


@router.delete("/budget/{item_id}")
async def remove_budget_item(project_id: str, item_id: str, store: ProjectStore = Depends(get_store)):
    project = await store.apply(project_id, lambda p: production_edits.remove_budget_item(p, item_id))
    return _production_response(store, project)
