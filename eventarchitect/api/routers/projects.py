"""Projects API router.

- GET /api/v1/projects - List projects (optionally by status)
- POST /api/v1/projects - Create project from defaults
- GET/PATCH/DELETE /api/v1/projects/{id}
- POST /api/v1/projects/{id}/duplicate | select | status | publish
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from eventarchitect.api.dependencies import get_store
from eventarchitect.api.schemas import (
    ProjectCreateRequest,
    ProjectListResponse,
    ProjectStatusRequest,
    ProjectUpdateRequest,
    project_body,
)
from eventarchitect.domain.models import ProjectStatus
from eventarchitect.domain.services import project_edits
from eventarchitect.domain.services.project_factory import ProjectTemplate
from eventarchitect.domain.services.project_store import ProjectStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/projects", tags=["projects"])


def _warnings(store: ProjectStore):
    return [w.message for w in store.drain_warnings()]


@router.get("", response_model=ProjectListResponse)
async def list_projects(
    status_filter: Optional[ProjectStatus] = Query(None, alias="status"),
    store: ProjectStore = Depends(get_store),
):
    projects = store.list(status_filter)
    return ProjectListResponse(
        projects=[project_body(p) for p in projects],
        total=len(projects),
        active_project_id=store.active_project_id,
        warnings=_warnings(store),
    )


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_project(
    request: ProjectCreateRequest,
    store: ProjectStore = Depends(get_store),
):
    fields = {k: v for k, v in request.model_dump().items() if v is not None}
    project = await store.create(ProjectTemplate(**fields))
    return {"project": project_body(project), "warnings": _warnings(store)}


@router.get("/{project_id}")
async def get_project(project_id: str, store: ProjectStore = Depends(get_store)):
    return {"project": project_body(store.get(project_id))}


@router.patch("/{project_id}")
async def update_project(
    project_id: str,
    request: ProjectUpdateRequest,
    store: ProjectStore = Depends(get_store),
):
    fields = request.model_dump(exclude_unset=True)
    project = await store.apply(project_id, lambda p: project_edits.update_project_fields(p, **fields))
    return {"project": project_body(project), "warnings": _warnings(store)}


@router.delete("/{project_id}")
async def delete_project(project_id: str, store: ProjectStore = Depends(get_store)):
    await store.delete(project_id)
    return {"deleted": project_id, "warnings": _warnings(store)}


@router.post("/{project_id}/duplicate", status_code=status.HTTP_201_CREATED)
async def duplicate_project(project_id: str, store: ProjectStore = Depends(get_store)):
    copy = await store.duplicate(project_id)
    return {"project": project_body(copy), "warnings": _warnings(store)}


@router.post("/{project_id}/select")
async def select_project(project_id: str, store: ProjectStore = Depends(get_store)):
    project = store.select(project_id)
    return {"active_project_id": project.id}


@router.delete("/selection/active")
async def clear_selection(store: ProjectStore = Depends(get_store)):
    store.select(None)
    return {"active_project_id": None}


@router.post("/{project_id}/status")
async def set_project_status(
    project_id: str,
    request: ProjectStatusRequest,
    store: ProjectStore = Depends(get_store),
):
    project = await store.set_status(project_id, request.status)
    return {"project": project_body(project), "warnings": _warnings(store)}


@router.post("/{project_id}/publish")
async def publish_project(project_id: str, store: ProjectStore = Depends(get_store)):
    """Mark the project completed (the dossier was delivered)."""
    project = await store.set_status(project_id, ProjectStatus.COMPLETED)
    logger.info(f"Published project {project_id}")
    return {"project": project_body(project), "warnings": _warnings(store)}
