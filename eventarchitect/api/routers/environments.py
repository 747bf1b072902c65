"""Environments and boards API router.

All edits go through the invariant layer via ProjectStore.apply.
"""

import logging

from fastapi import APIRouter, Depends, status

from eventarchitect.api.dependencies import get_store
from eventarchitect.api.schemas import (
    BoardCreateRequest,
    CrestApprovalRequest,
    EnvironmentCreateRequest,
    EnvironmentUpdateRequest,
    FixedElementsRequest,
    VariationApprovalRequest,
    project_body,
)
from eventarchitect.domain.models import Directives, Environment
from eventarchitect.domain.services import project_edits
from eventarchitect.domain.services.project_store import ProjectStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/projects/{project_id}", tags=["environments"])


def _response(store: ProjectStore, project, **extra):
    body = {"project": project_body(project), "warnings": [w.message for w in store.drain_warnings()]}
    body.update(extra)
    return body


# =============================================================================
# Environments
# =============================================================================

@router.post("/environments", status_code=status.HTTP_201_CREATED)
async def add_environment(
    project_id: str,
    request: EnvironmentCreateRequest,
    store: ProjectStore = Depends(get_store),
):
    environment = Environment.create(request.name, goal=request.goal, priority=request.priority)
    project = await store.apply(project_id, lambda p: project_edits.add_environment(p, environment))
    return _response(store, project, environment_id=environment.id)


@router.patch("/environments/{environment_id}")
async def update_environment(
    project_id: str,
    environment_id: str,
    request: EnvironmentUpdateRequest,
    store: ProjectStore = Depends(get_store),
):
    fields = request.model_dump(exclude_unset=True)
    project = await store.apply(
        project_id,
        lambda p: project_edits.update_environment_fields(p, environment_id, **fields),
    )
    return _response(store, project)


@router.delete("/environments/{environment_id}")
async def remove_environment(project_id: str, environment_id: str, store: ProjectStore = Depends(get_store)):
    project = await store.apply(project_id, lambda p: project_edits.remove_environment(p, environment_id))
    return _response(store, project)


@router.post("/environments/{environment_id}/assets/{asset_id}")
async def attach_asset(
    project_id: str,
    environment_id: str,
    asset_id: str,
    store: ProjectStore = Depends(get_store),
):
    project = await store.apply(
        project_id,
        lambda p: project_edits.attach_asset_to_environment(p, environment_id, asset_id),
    )
    return _response(store, project)


@router.delete("/environments/{environment_id}/assets/{asset_id}")
async def detach_asset(
    project_id: str,
    environment_id: str,
    asset_id: str,
    store: ProjectStore = Depends(get_store),
):
    project = await store.apply(
        project_id,
        lambda p: project_edits.detach_asset_from_environment(p, environment_id, asset_id),
    )
    return _response(store, project)


# =============================================================================
# Boards
# =============================================================================

@router.post("/environments/{environment_id}/boards", status_code=status.HTTP_201_CREATED)
async def create_board(
    project_id: str,
    environment_id: str,
    request: BoardCreateRequest,
    store: ProjectStore = Depends(get_store),
):
    board = project_edits.new_board(store.get(project_id), environment_id, request.base_asset_id)
    project = await store.apply(project_id, lambda p: project_edits.add_board(p, environment_id, board))
    return _response(store, project, board_id=board.id)


@router.delete("/environments/{environment_id}/boards/{board_id}")
async def remove_board(
    project_id: str,
    environment_id: str,
    board_id: str,
    store: ProjectStore = Depends(get_store),
):
    project = await store.apply(
        project_id, lambda p: project_edits.remove_board(p, environment_id, board_id),
    )
    return _response(store, project)


@router.put("/environments/{environment_id}/boards/{board_id}/directives")
async def update_directives(
    project_id: str,
    environment_id: str,
    board_id: str,
    directives: Directives,
    store: ProjectStore = Depends(get_store),
):
    project = await store.apply(
        project_id,
        lambda p: project_edits.update_board_directives(p, environment_id, board_id, directives),
    )
    return _response(store, project)


@router.put("/environments/{environment_id}/boards/{board_id}/fixed-elements")
async def update_fixed_elements(
    project_id: str,
    environment_id: str,
    board_id: str,
    request: FixedElementsRequest,
    store: ProjectStore = Depends(get_store),
):
    project = await store.apply(
        project_id,
        lambda p: project_edits.set_fixed_elements(p, environment_id, board_id, request.elements),
    )
    return _response(store, project)


@router.post("/environments/{environment_id}/boards/{board_id}/approval")
async def approve_variation(
    project_id: str,
    environment_id: str,
    board_id: str,
    request: VariationApprovalRequest,
    store: ProjectStore = Depends(get_store),
):
    project = await store.apply(
        project_id,
        lambda p: project_edits.approve_variation(p, environment_id, board_id, request.variation_id),
    )
    return _response(store, project)


@router.delete("/environments/{environment_id}/boards/{board_id}/approval")
async def revoke_variation_approval(
    project_id: str,
    environment_id: str,
    board_id: str,
    store: ProjectStore = Depends(get_store),
):
    project = await store.apply(
        project_id,
        lambda p: project_edits.revoke_variation_approval(p, environment_id, board_id),
    )
    return _response(store, project)


# =============================================================================
# Crest approval
# =============================================================================

@router.post("/crest/approval")
async def approve_crest_option(
    project_id: str,
    request: CrestApprovalRequest,
    store: ProjectStore = Depends(get_store),
):
    project = await store.apply(project_id, lambda p: project_edits.approve_crest_option(p, request.option_id))
    return _response(store, project)


@router.delete("/crest/approval")
async def revoke_crest_approval(project_id: str, store: ProjectStore = Depends(get_store)):
    project = await store.apply(project_id, project_edits.revoke_crest_approval)
    return _response(store, project)
