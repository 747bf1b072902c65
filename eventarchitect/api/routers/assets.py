"""Assets API router: uploads and deletions."""

import logging

from fastapi import APIRouter, Depends, status

from eventarchitect.api.dependencies import get_store
from eventarchitect.api.schemas import AssetUploadRequest, project_body
from eventarchitect.domain.models import UPLOAD_CONTEXT_TAGS, Asset, AssetType, Project
from eventarchitect.domain.services import project_edits
from eventarchitect.domain.services.project_store import ProjectStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/projects/{project_id}/assets", tags=["assets"])


def build_upload(request: AssetUploadRequest) -> Asset:
    """Classify an upload and apply its context tag."""
    asset_type = request.type or AssetType.from_mime_type(request.mime_type)
    if request.tags is not None:
        tags = tuple(request.tags)
    else:
        context_tag = UPLOAD_CONTEXT_TAGS.get(asset_type)
        tags = (context_tag,) if context_tag else ()
    return Asset.create(type=asset_type, data=request.data, mime_type=request.mime_type, tags=tags)


@router.post("", status_code=status.HTTP_201_CREATED)
async def upload_asset(
    project_id: str,
    request: AssetUploadRequest,
    store: ProjectStore = Depends(get_store),
):
    asset = build_upload(request)

    def edit(project: Project) -> Project:
        project = project_edits.add_asset(project, asset)
        if request.environment_id:
            project = project_edits.attach_asset_to_environment(project, request.environment_id, asset.id)
        return project

    project = await store.apply(project_id, edit)
    logger.info(f"Uploaded {asset.type.value} asset {asset.id} to project {project_id}")
    return {
        "project": project_body(project),
        "asset_id": asset.id,
        "asset_type": asset.type.value,
        "warnings": [w.message for w in store.drain_warnings()],
    }


@router.delete("/{asset_id}")
async def remove_asset(project_id: str, asset_id: str, store: ProjectStore = Depends(get_store)):
    """Delete an asset. Environment and board references to it are kept."""
    project = await store.apply(project_id, lambda p: project_edits.remove_asset(p, asset_id))
    return {"project": project_body(project), "warnings": [w.message for w in store.drain_warnings()]}
