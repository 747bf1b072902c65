"""Dossier API router."""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from eventarchitect.api.dependencies import get_store
from eventarchitect.domain.services.dossier import DossierSection, assemble_dossier
from eventarchitect.domain.services.project_store import ProjectStore

router = APIRouter(prefix="/projects/{project_id}/dossier", tags=["dossier"])


@router.get("")
async def get_dossier(
    project_id: str,
    sections: Optional[List[DossierSection]] = Query(None),
    store: ProjectStore = Depends(get_store),
):
    """Assemble the dossier pages. All sections when none are given."""
    pages = assemble_dossier(store.get(project_id), sections)
    return {
        "project_id": project_id,
        "page_count": len(pages),
        "pages": [page.to_dict() for page in pages],
    }
