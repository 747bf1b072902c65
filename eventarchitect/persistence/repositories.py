"""
Storage gateway contracts and the in-memory implementation.

The gateway persists the whole project collection as one snapshot:
save_all replaces whatever was stored before, load_all returns the
collection in the order it was saved. Each project is stored as a
self-contained JSON document keyed by its id. No referential
integrity is enforced here.
"""

import copy
from typing import Any, Dict, List, Protocol, Sequence

from pydantic import ValidationError

from eventarchitect.domain.models import Project


class StorageError(Exception):
    """Base exception for storage gateway failures."""
    pass


class StorageReadError(StorageError):
    """Raised when the stored snapshot cannot be read or decoded."""
    pass


class StorageUnavailable(StorageReadError):
    """Raised when the underlying store cannot be opened at all."""
    pass


class StorageWriteError(StorageError):
    """Raised when a snapshot could not be written. Nothing was replaced."""
    pass


class ProjectRepository(Protocol):
    """Protocol for project snapshot storage."""

    async def save_all(self, projects: Sequence[Project]) -> None:
        """Replace the stored snapshot with `projects`."""
        ...

    async def load_all(self) -> List[Project]:
        """Load the stored snapshot (empty list when nothing was saved)."""
        ...


def project_to_document(project: Project) -> Dict[str, Any]:
    """Serialize a project to a JSON-compatible document."""
    return project.model_dump(mode="json")


def document_to_project(document: Dict[str, Any]) -> Project:
    """Rebuild a project from a stored document."""
    try:
        return Project.model_validate(document)
    except ValidationError as e:
        raise StorageReadError(f"Stored project is malformed: {e}") from e


class InMemoryProjectRepository:
    """
    In-memory implementation for testing and ephemeral sessions.

    Stores serialized documents rather than live objects so that a
    load behaves like a read from real storage.
    """

    def __init__(self):
        self._documents: List[Dict[str, Any]] = []
        self.save_count = 0

    async def save_all(self, projects: Sequence[Project]) -> None:
        self._documents = [project_to_document(p) for p in projects]
        self.save_count += 1

    async def load_all(self) -> List[Project]:
        return [document_to_project(copy.deepcopy(d)) for d in self._documents]

    def clear(self) -> None:
        """Clear all stored documents (for testing)."""
        self._documents.clear()
        self.save_count = 0
