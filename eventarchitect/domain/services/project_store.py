"""
Project Store: the authoritative in-memory project collection.

The Store owns the list of projects and the active selection. Every
change replaces a project by value and then persists the whole
collection through the storage gateway.

Memory is the source of truth. A failed write never rolls back the
in-memory change; it is recorded as a PersistenceFailure warning and
logged. Writes to the gateway are serialised by a lock, and the
snapshot is taken only after the lock is held, so a persist started
before a later update can never overwrite that update with stale data.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, List, Optional, Tuple

from eventarchitect.domain.exceptions import ProjectNotFound
from eventarchitect.domain.models import Project, ProjectStatus, utc_now
from eventarchitect.domain.services.project_factory import (
    ProjectTemplate,
    duplicate_project,
    new_project,
)
from eventarchitect.persistence import ProjectRepository, StorageError, StorageReadError

logger = logging.getLogger(__name__)


STORAGE_WARNING_MESSAGE = "Changes may not survive a reload."


@dataclass
class StoreWarning:
    """Non-fatal storage condition surfaced to the user."""
    code: str
    message: str
    occurred_at: datetime = field(default_factory=utc_now)


@dataclass
class PersistenceFailure(StoreWarning):
    """A snapshot write the storage gateway rejected."""
    project_count: int = 0


class ProjectStore:
    """
    In-memory project collection synchronised with a storage gateway.

    All mutation entry points fold their change into the latest
    in-memory snapshot without suspending, then persist.
    """

    def __init__(self, repository: ProjectRepository):
        self._repository = repository
        self._projects: List[Project] = []
        self._active_project_id: Optional[str] = None
        self._persist_lock = asyncio.Lock()
        # Bumped on every in-memory change; lets persist() skip a write
        # that an earlier persist already covered.
        self._revision = 0
        self._persisted_revision = 0
        self.warnings: List[StoreWarning] = []

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    @property
    def projects(self) -> Tuple[Project, ...]:
        return tuple(self._projects)

    @property
    def active_project_id(self) -> Optional[str]:
        return self._active_project_id

    @property
    def active_project(self) -> Optional[Project]:
        if self._active_project_id is None:
            return None
        return self.find(self._active_project_id)

    @property
    def has_unsaved_changes(self) -> bool:
        return self._persisted_revision < self._revision

    def find(self, project_id: str) -> Optional[Project]:
        for project in self._projects:
            if project.id == project_id:
                return project
        return None

    def get(self, project_id: str) -> Project:
        project = self.find(project_id)
        if project is None:
            raise ProjectNotFound(project_id)
        return project

    def list(self, status: Optional[ProjectStatus] = None) -> List[Project]:
        if status is None:
            return list(self._projects)
        return [p for p in self._projects if p.status == ProjectStatus(status)]

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def load(self) -> List[Project]:
        """
        Load the collection from the storage gateway.

        If storage cannot be read the Store starts empty and records a
        warning; this is never fatal.
        """
        try:
            projects = await self._repository.load_all()
        except StorageReadError as e:
            logger.warning(f"Storage unavailable at load, starting empty: {e}")
            self.warnings.append(StoreWarning(code="storage_unavailable", message=f"{e}. {STORAGE_WARNING_MESSAGE}"))
            projects = []

        self._projects = list(projects)
        self._active_project_id = None
        self._revision = 0
        self._persisted_revision = 0
        logger.info(f"Loaded {len(self._projects)} projects")
        return list(self._projects)

    async def create(self, template: Optional[ProjectTemplate] = None) -> Project:
        """Create a project from a template, select it, and persist."""
        project = new_project(template)
        self._projects.append(project)
        self._active_project_id = project.id
        self._touch()
        logger.info(f"Created project {project.id} ({project.name})")
        await self.persist()
        return project

    async def update(self, project: Project) -> Optional[PersistenceFailure]:
        """
        Replace the stored project with the same id by value.

        Raises ProjectNotFound when the project was deleted, so a late
        result cannot resurrect it. Returns the PersistenceFailure, if
        any; the in-memory change stands either way.
        """
        self._replace(project)
        return await self.persist()

    async def apply(self, project_id: str, edit: Callable[[Project], Project]) -> Project:
        """
        Fold an edit into the latest snapshot of a project and persist.

        This is the single write path for manual edits and workflow
        merges. `edit` receives the current value, so changes made while
        a caller was suspended are never lost. Domain errors from `edit`
        propagate and leave the collection untouched.
        """
        project, _ = await self.commit(project_id, edit)
        return project

    async def commit(
        self,
        project_id: str,
        edit: Callable[[Project], Project],
    ) -> Tuple[Project, Optional[PersistenceFailure]]:
        """Like apply, but also return the failure of this edit's write, if any."""
        current = self.get(project_id)
        updated = edit(current)
        if updated.id != project_id:
            raise ValueError("An edit must not change the project identity")
        self._replace(updated)
        failure = await self.persist()
        return updated, failure

    async def delete(self, project_id: str) -> Optional[PersistenceFailure]:
        self.get(project_id)
        self._projects = [p for p in self._projects if p.id != project_id]
        if self._active_project_id == project_id:
            self._active_project_id = None
        self._touch()
        logger.info(f"Deleted project {project_id}")
        return await self.persist()

    async def duplicate(self, project_id: str) -> Project:
        copy = duplicate_project(self.get(project_id))
        self._projects.append(copy)
        self._touch()
        logger.info(f"Duplicated project {project_id} as {copy.id}")
        await self.persist()
        return copy

    async def set_status(self, project_id: str, status: ProjectStatus) -> Project:
        status = ProjectStatus(status)
        return await self.apply(project_id, lambda p: p.model_copy(update={"status": status}))

    def select(self, project_id: Optional[str]) -> Optional[Project]:
        """Make a project the active one (None clears the selection)."""
        if project_id is None:
            self._active_project_id = None
            return None
        project = self.get(project_id)
        self._active_project_id = project.id
        return project

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    async def persist(self) -> Optional[PersistenceFailure]:
        """
        Write the entire current collection to the storage gateway.

        Serialised: the snapshot is captured after the lock is acquired,
        so it always includes every change folded in before this write
        started. A persist whose revision was already written by an
        earlier call is skipped.
        """
        async with self._persist_lock:
            revision = self._revision
            if revision and revision <= self._persisted_revision:
                return None
            snapshot = list(self._projects)
            try:
                await self._repository.save_all(snapshot)
            except StorageError as e:
                failure = PersistenceFailure(
                    code="persistence_failure",
                    message=f"{e}. {STORAGE_WARNING_MESSAGE}",
                    project_count=len(snapshot),
                )
                self.warnings.append(failure)
                logger.error(f"Persistence failed for {len(snapshot)} projects: {e}")
                return failure
            self._persisted_revision = max(self._persisted_revision, revision)
            return None

    async def verify(self) -> bool:
        """Reload the stored snapshot and compare it with memory."""
        try:
            stored = await self._repository.load_all()
        except StorageError as e:
            logger.warning(f"Verification reload failed: {e}")
            return False
        return stored == self._projects

    def drain_warnings(self) -> List[StoreWarning]:
        """Return and clear pending warnings."""
        warnings, self.warnings = self.warnings, []
        return warnings

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _touch(self) -> None:
        self._revision += 1

    def _replace(self, project: Project) -> None:
        for index, existing in enumerate(self._projects):
            if existing.id == project.id:
                self._projects[index] = project
                self._touch()
                return
        raise ProjectNotFound(project.id)
