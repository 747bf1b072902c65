"""SQL (SQLAlchemy async) implementation of the project storage gateway."""

import logging
from datetime import datetime, timezone
from typing import List, Sequence

from sqlalchemy import delete, select
from sqlalchemy.exc import OperationalError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine

from eventarchitect.domain.models import Project
from eventarchitect.persistence.database import create_engine, create_session_factory, init_database
from eventarchitect.persistence.orm_models import ProjectRecord
from eventarchitect.persistence.repositories import (
    StorageReadError,
    StorageUnavailable,
    StorageWriteError,
    document_to_project,
    project_to_document,
)

logger = logging.getLogger(__name__)


def _project_to_record(project: Project, position: int, saved_at: datetime) -> ProjectRecord:
    """Convert a Project to its ORM record."""
    return ProjectRecord(
        id=project.id,
        position=position,
        document=project_to_document(project),
        saved_at=saved_at,
    )


def _record_to_project(record: ProjectRecord) -> Project:
    """Convert an ORM record back to a Project."""
    return document_to_project(record.document)


class SqlProjectRepository:
    """
    SQL implementation of ProjectRepository.

    save_all deletes every row and inserts the new snapshot inside one
    transaction, so a failed write leaves the previous snapshot intact.
    """

    def __init__(self, engine: AsyncEngine):
        self._engine = engine
        self._session_factory = create_session_factory(engine)
        self._schema_ready = False

    @classmethod
    def from_url(cls, database_url: str) -> "SqlProjectRepository":
        return cls(create_engine(database_url))

    async def _ensure_schema(self) -> None:
        if self._schema_ready:
            return
        await init_database(self._engine)
        self._schema_ready = True

    async def save_all(self, projects: Sequence[Project]) -> None:
        saved_at = datetime.now(timezone.utc)
        try:
            await self._ensure_schema()
            async with self._session_factory() as session:
                async with session.begin():
                    await session.execute(delete(ProjectRecord))
                    session.add_all(
                        _project_to_record(project, position, saved_at)
                        for position, project in enumerate(projects)
                    )
        except SQLAlchemyError as e:
            raise StorageWriteError(f"Failed to save {len(projects)} projects: {e}") from e
        logger.debug(f"Saved snapshot of {len(projects)} projects")

    async def load_all(self) -> List[Project]:
        try:
            await self._ensure_schema()
            async with self._session_factory() as session:
                result = await session.execute(
                    select(ProjectRecord).order_by(ProjectRecord.position)
                )
                records = result.scalars().all()
        except OperationalError as e:
            raise StorageUnavailable(f"Database cannot be opened: {e}") from e
        except SQLAlchemyError as e:
            raise StorageReadError(f"Failed to read projects: {e}") from e

        return [_record_to_project(record) for record in records]

    async def close(self) -> None:
        """Dispose of the engine's connection pool."""
        await self._engine.dispose()
