"""
Storage gateway for EventArchitect.

Backends:
- sqlite (default): SqlProjectRepository over SQLAlchemy async + aiosqlite
- file: FileProjectRepository, one JSON snapshot file
- memory: InMemoryProjectRepository, nothing survives the process
"""

from pathlib import Path
from typing import Optional

from eventarchitect.core.config import settings
from eventarchitect.persistence.file_repository import FileProjectRepository
from eventarchitect.persistence.repositories import (
    InMemoryProjectRepository,
    ProjectRepository,
    StorageError,
    StorageReadError,
    StorageUnavailable,
    StorageWriteError,
    document_to_project,
    project_to_document,
)
from eventarchitect.persistence.sql_repositories import SqlProjectRepository


def create_project_repository(
    backend: Optional[str] = None,
    database_url: Optional[str] = None,
    storage_file: Optional[Path] = None,
) -> ProjectRepository:
    """Build the configured storage backend."""
    backend = (backend or settings.STORAGE_BACKEND).lower()
    if backend == "memory":
        return InMemoryProjectRepository()
    if backend == "file":
        return FileProjectRepository(storage_file or settings.STORAGE_FILE)
    if backend == "sqlite":
        return SqlProjectRepository.from_url(database_url or settings.DATABASE_URL)
    raise ValueError(f"Unknown storage backend: {backend}")


__all__ = [
    "create_project_repository",
    "FileProjectRepository",
    "InMemoryProjectRepository",
    "ProjectRepository",
    "SqlProjectRepository",
    "StorageError",
    "StorageReadError",
    "StorageUnavailable",
    "StorageWriteError",
    "document_to_project",
    "project_to_document",
]
