"""JSON-file implementation of the project storage gateway."""

import asyncio
import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from eventarchitect.domain.models import Project
from eventarchitect.persistence.repositories import (
    StorageReadError,
    StorageUnavailable,
    StorageWriteError,
    document_to_project,
    project_to_document,
)

logger = logging.getLogger(__name__)


class FileProjectRepository:
    """
    File-based snapshot storage for development.

    The snapshot is written to a temporary file in the same directory
    and moved into place, so readers see either the old or the new
    snapshot, never a partial one.
    """

    def __init__(self, path: Path):
        self.path = Path(path)

    async def save_all(self, projects: Sequence[Project]) -> None:
        payload = {"projects": [project_to_document(p) for p in projects]}
        try:
            await asyncio.to_thread(self._write_snapshot, payload)
        except OSError as e:
            raise StorageWriteError(f"Failed to write {self.path}: {e}") from e
        logger.debug(f"Saved snapshot of {len(projects)} projects to {self.path}")

    async def load_all(self) -> List[Project]:
        payload = await asyncio.to_thread(self._read_snapshot)
        if payload is None:
            return []

        documents = payload.get("projects") if isinstance(payload, dict) else None
        if not isinstance(documents, list):
            raise StorageReadError(f"Unexpected snapshot layout in {self.path}")
        return [document_to_project(d) for d in documents]

    def _write_snapshot(self, payload: Dict[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(payload, f, indent=2)
            os.replace(tmp_name, self.path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    def _read_snapshot(self) -> Optional[Any]:
        """Parsed snapshot, or None when no snapshot has been written yet."""
        if not self.path.exists():
            return None
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                return json.load(f)
        except OSError as e:
            raise StorageUnavailable(f"Cannot open {self.path}: {e}") from e
        except ValueError as e:
            # JSONDecodeError and UnicodeDecodeError
            raise StorageReadError(f"Corrupt snapshot in {self.path}: {e}") from e
