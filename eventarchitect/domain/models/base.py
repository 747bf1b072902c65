"""Shared base for project entities."""

from datetime import datetime, timezone
from uuid import uuid4

from pydantic import BaseModel, ConfigDict


def new_id() -> str:
    """Mint a fresh entity identity."""
    return str(uuid4())


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class EntityModel(BaseModel):
    """
    Immutable value object.

    Entities are never mutated in place. Edits produce a new value with
    model_copy(update=...), so collections are stored as tuples.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")
