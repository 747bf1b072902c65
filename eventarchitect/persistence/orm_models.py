"""ORM record for stored project documents."""

from datetime import datetime

from sqlalchemy import JSON, DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from eventarchitect.persistence.database import Base


class ProjectRecord(Base):
    """
    One project, serialized as a self-contained JSON document.

    `position` preserves collection order across a save/load cycle.
    """

    __tablename__ = "projects"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    position: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    document: Mapped[dict] = mapped_column(JSON, nullable=False)
    saved_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
