"""Creation of new projects and copies of existing ones."""

from dataclasses import dataclass, field
from typing import List, Optional

from eventarchitect.domain.constants import (
    CHECKLIST_TEMPLATE,
    DEFAULT_BUDGET_RANGE,
    DEFAULT_GUEST_COUNT,
    DEFAULT_PROJECT_NAME,
    DEFAULT_PROJECT_TYPE,
    DUPLICATE_SUFFIX,
)
from eventarchitect.domain.models import (
    ChecklistItem,
    Production,
    Project,
    ProjectStatus,
    new_id,
    utc_now,
)


@dataclass
class ProjectTemplate:
    """Caller-supplied fields for a new project. Unset fields take defaults."""
    name: str = DEFAULT_PROJECT_NAME
    date: Optional[str] = None
    location: str = ""
    type: str = DEFAULT_PROJECT_TYPE
    guest_count: int = DEFAULT_GUEST_COUNT
    budget_range: str = DEFAULT_BUDGET_RANGE
    style_tags: List[str] = field(default_factory=list)
    keywords: List[str] = field(default_factory=list)
    restrictions: List[str] = field(default_factory=list)


def default_checklist() -> tuple:
    return tuple(ChecklistItem.create(label, phase) for label, phase in CHECKLIST_TEMPLATE)


def new_project(template: Optional[ProjectTemplate] = None) -> Project:
    """Build an active project with a fresh id and the standard checklist."""
    template = template or ProjectTemplate()
    return Project(
        id=new_id(),
        name=template.name or DEFAULT_PROJECT_NAME,
        date=template.date or utc_now().date().isoformat(),
        location=template.location,
        type=template.type,
        guest_count=template.guest_count,
        budget_range=template.budget_range,
        style_tags=tuple(template.style_tags),
        keywords=tuple(template.keywords),
        restrictions=tuple(template.restrictions),
        status=ProjectStatus.ACTIVE,
        production=Production(checklist=default_checklist()),
    )


def duplicate_project(source: Project) -> Project:
    """
    Copy a project under a new identity.

    Nested entity ids are kept: they only need to be unique within
    their owning collection, and keeping them keeps every internal
    reference valid in the copy.
    """
    return source.model_copy(update={
        "id": new_id(),
        "name": f"{source.name}{DUPLICATE_SUFFIX}",
        "status": ProjectStatus.ACTIVE,
    })
