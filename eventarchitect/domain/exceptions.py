"""
Domain exceptions.

Raised by the invariant layer when an edit targets an entity that no
longer exists or would leave a project inconsistent. All of them are
recoverable: the caller drops the stale operation and keeps the
current project value.
"""

from typing import Optional


class DomainError(Exception):
    """Base exception for all domain errors."""

    error_code = "DOMAIN_ERROR"

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class EntityNotFound(DomainError):
    """Raised when an edit targets an entity that does not exist."""

    error_code = "NOT_FOUND"
    kind = "entity"

    def __init__(self, entity_id: str, message: Optional[str] = None):
        self.entity_id = entity_id
        super().__init__(message or f"{self.kind} not found: {entity_id}")


class ProjectNotFound(EntityNotFound):
    kind = "project"


class EnvironmentNotFound(EntityNotFound):
    kind = "environment"


class AssetNotFound(EntityNotFound):
    kind = "asset"


class BoardNotFound(EntityNotFound):
    kind = "board"


class VariationNotFound(EntityNotFound):
    kind = "variation"


class CrestNotFound(EntityNotFound):
    kind = "crest"


class CrestOptionNotFound(EntityNotFound):
    kind = "crest option"


class MoodboardNotFound(EntityNotFound):
    kind = "moodboard"


class ProductionItemNotFound(EntityNotFound):
    kind = "production item"


class InvariantViolation(DomainError):
    """Raised when an edit would produce an inconsistent project."""

    error_code = "INVARIANT_VIOLATION"


class DuplicateIdentity(InvariantViolation):
    """Raised when an entity's id already exists in its collection."""

    def __init__(self, collection: str, entity_id: str):
        self.collection = collection
        self.entity_id = entity_id
        super().__init__(f"Duplicate id in {collection}: {entity_id}")


class AnalysisAlreadyAttached(InvariantViolation):
    """Raised when a second analysis pass targets the same asset."""

    def __init__(self, asset_id: str):
        self.asset_id = asset_id
        super().__init__(f"Asset already analysed: {asset_id}")


class InvalidEdit(InvariantViolation):
    """Raised for edits that break a structural rule (bad value, bad field)."""
    pass


class InputValidationError(DomainError):
    """Raised when a generation request is missing required input."""

    error_code = "VALIDATION_ERROR"

    def __init__(self, message: str, field: Optional[str] = None):
        self.field = field
        super().__init__(message)
