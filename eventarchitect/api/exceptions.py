"""HTTP errors returned by the API, as `{"detail": {...}}` bodies."""

from typing import Any, Dict, Optional


class APIError(Exception):
    """An error with its HTTP status and a stable machine-readable code."""

    def __init__(
        self,
        error_code: str,
        message: str,
        status_code: int = 400,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.error_code = error_code
        self.message = message
        self.status_code = status_code
        self.details = details
        super().__init__(message)

    @classmethod
    def not_found(cls, kind: str, entity_id: str) -> "APIError":
        """`kind` "crest option" becomes code CREST_OPTION_NOT_FOUND."""
        return cls(
            f"{kind.upper().replace(' ', '_')}_NOT_FOUND",
            f"{kind.capitalize()} '{entity_id}' not found",
            status_code=404,
            details={"kind": kind, "id": entity_id},
        )

    @classmethod
    def conflict(cls, message: str, rule: str) -> "APIError":
        """The edit would leave the project inconsistent; `rule` names the broken invariant."""
        return cls("CONFLICT", message, status_code=409, details={"rule": rule})

    @classmethod
    def invalid_input(cls, message: str, field: Optional[str] = None) -> "APIError":
        return cls(
            "VALIDATION_ERROR",
            message,
            status_code=422,
            details={"field": field} if field else None,
        )

    @classmethod
    def unavailable(cls, service: str) -> "APIError":
        return cls("SERVICE_UNAVAILABLE", f"{service} is not available", status_code=503)

    def to_dict(self) -> Dict[str, Any]:
        result = {
            "error_code": self.error_code,
            "message": self.message,
        }
        if self.details:
            result["details"] = self.details
        return result
