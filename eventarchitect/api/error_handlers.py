"""Error handlers for consistent API error responses."""

import logging
import re

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from eventarchitect.api.exceptions import APIError
from eventarchitect.domain.exceptions import (
    DomainError,
    EntityNotFound,
    InputValidationError,
    InvariantViolation,
)

logger = logging.getLogger(__name__)


def _rule_name(exc: InvariantViolation) -> str:
    """DuplicateIdentity -> duplicate_identity."""
    return re.sub(r"(?<!^)(?=[A-Z])", "_", type(exc).__name__).lower()


def api_error_from_domain(exc: DomainError) -> APIError:
    """Translate an invariant-layer error into its HTTP form."""
    if isinstance(exc, EntityNotFound):
        return APIError.not_found(exc.kind, exc.entity_id)
    if isinstance(exc, InvariantViolation):
        return APIError.conflict(exc.message, _rule_name(exc))
    if isinstance(exc, InputValidationError):
        return APIError.invalid_input(exc.message, exc.field)
    return APIError(exc.error_code, exc.message)


async def api_error_handler(request: Request, exc: APIError) -> JSONResponse:
    """Handle custom API errors."""
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "detail": exc.to_dict(),
        },
    )


async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    error = api_error_from_domain(exc)
    logger.info(f"{request.method} {request.url.path} rejected: {exc.message}")
    return await api_error_handler(request, error)


async def validation_error_handler(
    request: Request,
    exc: RequestValidationError,
) -> JSONResponse:
    """Handle FastAPI request validation errors."""
    errors = []
    for error in exc.errors():
        errors.append({
            "field": ".".join(str(loc) for loc in error["loc"]),
            "message": error["msg"],
            "type": error["type"],
        })

    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "detail": {
                "error_code": "VALIDATION_ERROR",
                "message": "Request validation failed",
                "details": {"errors": errors},
            },
        },
    )


def register_error_handlers(app: FastAPI) -> None:
    """Register all error handlers with the app."""
    app.add_exception_handler(APIError, api_error_handler)
    app.add_exception_handler(DomainError, domain_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
