"""Global exception handlers that map domain exceptions to HTTP responses."""

from fastapi import Request, status
from fastapi.responses import JSONResponse

from boilerplate.errors import (
    DUPLICATE_RESOURCE,
    FORBIDDEN,
    NOT_FOUND,
    UNAUTHORIZED,
    VALIDATION_ERROR,
    DomainError,
    DomainValidationError,
    DuplicateResourceError,
    ForbiddenError,
    NotFoundError,
    UnauthorizedError,
)
from boilerplate.schemas.error import ErrorResponse

# Domain exception -> (HTTP status, machine-readable code)
ERROR_STATUS = {
    DomainValidationError: (status.HTTP_400_BAD_REQUEST, VALIDATION_ERROR),
    UnauthorizedError: (status.HTTP_401_UNAUTHORIZED, UNAUTHORIZED),
    ForbiddenError: (status.HTTP_403_FORBIDDEN, FORBIDDEN),
    NotFoundError: (status.HTTP_404_NOT_FOUND, NOT_FOUND),
    DuplicateResourceError: (status.HTTP_409_CONFLICT, DUPLICATE_RESOURCE),
}


def _error_response(status_code: int, detail: str, code: str) -> JSONResponse:
    """Return a standardized error response with detail and machine-readable code."""
    body = ErrorResponse(detail=detail, code=code)
    return JSONResponse(status_code=status_code, content=body.model_dump())


def domain_error_handler(_request: Request, exc: DomainError) -> JSONResponse:
    status_code, code = ERROR_STATUS.get(
        type(exc), (status.HTTP_400_BAD_REQUEST, VALIDATION_ERROR)
    )
    return _error_response(status_code, str(exc), code)


def register_exception_handlers(app):
    """Register domain exception handlers on the FastAPI app."""
    for exc_class in ERROR_STATUS:
        app.add_exception_handler(exc_class, domain_error_handler)
