"""Custom domain exceptions for the application."""

# Stable, machine-readable error codes for API consumers.
NOT_FOUND = "NOT_FOUND"
DUPLICATE_RESOURCE = "DUPLICATE_RESOURCE"
VALIDATION_ERROR = "VALIDATION_ERROR"
UNAUTHORIZED = "UNAUTHORIZED"
FORBIDDEN = "FORBIDDEN"


class DomainError(Exception):
    """Base exception for domain/business logic errors."""

    pass


class NotFoundError(DomainError):
    """Raised when a requested user does not exist."""

    pass


class DuplicateResourceError(DomainError):
    """Raised when an email address is already registered to another user."""

    pass


class DomainValidationError(DomainError):
    """Raised when business rules fail (weak password, invalid reset request, ...)."""

    pass


class UnauthorizedError(DomainError):
    """Raised when credentials are missing or wrong."""

    pass


class ForbiddenError(DomainError):
    """Raised when an authenticated user lacks the required role."""

    pass
