"""
Custom domain exceptions for consistent error handling.

These exceptions are mapped to HTTP status codes by the exception handlers
in main.py. Services raise them; routes let them propagate.
"""
from fastapi import HTTPException, status


class DomainError(HTTPException):
    """Base class for all domain-specific errors."""
    def __init__(self, message: str, status_code: int = status.HTTP_400_BAD_REQUEST, details: dict | None = None):
        super().__init__(status_code=status_code, detail=message)
        self.message = message
        self.details = details or {}


class NotFoundError(DomainError):
    """Resource not found (404)."""
    def __init__(self, resource_type: str, identifier, details: dict | None = None):
        message = f"{resource_type} not found: {identifier}"
        super().__init__(message, status_code=status.HTTP_404_NOT_FOUND, details=details)


class ValidationError(DomainError):
    """
    One or more field rules violated (422).

    `errors` is a list of {"fieldName", "message"} dicts, exposed to clients
    under details.errors.
    """
    def __init__(self, errors: list[dict], message: str = "Invalid data"):
        super().__init__(
            message,
            status_code=422,
            details={"errors": errors},
        )
        self.errors = errors

    @property
    def fields(self) -> list[str]:
        return [e["fieldName"] for e in self.errors]


class ForbiddenError(DomainError):
    """Authenticated, but not allowed to do this (403)."""
    def __init__(self, message: str = "Access denied", details: dict | None = None):
        super().__init__(message, status_code=status.HTTP_403_FORBIDDEN, details=details)


class UnauthenticatedError(DomainError):
    """Missing, malformed or rejected credential (401)."""
    def __init__(self, message: str = "Authentication required", details: dict | None = None):
        super().__init__(message, status_code=status.HTTP_401_UNAUTHORIZED, details=details)
        self.headers = {"WWW-Authenticate": "Bearer"}


class IntegrityConflictError(DomainError):
    """Target is referenced by other records and cannot be removed (400)."""
    def __init__(self, message: str = "Referential integrity violation", details: dict | None = None):
        super().__init__(message, status_code=status.HTTP_400_BAD_REQUEST, details=details)


class RateLimitError(DomainError):
    """Rate limit exceeded (429)."""
    def __init__(self, message: str = "Rate limit exceeded", headers: dict | None = None):
        super().__init__(message, status_code=status.HTTP_429_TOO_MANY_REQUESTS)
        self.headers = headers
