"""
Application Errors
Domain exceptions raised by services and dependencies, mapped to HTTP
responses by the handlers registered in storerate.main
"""

from typing import Dict, Optional

from fastapi import status


class AppError(Exception):
    """Base class for errors surfaced to API clients"""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    title = "Internal Server Error"
    default_message = "An unexpected error occurred"

    def __init__(self, message: Optional[str] = None, errors: Optional[Dict[str, str]] = None):
        self.message = message or self.default_message
        self.errors = errors or {}
        super().__init__(self.message)

    def to_dict(self) -> dict:
        body = {"error": self.title, "message": self.message}
        if self.errors:
            body["details"] = self.errors
        return body


class ValidationError(AppError):
    """Malformed or out-of-range input"""

    status_code = status.HTTP_400_BAD_REQUEST
    title = "Validation Error"
    default_message = "Invalid request"


class Unauthorized(AppError):
    """No valid session"""

    status_code = status.HTTP_401_UNAUTHORIZED
    title = "Unauthorized"
    default_message = "Unauthorized"


class Forbidden(AppError):
    """Authenticated, but role or ownership does not allow the operation"""

    status_code = status.HTTP_403_FORBIDDEN
    title = "Forbidden"
    default_message = "Access denied"


class NotFound(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    title = "Not Found"
    default_message = "Resource not found"


class ConflictError(AppError):
    """Duplicate unique key, e.g. an email that is already registered"""

    status_code = status.HTTP_409_CONFLICT
    title = "Conflict"
    default_message = "Resource already exists"
