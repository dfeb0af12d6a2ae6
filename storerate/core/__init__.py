"""
Core functionality (auth, errors, dependencies)
"""

from storerate.core.auth import (
    hash_password,
    verify_password,
    generate_session_token,
)
from storerate.core.exceptions import (
    AppError,
    ValidationError,
    Unauthorized,
    Forbidden,
    NotFound,
    ConflictError,
)

__all__ = [
    "hash_password",
    "verify_password",
    "generate_session_token",
    "AppError",
    "ValidationError",
    "Unauthorized",
    "Forbidden",
    "NotFound",
    "ConflictError",
]
