"""
Pydantic schemas: request validation and response shapes
"""

from storerate.schemas.common import CamelModel, MessageResponse, field_errors, parse
from storerate.schemas.auth import (
    LoginRequest,
    RegisterRequest,
    UpdatePasswordRequest,
    AuthUser,
    AuthResponse,
    CurrentUserResponse,
    check_password_strength,
)
from storerate.schemas.user import UserResponse
from storerate.schemas.rating import (
    RatingSubmission,
    RatingCreate,
    RatingResponse,
    RatingWithStore,
    RatingWithUser,
)
from storerate.schemas.store import StoreCreate, StoreResponse, StoreWithAggregate, StoreStatsResponse
from storerate.schemas.stats import StatsResponse

__all__ = [
    "CamelModel",
    "MessageResponse",
    "field_errors",
    "parse",
    "LoginRequest",
    "RegisterRequest",
    "UpdatePasswordRequest",
    "AuthUser",
    "AuthResponse",
    "CurrentUserResponse",
    "check_password_strength",
    "UserResponse",
    "RatingSubmission",
    "RatingCreate",
    "RatingResponse",
    "RatingWithStore",
    "RatingWithUser",
    "StoreCreate",
    "StoreResponse",
    "StoreWithAggregate",
    "StoreStatsResponse",
    "StatsResponse",
]
