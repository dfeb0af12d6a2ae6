"""
Rating Schemas
Pydantic models for rating API requests and responses
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from storerate.models.user import UserRole
from storerate.schemas.common import CamelModel


class RatingSubmission(CamelModel):
    """Request body for submitting or updating a rating"""
    store_id: str = Field(..., min_length=1, description="Rated store")
    rating: int = Field(..., ge=1, le=5, strict=True, description="Star rating from 1 to 5")


class RatingCreate(RatingSubmission):
    """Validated rating ready for persistence"""
    user_id: str = Field(..., min_length=1, description="Rating author")


class RatingResponse(CamelModel):
    """Schema for rating response"""
    id: str
    user_id: str
    store_id: str
    rating: int
    created_at: datetime


class RatedStore(CamelModel):
    """Store summary embedded in a rating"""
    id: str
    name: str
    email: str
    address: str
    owner_id: Optional[str] = None
    created_at: datetime


class RatingAuthor(CamelModel):
    """User summary embedded in a rating (no password hash)"""
    id: str
    name: str
    email: str
    role: UserRole
    address: Optional[str] = None


class RatingWithStore(RatingResponse):
    """Rating with the store it refers to"""
    store: RatedStore


class RatingWithUser(RatingResponse):
    """Rating with the user who submitted it"""
    user: RatingAuthor
