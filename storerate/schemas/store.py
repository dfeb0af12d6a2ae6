"""
Store Schemas
Pydantic models for store API requests and responses
"""

from datetime import datetime
from typing import List, Optional

from pydantic import ConfigDict, EmailStr, Field

from storerate.schemas.common import CamelModel
from storerate.schemas.rating import RatingWithUser


class StoreCreate(CamelModel):
    """Schema for creating a store"""
    name: str = Field(..., min_length=1, max_length=100, description="Store name")
    email: EmailStr = Field(..., description="Store contact email")
    address: str = Field(..., min_length=1, max_length=400, description="Store address")
    owner_id: str = Field(..., description="ID of the store owner user")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "name": "Downtown Store",
                "email": "contact@downtown.example.com",
                "address": "123 Main St, City, State 12345",
                "ownerId": "0b8a6f5e-2f0e-4d8b-9f9e-3c2b1a0d9e8f"
            }
        }
    )


class StoreResponse(CamelModel):
    """Schema for store response"""
    id: str
    name: str
    email: str
    address: str
    owner_id: Optional[str] = None
    created_at: datetime


class StoreWithAggregate(StoreResponse):
    """Store joined with its computed rating aggregate"""
    average_rating: float = 0
    total_ratings: int = 0


class StoreStatsResponse(CamelModel):
    """Statistics for a single store (owner and admin view)"""
    store: StoreResponse
    average_rating: float
    total_ratings: int
    ratings: List[RatingWithUser]
