"""
Store Routes
Store listing with rating aggregates, store creation and per-store statistics
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from storerate.core.dependencies import get_accessible_store, get_current_user, require_admin
from storerate.db import get_db
from storerate.models import Store, User
from storerate.schemas import (
    RatingWithUser,
    StoreCreate,
    StoreResponse,
    StoreStatsResponse,
    StoreWithAggregate,
)
from storerate.services.aggregation import RatingAggregate
from storerate.services.rating_service import RatingService
from storerate.services.store_service import StoreService

# Configure logging
logger = logging.getLogger(__name__)

# Create router
router = APIRouter(prefix="/api/stores", tags=["Stores"])


# ============================================================================
# Helper Functions
# ============================================================================


def build_store_response(store: Store, aggregate: RatingAggregate) -> StoreWithAggregate:
    """Build store response with its rating aggregate"""
    return StoreWithAggregate(
        id=store.id,
        name=store.name,
        email=store.email,
        address=store.address,
        owner_id=store.owner_id,
        created_at=store.created_at,
        average_rating=aggregate.average_rating,
        total_ratings=aggregate.total_ratings,
    )


# ============================================================================
# Store Endpoints
# ============================================================================


@router.get(
    "",
    response_model=List[StoreWithAggregate],
    summary="List stores with ratings",
    description="Every store with averageRating and totalRatings; stores without ratings report 0"
)
def list_stores(
    search: Optional[str] = Query(None, max_length=100, description="Match store name or address"),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    rows = StoreService.get_stores_with_aggregates(db, search=search)
    return [build_store_response(store, aggregate) for store, aggregate in rows]


@router.post(
    "",
    response_model=StoreResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new store (ADMIN only)",
    description="Create a store owned by an existing store owner"
)
def create_store(
    request: StoreCreate,
    current_user: User = Depends(require_admin),
    db: Session = Depends(get_db)
):
    """
    Create a new store

    - **name**: 1-100 characters
    - **email**: Store contact email
    - **address**: 1-400 characters
    - **ownerId**: ID of a user with the store_owner role
    """
    store = StoreService.create_store(db, request)
    logger.info(f"Store {store.name} (ID: {store.id}) created by admin {current_user.email}")
    return StoreResponse.model_validate(store)


@router.get(
    "/{store_id}/stats",
    response_model=StoreStatsResponse,
    summary="Get store statistics",
    description="Average rating, rating count and individual ratings (ADMIN or the store's owner)"
)
def get_store_stats(
    store: Store = Depends(get_accessible_store),
    db: Session = Depends(get_db)
):
    aggregate, ratings = RatingService.get_store_stats(db, store)
    return StoreStatsResponse(
        store=StoreResponse.model_validate(store),
        average_rating=aggregate.average_rating,
        total_ratings=aggregate.total_ratings,
        ratings=[RatingWithUser.model_validate(r) for r in ratings],
    )
