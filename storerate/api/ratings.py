"""
Rating Routes
Submit or update a rating and list ratings per user or per store
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from storerate.core.dependencies import get_current_user
from storerate.db import get_db
from storerate.models import User
from storerate.schemas import (
    RatingCreate,
    RatingResponse,
    RatingSubmission,
    RatingWithStore,
    RatingWithUser,
    parse,
)
from storerate.services.rating_service import RatingService
from storerate.services.store_service import StoreService

# Configure logging
logger = logging.getLogger(__name__)

# Create router
router = APIRouter(prefix="/api/ratings", tags=["Ratings"])


@router.post(
    "",
    response_model=RatingResponse,
    responses={201: {"model": RatingResponse, "description": "Rating created"}},
    summary="Submit or update a rating",
    description="One rating per user per store: a second submission overwrites the first (200), a first one creates it (201)"
)
def submit_rating(
    request: RatingSubmission,
    response: Response,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    data = parse(RatingCreate, {**request.model_dump(), "user_id": current_user.id})
    rating, created = RatingService.submit_rating(db, data)
    if created:
        response.status_code = status.HTTP_201_CREATED
    return RatingResponse.model_validate(rating)


@router.get(
    "/user",
    response_model=List[RatingWithStore],
    summary="List own ratings",
    description="Ratings submitted by the current user, each with its store"
)
def list_my_ratings(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    ratings = RatingService.list_user_ratings(db, current_user.id)
    return [RatingWithStore.model_validate(r) for r in ratings]


@router.get(
    "/store/{store_id}",
    response_model=List[RatingWithUser],
    summary="List a store's ratings",
    description="Ratings for a store, each with the user who submitted it"
)
def list_store_ratings(
    store_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    store = StoreService.get_store_or_404(db, store_id)
    ratings = RatingService.list_store_ratings(db, store.id)
    return [RatingWithUser.model_validate(r) for r in ratings]
