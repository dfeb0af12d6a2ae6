"""
Store Service
Store persistence and the stores-with-aggregates listing
"""

import logging
from typing import List, Optional, Tuple

from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from storerate.core.exceptions import NotFound, ValidationError
from storerate.models.rating import Rating
from storerate.models.store import Store
from storerate.models.user import User, UserRole
from storerate.schemas.store import StoreCreate
from storerate.services.aggregation import RatingAggregate, aggregate_columns, summarize

logger = logging.getLogger(__name__)


class StoreService:
    """Service for managing store records"""

    @staticmethod
    def get_store(db: Session, store_id: str) -> Optional[Store]:
        return db.get(Store, store_id)

    @staticmethod
    def get_store_or_404(db: Session, store_id: str) -> Store:
        store = db.get(Store, store_id)
        if store is None:
            raise NotFound("Store not found")
        return store

    @staticmethod
    def list_stores(db: Session) -> List[Store]:
        return db.query(Store).order_by(Store.created_at, Store.name).all()

    @staticmethod
    def create_store(db: Session, data: StoreCreate) -> Store:
        """
        Create a store owned by an existing STORE_OWNER user

        Raises:
            ValidationError: if ownerId does not reference a store owner
        """
        owner = db.get(User, data.owner_id)
        if owner is None or owner.role != UserRole.STORE_OWNER:
            raise ValidationError(
                "Invalid request",
                errors={"ownerId": "Owner must be an existing user with the store_owner role"},
            )

        store = Store(
            name=data.name,
            email=data.email,
            address=data.address,
            owner_id=owner.id,
        )
        db.add(store)
        db.commit()
        db.refresh(store)

        logger.info(f"Store created: {store.name} (ID: {store.id}) owned by {owner.email}")
        return store

    @staticmethod
    def get_stores_with_aggregates(
        db: Session,
        search: Optional[str] = None,
    ) -> List[Tuple[Store, RatingAggregate]]:
        """
        Every store with its rating aggregate

        Left join, so stores without ratings are included with 0 / 0.

        Args:
            db: Database session
            search: Optional case-insensitive substring matched against name or address

        Returns:
            List of (Store, RatingAggregate) in creation order
        """
        rating_sum, rating_count = aggregate_columns()
        query = (
            db.query(Store, rating_sum, rating_count)
            .outerjoin(Rating, Rating.store_id == Store.id)
            .group_by(Store.id)
        )

        if search and search.strip():
            term = search.strip().lower()
            query = query.filter(or_(
                func.lower(Store.name).contains(term, autoescape=True),
                func.lower(Store.address).contains(term, autoescape=True),
            ))

        rows = query.order_by(Store.created_at, Store.name).all()
        return [(store, summarize(total, count)) for store, total, count in rows]

    @staticmethod
    def get_store_aggregate(db: Session, store_id: str) -> RatingAggregate:
        """Aggregate for a single store computed in SQL"""
        total, count = db.query(*aggregate_columns()).filter(Rating.store_id == store_id).one()
        return summarize(total, count)
