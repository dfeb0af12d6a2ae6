"""
Rating Service
Upsert of ratings keyed by (user, store) and rating listings
"""

import logging
from typing import List, Optional, Tuple

from sqlalchemy.dialects.postgresql import insert as postgresql_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from storerate.core.exceptions import NotFound
from storerate.models.rating import Rating
from storerate.models.store import Store
from storerate.schemas.rating import RatingCreate
from storerate.services.aggregation import RatingAggregate, aggregate_values

logger = logging.getLogger(__name__)

# Dialects with INSERT ... ON CONFLICT DO UPDATE
UPSERT_INSERTS = {
    "sqlite": sqlite_insert,
    "postgresql": postgresql_insert,
}


class RatingService:
    """Service for submitting and reading ratings"""

    @staticmethod
    def get_user_rating(db: Session, user_id: str, store_id: str) -> Optional[Rating]:
        return db.query(Rating).filter(
            Rating.user_id == user_id,
            Rating.store_id == store_id,
        ).first()

    @staticmethod
    def submit_rating(db: Session, data: RatingCreate) -> Tuple[Rating, bool]:
        """
        Create or overwrite the user's rating for a store

        The write is a single atomic upsert on the (user_id, store_id) unique
        constraint, so concurrent submissions never produce two rows.
        Submitting the same value twice leaves the same single row.

        Args:
            db: Database session
            data: Validated rating (user, store, value)

        Returns:
            (rating row, True if the row was newly created)

        Raises:
            NotFound: if the store does not exist
        """
        if db.get(Store, data.store_id) is None:
            raise NotFound("Store not found")

        existing = RatingService.get_user_rating(db, data.user_id, data.store_id)

        insert = UPSERT_INSERTS.get(db.get_bind().dialect.name)
        if insert is not None:
            stmt = insert(Rating).values(
                user_id=data.user_id,
                store_id=data.store_id,
                rating=data.rating,
            )
            stmt = stmt.on_conflict_do_update(
                index_elements=[Rating.user_id, Rating.store_id],
                set_={"rating": stmt.excluded.rating},
            )
            db.execute(stmt)
            db.commit()
        else:
            RatingService._lookup_then_write(db, data)

        rating = RatingService.get_user_rating(db, data.user_id, data.store_id)
        created = existing is None

        logger.info(
            f"Rating {'created' if created else 'updated'}: user {data.user_id} "
            f"rated store {data.store_id} with {data.rating}"
        )
        return rating, created

    @staticmethod
    def _lookup_then_write(db: Session, data: RatingCreate):
        """
        Upsert for engines without ON CONFLICT

        A concurrent insert of the same key trips the unique constraint; the
        second pass then finds that row and updates it.
        """
        for _ in range(2):
            rating = RatingService.get_user_rating(db, data.user_id, data.store_id)
            if rating is not None:
                rating.rating = data.rating
                db.commit()
                return
            db.add(Rating(user_id=data.user_id, store_id=data.store_id, rating=data.rating))
            try:
                db.commit()
                return
            except IntegrityError:
                db.rollback()
                logger.warning(
                    f"Concurrent rating insert for user {data.user_id} and store {data.store_id}, retrying"
                )
        raise RuntimeError("Rating upsert did not converge")

    @staticmethod
    def list_user_ratings(db: Session, user_id: str) -> List[Rating]:
        """A user's ratings with their stores, in insertion order"""
        return (
            db.query(Rating)
            .options(joinedload(Rating.store))
            .filter(Rating.user_id == user_id)
            .order_by(Rating.created_at)
            .all()
        )

    @staticmethod
    def list_store_ratings(db: Session, store_id: str) -> List[Rating]:
        """A store's ratings with their authors, in insertion order"""
        return (
            db.query(Rating)
            .options(joinedload(Rating.user))
            .filter(Rating.store_id == store_id)
            .order_by(Rating.created_at)
            .all()
        )

    @staticmethod
    def get_store_stats(db: Session, store: Store) -> Tuple[RatingAggregate, List[Rating]]:
        """
        Aggregate plus individual ratings for the owner/admin stats view

        The aggregate is computed from the same rows that are returned.
        """
        ratings = RatingService.list_store_ratings(db, store.id)
        return aggregate_values(r.rating for r in ratings), ratings
