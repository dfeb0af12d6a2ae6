"""
Rating Model
"""

from sqlalchemy import (
    Column, String, Integer, DateTime, ForeignKey, CheckConstraint, Index, UniqueConstraint
)
from sqlalchemy.orm import relationship
from storerate.db.base import Base
from storerate.utils.clock import utcnow
from storerate.models.user import new_id


class Rating(Base):
    """
    Rating model - join entity between a User and a Store

    A user holds at most one rating per store; resubmitting overwrites
    the value of the existing row.
    """
    __tablename__ = "ratings"

    id = Column(String(36), primary_key=True, default=new_id)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    store_id = Column(String(36), ForeignKey("stores.id"), nullable=False, index=True)
    rating = Column(Integer, nullable=False)
    created_at = Column(DateTime, default=utcnow, nullable=False)

    # Relationships
    user = relationship("User", back_populates="ratings")
    store = relationship("Store", back_populates="ratings")

    # Constraints
    __table_args__ = (
        # Natural key of the upsert: one rating per user per store
        UniqueConstraint("user_id", "store_id", name="uq_rating_user_store"),
        CheckConstraint("rating >= 1 AND rating <= 5", name="ck_rating_range"),
        # Composite index for efficient aggregate queries
        Index("ix_rating_store_lookup", "store_id", "rating"),
    )

    def __repr__(self):
        return f"<Rating(user_id={self.user_id}, store_id={self.store_id}, rating={self.rating})>"
