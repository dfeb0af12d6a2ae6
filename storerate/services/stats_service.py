"""
Stats Service
Counters for the admin dashboard
"""

from typing import Dict

from sqlalchemy import func
from sqlalchemy.orm import Session

from storerate.models import Rating, Store, User


class StatsService:
    """Service for system-wide counts"""

    @staticmethod
    def get_stats(db: Session) -> Dict[str, int]:
        """
        Total users, stores and ratings

        Returns:
            {"total_users": int, "total_stores": int, "total_ratings": int}
        """
        return {
            "total_users": db.query(func.count(User.id)).scalar() or 0,
            "total_stores": db.query(func.count(Store.id)).scalar() or 0,
            "total_ratings": db.query(func.count(Rating.id)).scalar() or 0,
        }
