"""
SQLAlchemy Database Models
"""

from storerate.models.user import User, UserRole
from storerate.models.store import Store
from storerate.models.rating import Rating

__all__ = [
    "User",
    "UserRole",
    "Store",
    "Rating",
]
