"""
API routers
"""

from storerate.api import auth, users, stores, ratings, stats

__all__ = ["auth", "users", "stores", "ratings", "stats"]
