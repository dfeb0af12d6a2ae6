"""
Services: persistence, queries and rating aggregation
"""

from storerate.services.aggregation import RatingAggregate, summarize, aggregate_values
from storerate.services.user_service import UserService
from storerate.services.store_service import StoreService
from storerate.services.rating_service import RatingService
from storerate.services.stats_service import StatsService

__all__ = [
    "RatingAggregate",
    "summarize",
    "aggregate_values",
    "UserService",
    "StoreService",
    "RatingService",
    "StatsService",
]
