"""
Rating Aggregation
The one place where a store's average rating and rating count are computed
"""

from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Tuple

from sqlalchemy import func

from storerate.models.rating import Rating

# Averages are reported with one decimal place
AVERAGE_PRECISION = Decimal("0.1")


@dataclass(frozen=True)
class RatingAggregate:
    """Derived (average_rating, total_ratings) pair, never persisted"""
    average_rating: float
    total_ratings: int

    @classmethod
    def empty(cls) -> "RatingAggregate":
        return cls(average_rating=0, total_ratings=0)


def summarize(total, count) -> RatingAggregate:
    """
    Build an aggregate from the sum and count of rating values

    Rounds half-up to one decimal; no ratings gives 0 and 0, never NaN or None.

    Args:
        total: Sum of rating values (None is treated as 0)
        count: Number of ratings (None is treated as 0)
    """
    count = int(count or 0)
    if count == 0:
        return RatingAggregate.empty()
    average = (Decimal(int(total or 0)) / Decimal(count)).quantize(AVERAGE_PRECISION, rounding=ROUND_HALF_UP)
    return RatingAggregate(average_rating=float(average), total_ratings=count)


def aggregate_values(values: Iterable[int]) -> RatingAggregate:
    """Aggregate already loaded rating values"""
    values = list(values)
    return summarize(sum(values), len(values))


def aggregate_columns() -> Tuple:
    """
    SQL expressions (sum, count) over Rating rows for use in a grouped query

    COUNT(ratings.id) ignores the NULL rows produced by an outer join, so
    stores without ratings come out as (0, 0).
    """
    return (
        func.coalesce(func.sum(Rating.rating), 0).label("rating_sum"),
        func.count(Rating.id).label("rating_count"),
    )
