"""
Stats Schemas
"""

from storerate.schemas.common import CamelModel


class StatsResponse(CamelModel):
    """Schema for the admin dashboard counters"""
    total_users: int
    total_stores: int
    total_ratings: int
