"""
Stats Routes
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from storerate.core.dependencies import require_admin
from storerate.db import get_db
from storerate.models import User
from storerate.schemas import StatsResponse
from storerate.services.stats_service import StatsService

router = APIRouter(prefix="/api/stats", tags=["Stats"])


@router.get(
    "",
    response_model=StatsResponse,
    summary="Dashboard counters (ADMIN only)",
    description="Total number of users, stores and ratings"
)
def get_stats(
    current_user: User = Depends(require_admin),
    db: Session = Depends(get_db)
):
    return StatsResponse(**StatsService.get_stats(db))
