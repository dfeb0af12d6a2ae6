"""
User Management Routes
Admin-only listing and creation of users
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from storerate.core.dependencies import require_admin
from storerate.db import get_db
from storerate.models import User, UserRole
from storerate.schemas import RegisterRequest, UserResponse
from storerate.services.user_service import UserService

# Configure logging
logger = logging.getLogger(__name__)

# Create router
router = APIRouter(prefix="/api/users", tags=["User Management"])


@router.get(
    "",
    response_model=List[UserResponse],
    summary="List users (ADMIN only)",
    description="All users without password hashes, optionally filtered by role"
)
def list_users(
    role: Optional[UserRole] = Query(None, description="Filter by role"),
    current_user: User = Depends(require_admin),
    db: Session = Depends(get_db)
):
    users = UserService.list_users(db, role=role)
    return [UserResponse.model_validate(u) for u in users]


@router.post(
    "",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a user (ADMIN only)",
    description="Create a user of any role, including admins"
)
def create_user(
    request: RegisterRequest,
    current_user: User = Depends(require_admin),
    db: Session = Depends(get_db)
):
    """
    Create a user

    Same validation as self-service registration; no session is started
    for the new user.
    """
    user = UserService.create_user(db, request)
    logger.info(f"User {user.email} created by admin {current_user.email}")
    return UserResponse.model_validate(user)
