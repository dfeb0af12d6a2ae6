"""
Authentication Routes
Endpoints for registration, login, logout, current user and password change
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from storerate.config import SESSION_COOKIE_NAME, SESSION_COOKIE_SECURE, SESSION_TTL_HOURS
from storerate.core.dependencies import get_current_user, get_session_store, get_session_token
from storerate.core.exceptions import Forbidden, Unauthorized
from storerate.db import get_db
from storerate.models import User, UserRole
from storerate.schemas import (
    AuthResponse,
    AuthUser,
    CurrentUserResponse,
    LoginRequest,
    MessageResponse,
    RegisterRequest,
    UpdatePasswordRequest,
)
from storerate.services.user_service import INVALID_CREDENTIALS, UserService
from storerate.utils.session_manager import SessionStore

# Configure logging
logger = logging.getLogger(__name__)

# Create router
router = APIRouter(prefix="/api/auth", tags=["Authentication"])


# ============================================================================
# Helper Functions
# ============================================================================


def start_session(response: Response, sessions: SessionStore, user: User, message: str) -> AuthResponse:
    """Bind a new session to the user, set the cookie and build the response"""
    session = sessions.create(user.id)
    response.set_cookie(
        key=SESSION_COOKIE_NAME,
        value=session.token,
        max_age=SESSION_TTL_HOURS * 60 * 60,
        httponly=True,
        secure=SESSION_COOKIE_SECURE,
        samesite="lax",
    )
    return AuthResponse(
        message=message,
        user=AuthUser(id=user.id, email=user.email, role=user.role),
        token=session.token,
    )


# ============================================================================
# Authentication Endpoints
# ============================================================================


@router.post(
    "/login",
    response_model=AuthResponse,
    summary="Login with email and password",
    description="Authenticate and start a session (cookie plus token in the body)"
)
def login(
    request: LoginRequest,
    response: Response,
    sessions: SessionStore = Depends(get_session_store),
    db: Session = Depends(get_db)
):
    """
    Login with email and password

    Wrong passwords and unknown emails get the same generic answer.
    """
    user = UserService.authenticate(db, request.email, request.password)
    if user is None:
        logger.info("Failed login attempt")
        raise Unauthorized(INVALID_CREDENTIALS)

    logger.info(f"User logged in: {user.email} (ID: {user.id})")
    return start_session(response, sessions, user, "Login successful")


@router.post(
    "/register",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a new account",
    description="Create a user or store owner account and start a session"
)
def register(
    request: RegisterRequest,
    response: Response,
    sessions: SessionStore = Depends(get_session_store),
    db: Session = Depends(get_db)
):
    """
    Register a new account

    - **name**: 20-60 characters
    - **email**: Valid email address (must be unique)
    - **password**: 8-16 characters with an uppercase letter and a special character
    - **address**: up to 400 characters
    - **role**: user (default) or store_owner; admins are created by admins only
    """
    if request.role == UserRole.ADMIN:
        raise Forbidden("Admin accounts can only be created by an admin")

    user = UserService.create_user(db, request)

    logger.info(f"New {user.role.value} registered: {user.email} (ID: {user.id})")
    return start_session(response, sessions, user, "Registration successful")


@router.post(
    "/logout",
    response_model=MessageResponse,
    summary="Logout user",
    description="Destroy the current session"
)
def logout(
    response: Response,
    current_user: User = Depends(get_current_user),
    token: Optional[str] = Depends(get_session_token),
    sessions: SessionStore = Depends(get_session_store)
):
    sessions.destroy(token)
    response.delete_cookie(SESSION_COOKIE_NAME)
    logger.info(f"User logged out: {current_user.email} (ID: {current_user.id})")
    return MessageResponse(message="Logout successful")


@router.get(
    "/user",
    response_model=CurrentUserResponse,
    summary="Get current user information",
    description="Get information about the currently authenticated user"
)
def get_me(current_user: User = Depends(get_current_user)):
    return CurrentUserResponse(
        id=current_user.id,
        email=current_user.email,
        role=current_user.role,
        name=current_user.name,
    )


@router.post(
    "/update-password",
    response_model=MessageResponse,
    summary="Change own password",
    description="Requires the current password; other sessions of the user are ended"
)
def update_password(
    request: UpdatePasswordRequest,
    current_user: User = Depends(get_current_user),
    token: Optional[str] = Depends(get_session_token),
    sessions: SessionStore = Depends(get_session_store),
    db: Session = Depends(get_db)
):
    UserService.update_password(db, current_user, request.current_password, request.new_password)
    sessions.destroy_user(current_user.id, keep=token)
    return MessageResponse(message="Password updated successfully")
