"""
Authentication Dependencies
FastAPI dependencies for session authentication and role-based authorization
"""

import logging
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from storerate.config import SESSION_COOKIE_NAME
from storerate.core.exceptions import Forbidden, Unauthorized
from storerate.db import get_db
from storerate.models import Store, User, UserRole
from storerate.services.store_service import StoreService
from storerate.services.user_service import UserService
from storerate.utils.session_manager import SessionStore

logger = logging.getLogger(__name__)

# Bearer token scheme, optional because browsers authenticate with the cookie
security = HTTPBearer(auto_error=False)


# ============================================================================
# Session Dependencies
# ============================================================================


def get_session_store(request: Request) -> SessionStore:
    """The session store injected into the application at startup"""
    return request.app.state.session_store


def get_session_token(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> Optional[str]:
    """
    Session token from the Authorization header, falling back to the cookie
    """
    if credentials is not None:
        return credentials.credentials
    return request.cookies.get(SESSION_COOKIE_NAME)


# ============================================================================
# Authentication Dependencies
# ============================================================================


def get_current_user(
    token: Optional[str] = Depends(get_session_token),
    sessions: SessionStore = Depends(get_session_store),
    db: Session = Depends(get_db),
) -> User:
    """
    Dependency to get the current authenticated user from the session token

    Raises:
        Unauthorized: if no token is present, the token is unknown or
            expired, or the user no longer exists

    Usage:
        @router.get("/protected")
        def protected_route(current_user: User = Depends(get_current_user)):
            return {"user_id": current_user.id}
    """
    user_id = sessions.resolve(token)
    if user_id is None:
        raise Unauthorized()

    user = UserService.get_user(db, user_id)
    if user is None:
        sessions.destroy(token)
        raise Unauthorized()

    return user


# ============================================================================
# Authorization Dependencies (Role-Based)
# ============================================================================


def require_role(*allowed_roles: UserRole):
    """
    Factory function to create role-based authorization dependency

    Args:
        allowed_roles: Roles permitted to call the endpoint

    Returns:
        Dependency function that checks user role

    Usage:
        @router.get("/admin-only")
        def admin_only(current_user: User = Depends(require_role(UserRole.ADMIN))):
            return {"message": "Admin access granted"}
    """
    allowed = frozenset(allowed_roles)
    required = ", ".join(sorted(role.value for role in allowed))

    def role_checker(current_user: User = Depends(get_current_user)) -> User:
        if current_user.role not in allowed:
            logger.info(f"Role check failed for {current_user.email}: {current_user.role.value} not in [{required}]")
            raise Forbidden(f"Access denied. Required role: {required}")
        return current_user

    return role_checker


# Convenience dependency for admin endpoints
require_admin = require_role(UserRole.ADMIN)


# ============================================================================
# Store Access Authorization
# ============================================================================


def can_view_store_stats(user: User, store: Store) -> bool:
    """
    Whether a user may see a store's statistics

    Rules:
    - ADMIN: every store
    - STORE_OWNER: only the store they own
    - USER: never (a user cannot own a store)
    """
    if user.role == UserRole.ADMIN:
        return True
    elif user.role == UserRole.STORE_OWNER:
        return store.owner_id is not None and store.owner_id == user.id
    elif user.role == UserRole.USER:
        return False
    raise ValueError(f"Unhandled role: {user.role}")


def verify_store_stats_access(store_id: str, current_user: User, db: Session) -> Store:
    """
    Fetch a store and check the current user may see its statistics

    Raises:
        NotFound: if the store does not exist
        Forbidden: if the user is neither an admin nor the store's owner
    """
    store = StoreService.get_store_or_404(db, store_id)

    if not can_view_store_stats(current_user, store):
        logger.info(f"Stats access denied: {current_user.email} for store {store.id}")
        raise Forbidden("Access denied")

    return store


def get_accessible_store(
    store_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> Store:
    """
    Dependency to get a store whose statistics the current user may see

    Usage:
        @router.get("/stores/{store_id}/stats")
        def get_stats(store: Store = Depends(get_accessible_store)):
            return store
    """
    return verify_store_stats_access(store_id, current_user, db)
