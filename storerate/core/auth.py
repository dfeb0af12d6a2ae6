"""
Authentication Utilities
Password hashing and session token generation for the Store Rating Backend
"""

import logging
import secrets

from passlib.context import CryptContext

from storerate.config import BCRYPT_ROUNDS

logger = logging.getLogger(__name__)

# Password hashing configuration using bcrypt
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=BCRYPT_ROUNDS)

# Bytes of randomness in a session token
SESSION_TOKEN_BYTES = 32


# ============================================================================
# Password Hashing Functions
# ============================================================================


def hash_password(password: str) -> str:
    """
    Hash a plain text password using bcrypt

    Args:
        password: Plain text password

    Returns:
        Salted bcrypt hash string
    """
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verify a plain text password against a hashed password

    Args:
        plain_password: Plain text password to verify
        hashed_password: Hashed password from database

    Returns:
        True if password matches, False otherwise (including unrecognized hashes)
    """
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except (ValueError, TypeError):
        logger.warning("Stored password hash could not be identified")
        return False


# ============================================================================
# Session Token Functions
# ============================================================================


def generate_session_token() -> str:
    """Create an unguessable URL-safe session token"""
    return secrets.token_urlsafe(SESSION_TOKEN_BYTES)
