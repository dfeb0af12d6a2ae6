"""
User Service
Persistence and credential operations for users
"""

import logging
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from storerate.core.auth import hash_password, verify_password
from storerate.core.exceptions import ConflictError, ValidationError
from storerate.models.user import User, UserRole
from storerate.schemas.auth import RegisterRequest

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid credentials"


def normalize_email(email: str) -> str:
    """Emails are stored and compared lowercase"""
    return email.strip().lower()


class UserService:
    """Service for managing user records"""

    @staticmethod
    def get_user(db: Session, user_id: str) -> Optional[User]:
        return db.get(User, user_id)

    @staticmethod
    def get_user_by_email(db: Session, email: str) -> Optional[User]:
        return db.query(User).filter(User.email == normalize_email(email)).first()

    @staticmethod
    def list_users(db: Session, role: Optional[UserRole] = None) -> List[User]:
        """
        List users in creation order

        Args:
            db: Database session
            role: Optional role filter
        """
        query = db.query(User)
        if role is not None:
            query = query.filter(User.role == role)
        return query.order_by(User.created_at, User.email).all()

    @staticmethod
    def create_user(db: Session, data: RegisterRequest) -> User:
        """
        Create a user from a validated registration

        Args:
            db: Database session
            data: Validated registration data

        Returns:
            Created User

        Raises:
            ConflictError: if the email is already registered (no row is created)
        """
        email = normalize_email(data.email)
        if UserService.get_user_by_email(db, email):
            raise ConflictError("Email already exists", errors={"email": "Email already exists"})

        user = User(
            name=data.name,
            email=email,
            password_hash=hash_password(data.password),
            role=data.role,
            address=data.address,
        )
        db.add(user)
        try:
            db.commit()
        except IntegrityError:
            # Lost a race against a concurrent registration with the same email
            db.rollback()
            raise ConflictError("Email already exists", errors={"email": "Email already exists"})
        db.refresh(user)

        logger.info(f"User created: {user.email} (ID: {user.id}, role: {user.role.value})")
        return user

    @staticmethod
    def authenticate(db: Session, email: str, password: str) -> Optional[User]:
        """
        Return the user if email and password match, None otherwise

        Unknown emails and wrong passwords are indistinguishable to the caller.
        """
        user = UserService.get_user_by_email(db, email)
        if user is None or not verify_password(password, user.password_hash):
            return None
        return user

    @staticmethod
    def update_password(db: Session, user: User, current_password: str, new_password: str) -> User:
        """
        Replace a user's password after re-checking the current one

        Raises:
            ValidationError: if the current password does not match
        """
        if not verify_password(current_password, user.password_hash):
            raise ValidationError(INVALID_CREDENTIALS, errors={"currentPassword": INVALID_CREDENTIALS})

        user.password_hash = hash_password(new_password)
        db.commit()
        db.refresh(user)

        logger.info(f"Password updated for user {user.email} (ID: {user.id})")
        return user
