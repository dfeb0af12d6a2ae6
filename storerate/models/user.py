"""
User Model
"""

import uuid
from enum import Enum as PyEnum
from sqlalchemy import Column, String, DateTime, Enum, Text
from sqlalchemy.orm import relationship
from storerate.db.base import Base
from storerate.utils.clock import utcnow


class UserRole(str, PyEnum):
    """User role enumeration"""
    ADMIN = "admin"
    USER = "user"
    STORE_OWNER = "store_owner"


def new_id() -> str:
    """Generate a new primary key"""
    return str(uuid.uuid4())


class User(Base):
    """
    User model - represents admins, regular users and store owners

    Relationships:
    - STORE_OWNER: owns stores (owned_stores relationship)
    - every role: submits ratings (ratings relationship)
    """
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=new_id, index=True)
    name = Column(String(60), nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(
        Enum(UserRole, name="user_role", values_callable=lambda roles: [r.value for r in roles]),
        nullable=False,
        default=UserRole.USER,
        index=True,
    )
    address = Column(Text, nullable=True)
    created_at = Column(DateTime, default=utcnow, nullable=False)

    # Relationships
    owned_stores = relationship("Store", back_populates="owner", foreign_keys="Store.owner_id")
    ratings = relationship("Rating", back_populates="user")

    def __repr__(self):
        return f"<User(id={self.id}, email={self.email}, role={self.role})>"
