"""
Store Model
"""

from sqlalchemy import Column, String, DateTime, ForeignKey, Text
from sqlalchemy.orm import relationship
from storerate.db.base import Base
from storerate.utils.clock import utcnow
from storerate.models.user import new_id


class Store(Base):
    """
    Store model - created by admins, optionally owned by a STORE_OWNER user

    Relationships:
    - Belongs to at most one STORE_OWNER (owner relationship)
    - Receives ratings from users (ratings relationship)
    """
    __tablename__ = "stores"

    id = Column(String(36), primary_key=True, default=new_id, index=True)
    name = Column(String(100), nullable=False)
    email = Column(String(255), nullable=False)
    address = Column(Text, nullable=False)
    owner_id = Column(String(36), ForeignKey("users.id"), nullable=True, index=True)
    created_at = Column(DateTime, default=utcnow, nullable=False)

    # Relationships
    owner = relationship("User", back_populates="owned_stores", foreign_keys=[owner_id])
    ratings = relationship("Rating", back_populates="store")

    def __repr__(self):
        return f"<Store(id={self.id}, name={self.name}, owner_id={self.owner_id})>"
