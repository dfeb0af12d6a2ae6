"""
User Schemas
"""

from datetime import datetime
from typing import Optional

from storerate.models.user import UserRole
from storerate.schemas.common import CamelModel


class UserResponse(CamelModel):
    """User as exposed by the API (password hash omitted)"""
    id: str
    name: str
    email: str
    role: UserRole
    address: Optional[str] = None
    created_at: datetime
