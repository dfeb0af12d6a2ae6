"""
Authentication Schemas
Request validation for login, registration and password update, plus auth responses
"""

from pydantic import ConfigDict, EmailStr, Field, field_validator

from storerate.config import PASSWORD_SPECIAL_CHARACTERS
from storerate.models.user import UserRole
from storerate.schemas.common import CamelModel

PASSWORD_MIN_LENGTH = 8
PASSWORD_MAX_LENGTH = 16


def check_password_strength(password: str) -> str:
    """
    Enforce the password policy shared by registration and password update

    - 8 to 16 characters
    - at least one uppercase letter
    - at least one special character from PASSWORD_SPECIAL_CHARACTERS
    - no NUL characters (bcrypt cannot hash them)

    Raises:
        ValueError: describing the first rule that fails
    """
    if "\x00" in password:
        raise ValueError("Password must not contain NUL characters")
    if len(password) < PASSWORD_MIN_LENGTH:
        raise ValueError(f"Password must be at least {PASSWORD_MIN_LENGTH} characters")
    if len(password) > PASSWORD_MAX_LENGTH:
        raise ValueError(f"Password must be at most {PASSWORD_MAX_LENGTH} characters")
    has_upper = any(ch.isupper() for ch in password)
    has_special = any(ch in PASSWORD_SPECIAL_CHARACTERS for ch in password)
    if not (has_upper and has_special):
        raise ValueError("Password must include at least one uppercase letter and one special character")
    return password


class LoginRequest(CamelModel):
    """Request model for login"""
    email: EmailStr = Field(..., description="User's email address")
    password: str = Field(..., min_length=1, description="User's password")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "email": "john.doe@example.com",
                "password": "Secure#Pass1"
            }
        }
    )


class RegisterRequest(CamelModel):
    """Request model for registration (self-service and admin-created users)"""
    name: str = Field(..., min_length=20, max_length=60, description="Full name (20-60 characters)")
    email: EmailStr = Field(..., description="Email address (must be unique)")
    password: str = Field(..., description="8-16 characters, one uppercase letter and one special character")
    address: str = Field(..., max_length=400, description="Postal address (max 400 characters)")
    role: UserRole = Field(UserRole.USER, description="admin, user or store_owner")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "name": "Johnathan Alexander Doe",
                "email": "john.doe@example.com",
                "password": "Secure#Pass1",
                "address": "123 Main St, City, State 12345",
                "role": "user"
            }
        }
    )

    @field_validator("password")
    @classmethod
    def validate_password(cls, value: str) -> str:
        return check_password_strength(value)


class UpdatePasswordRequest(CamelModel):
    """Request model for self-service password change"""
    current_password: str = Field(..., min_length=1, description="Current password")
    new_password: str = Field(..., description="New password, same rules as registration")

    @field_validator("new_password")
    @classmethod
    def validate_new_password(cls, value: str) -> str:
        return check_password_strength(value)


class AuthUser(CamelModel):
    """Identity returned after login or registration"""
    id: str
    email: str
    role: UserRole


class AuthResponse(CamelModel):
    """Response model for successful login or registration"""
    message: str = Field(..., description="Result message")
    user: AuthUser = Field(..., description="Authenticated user")
    token: str = Field(..., description="Session token, also set as a cookie")


class CurrentUserResponse(CamelModel):
    """Response model for the current session's user"""
    id: str
    email: str
    role: UserRole
    name: str
