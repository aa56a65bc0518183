"""Pydantic request/response schemas for cm_gateway.

All responses are wrapped in ApiResponse at the router layer.
"""

import re

from pydantic import BaseModel, EmailStr, Field, field_validator

from src.cm_gateway.user.models import User


def check_password_complexity(v: str) -> str:
    """Enforce: at least one uppercase, one lowercase, one digit."""
    if not re.search(r"[A-Z]", v):
        raise ValueError("Password must contain at least one uppercase letter")
    if not re.search(r"[a-z]", v):
        raise ValueError("Password must contain at least one lowercase letter")
    if not re.search(r"\d", v):
        raise ValueError("Password must contain at least one digit")
    return v


class RegisterRequest(BaseModel):
    username: str = Field(..., min_length=3, max_length=64, pattern=r"^[a-zA-Z0-9_]+$")
    email: EmailStr
    # bcrypt only hashes the first 72 bytes
    password: str = Field(..., min_length=8, max_length=72)
    mobile_number: str | None = Field(None, max_length=20)

    @field_validator("password")
    @classmethod
    def password_complexity(cls, v: str) -> str:
        return check_password_complexity(v)


class LoginRequest(BaseModel):
    username: str
    password: str


class RefreshRequest(BaseModel):
    refresh_token: str


class UserInfo(BaseModel):
    user_id: str
    username: str
    email: str
    mobile_number: str | None
    mobile_verified: bool
    is_admin: bool

    @classmethod
    def from_domain(cls, user: User) -> "UserInfo":
        return cls(
            user_id=user.id,
            username=user.username,
            email=user.email,
            mobile_number=user.mobile_number,
            mobile_verified=user.mobile_verified,
            is_admin=user.is_admin,
        )


class ProfileResponse(UserInfo):
    points: int


class AdminUserItem(ProfileResponse):
    """Row of the admin user list."""

    is_active: bool
    created_at: str

    @classmethod
    def from_account(cls, user: User, points: int) -> "AdminUserItem":
        return cls(
            **UserInfo.from_domain(user).model_dump(),
            points=points,
            is_active=user.is_active,
            created_at=user.created_at.isoformat(),
        )


class RegisterResponse(BaseModel):
    user_id: str
    username: str
    email: str
    created_at: str


class LoginResponse(BaseModel):
    access_token: str
    refresh_token: str
    token_type: str = "Bearer"
    expires_in: int = 1800  # 30 minutes in seconds
    user: UserInfo


class RefreshResponse(BaseModel):
    access_token: str
    expires_in: int = 1800
