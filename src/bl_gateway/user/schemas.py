"""Pydantic request/response schemas for bl_gateway.

All responses are wrapped in ApiResponse at the router layer.
"""

import re

from pydantic import BaseModel, EmailStr, Field, field_validator

from src.bl_account.domain.models import User


def _check_complexity(v: str) -> str:
    """Enforce: at least one uppercase, one lowercase, one digit."""
    if not re.search(r"[A-Z]", v):
        raise ValueError("Password must contain at least one uppercase letter")
    if not re.search(r"[a-z]", v):
        raise ValueError("Password must contain at least one lowercase letter")
    if not re.search(r"\d", v):
        raise ValueError("Password must contain at least one digit")
    return v


class RegisterRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=120)
    email: EmailStr
    password: str = Field(..., min_length=8, max_length=128)
    whatsapp: str = Field(..., min_length=8, max_length=32)

    @field_validator("password")
    @classmethod
    def password_complexity(cls, v: str) -> str:
        return _check_complexity(v)


class LoginRequest(BaseModel):
    email: str
    password: str


class RefreshRequest(BaseModel):
    refresh_token: str


class UpdateProfileRequest(BaseModel):
    email: EmailStr
    whatsapp: str = Field(..., min_length=10, max_length=32)
    password: str | None = Field(None, min_length=8, max_length=128)

    @field_validator("password")
    @classmethod
    def password_complexity(cls, v: str | None) -> str | None:
        return None if v is None else _check_complexity(v)


class UserInfo(BaseModel):
    user_id: str
    name: str
    email: str
    whatsapp: str
    role: str
    profile_complete: bool
    created_at: str

    @classmethod
    def from_domain(cls, user: User) -> "UserInfo":
        return cls(
            user_id=user.id,
            name=user.name,
            email=user.email,
            whatsapp=user.whatsapp,
            role=user.role,
            profile_complete=user.profile_complete,
            created_at=user.created_at.isoformat(),
        )


class LoginResponse(BaseModel):
    access_token: str
    refresh_token: str
    token_type: str = "Bearer"
    expires_in: int = 1800  # 30 minutes in seconds
    user: UserInfo


class RefreshResponse(BaseModel):
    access_token: str
    expires_in: int = 1800
