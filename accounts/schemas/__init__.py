"""Pydantic schemas for API requests and responses."""

from accounts.schemas.user import (
    AuthResponse,
    MessageResponse,
    ProfileResponse,
    UserLogin,
    UserRegister,
    UserResponse,
    UserUpdate,
)

__all__ = [
    "UserRegister",
    "UserLogin",
    "UserUpdate",
    "UserResponse",
    "ProfileResponse",
    "AuthResponse",
    "MessageResponse",
]
