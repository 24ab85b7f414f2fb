"""Pydantic schemas for API requests and responses."""

from src.schemas.auth import LoginResponse, TokenClaims, UserLogin
from src.schemas.user import (
    MessageResponse,
    UserCreate,
    UserCreatedResponse,
    UserResponse,
    UserUpdate,
)

__all__ = [
    "UserLogin",
    "LoginResponse",
    "TokenClaims",
    "UserCreate",
    "UserUpdate",
    "UserResponse",
    "UserCreatedResponse",
    "MessageResponse",
]
