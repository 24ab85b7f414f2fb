"""Authentication schemas."""

from datetime import datetime

from pydantic import BaseModel, Field

from src.schemas.user import UserResponse


class UserLogin(BaseModel):
    """Login request.

    Both fields are optional here so that missing or empty values reach the
    handler and are answered with a 400 instead of a schema error.
    """

    correo_electronico: str | None = None
    contrasena: str | None = None


class LoginResponse(BaseModel):
    """Successful login: session token plus the user projection."""

    success: bool = True
    message: str = "login successful"
    token: str
    usuario: UserResponse


class TokenClaims(BaseModel):
    """Claims carried by a session token."""

    user_id: int = Field(validation_alias="sub")
    email: str
    issued_at: datetime = Field(validation_alias="iat")
    expires_at: datetime = Field(validation_alias="exp")
