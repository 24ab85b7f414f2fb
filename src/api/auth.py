"""Authentication API endpoints."""

import logging
import re
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from src.api.dependencies import get_user_repository
from src.database import StoreError
from src.repositories.user_repository import UserRepository
from src.schemas.auth import LoginResponse, UserLogin
from src.schemas.user import UserResponse
from src.services.auth import create_access_token, verify_password_async

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


@router.post("/login", response_model=LoginResponse)
async def login(
    credentials: UserLogin,
    repo: Annotated[UserRepository, Depends(get_user_repository)],
):
    """Login with email and password."""
    if not credentials.correo_electronico or not credentials.contrasena:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="missing login data")

    if not EMAIL_PATTERN.match(credentials.correo_electronico):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="invalid email")

    try:
        user = await repo.find_by_email(credentials.correo_electronico)
    except StoreError:
        logger.exception("Login lookup failed")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="server error"
        ) from None

    if user is None:
        logger.info(f"Login for unknown email {credentials.correo_electronico}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="user does not exist",
            headers={"WWW-Authenticate": "Bearer"},
        )

    if not await verify_password_async(credentials.contrasena, user.password_hash):
        logger.info(f"Wrong password for user {user.id}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="incorrect user or password",
            headers={"WWW-Authenticate": "Bearer"},
        )

    token = create_access_token(user.id, user.email)
    logger.info(f"Login: user {user.id}")

    return LoginResponse(token=token, usuario=UserResponse.model_validate(user))
