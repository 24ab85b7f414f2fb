"""User API endpoints."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from src.api.dependencies import get_current_claims, get_user_repository
from src.database import StoreError
from src.repositories.user_repository import UserRepository
from src.schemas.user import (
    MessageResponse,
    UserCreate,
    UserCreatedResponse,
    UserResponse,
    UserUpdate,
)
from src.services.auth import hash_password_async

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/usuarios",
    tags=["usuarios"],
    dependencies=[Depends(get_current_claims)],
)


def server_error(detail: str) -> HTTPException:
    """Generic 500; the cause is logged, never returned."""
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=detail)


@router.get("", response_model=list[UserResponse])
async def list_users(
    repo: Annotated[UserRepository, Depends(get_user_repository)],
):
    """Get all users."""
    try:
        users = await repo.list_all()
    except StoreError:
        logger.exception("Listing users failed")
        raise server_error("error fetching users") from None

    return [UserResponse.model_validate(user) for user in users]


@router.post("", response_model=UserCreatedResponse, status_code=status.HTTP_201_CREATED)
async def create_user(
    user_data: UserCreate,
    repo: Annotated[UserRepository, Depends(get_user_repository)],
):
    """Create a new user."""
    if not user_data.nombre or not user_data.correo_electronico or not user_data.contrasena:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="missing required fields"
        )

    try:
        password_hash = await hash_password_async(user_data.contrasena)
        user = await repo.create(
            name=user_data.nombre,
            email=user_data.correo_electronico,
            password_hash=password_hash,
            description=user_data.descripcion or "",
        )
    except (StoreError, ValueError):
        logger.exception("Creating user failed")
        raise server_error("error creating user") from None

    return UserCreatedResponse(message="user created", usuario=UserResponse.model_validate(user))


@router.put("/{user_id}", response_model=MessageResponse)
async def update_user(
    user_id: int,
    user_data: UserUpdate,
    repo: Annotated[UserRepository, Depends(get_user_repository)],
):
    """Update a user. Only the fields present in the body are written.

    Empty name, email or password are skipped like omitted ones, since those
    fields are required on every stored user.
    """
    try:
        password_hash = None
        if user_data.contrasena:
            password_hash = await hash_password_async(user_data.contrasena)

        await repo.update(
            user_id,
            name=user_data.nombre or None,
            email=user_data.correo_electronico or None,
            password_hash=password_hash,
            description=user_data.descripcion,
        )
    except (StoreError, ValueError):
        logger.exception(f"Updating user {user_id} failed")
        raise server_error("error updating user") from None

    return MessageResponse(message="user updated")


@router.delete("/{user_id}", response_model=MessageResponse)
async def delete_user(
    user_id: int,
    repo: Annotated[UserRepository, Depends(get_user_repository)],
):
    """Delete a user. Deleting an unknown id still succeeds."""
    try:
        await repo.delete(user_id)
    except StoreError:
        logger.exception(f"Deleting user {user_id} failed")
        raise server_error("error deleting user") from None

    return MessageResponse(message="user deleted")
