"""User API router with CRUD operations."""

import uuid
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, status
from loguru import logger
from pydantic import BaseModel

from src.user_management.api.http.deps import (
    get_json_body,
    get_user_id,
    get_user_store,
    get_user_validator,
)
from src.user_management.core.services import (
    UserRequestValidator,
    UserValidationError,
    apply_update,
    create_request_to_entity,
)
from src.user_management.core.storage import UserStore, UserStoreError
from src.user_management.entities.user import User

router = APIRouter()

USER_NOT_FOUND = "User Not Found!"


class UserResponse(BaseModel):
    message: str
    user: User


class MessageResponse(BaseModel):
    message: str


def _validation_failed(exc: UserValidationError) -> HTTPException:
    logger.info("Rejected user payload: {}", exc)
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=exc.errors)


def _store_failed(exc: UserStoreError, detail: str) -> HTTPException:
    logger.opt(exception=exc).error(detail)
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=detail)


@router.post("", status_code=status.HTTP_201_CREATED, response_model=UserResponse)
def create_user(
    payload: Any = Depends(get_json_body),
    store: UserStore = Depends(get_user_store),
    validator: UserRequestValidator = Depends(get_user_validator),
) -> UserResponse:
    """Create a new user."""
    try:
        request = validator.validate_create(payload)
    except UserValidationError as exc:
        raise _validation_failed(exc) from exc

    try:
        created_user = store.create(create_request_to_entity(request))
    except UserStoreError as exc:
        raise _store_failed(exc, "Failed to Create User!") from exc

    return UserResponse(message="User created successfully!", user=created_user)


@router.get("", response_model=list[User])
def list_users(store: UserStore = Depends(get_user_store)) -> list[User]:
    """List all users."""
    try:
        return store.get_all()
    except UserStoreError as exc:
        raise _store_failed(exc, "Failed to Retrieve Users!") from exc


@router.get("/{user_id}", response_model=User)
def get_user(
    user_id: uuid.UUID = Depends(get_user_id),
    store: UserStore = Depends(get_user_store),
) -> User:
    """Get a user by ID."""
    try:
        user = store.get_by_id(user_id)
    except UserStoreError as exc:
        raise _store_failed(exc, "Failed to Retrieve User!") from exc

    if user is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=USER_NOT_FOUND)
    return user


@router.patch("/{user_id}", response_model=UserResponse)
def update_user(
    payload: Any = Depends(get_json_body),
    user_id: uuid.UUID = Depends(get_user_id),
    store: UserStore = Depends(get_user_store),
    validator: UserRequestValidator = Depends(get_user_validator),
) -> UserResponse:
    """Apply a partial update to a user."""
    try:
        request = validator.validate_update(payload)
    except UserValidationError as exc:
        raise _validation_failed(exc) from exc

    try:
        existing = store.get_by_id(user_id)
    except UserStoreError as exc:
        raise _store_failed(exc, "Failed to Retrieve User!") from exc

    if existing is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=USER_NOT_FOUND)

    try:
        updated_user = store.update(apply_update(existing, request), user_id)
    except UserStoreError as exc:
        raise _store_failed(exc, "Failed to Update User!") from exc

    # Deleted between the read and the write
    if updated_user is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=USER_NOT_FOUND)

    return UserResponse(message="User updated successfully!", user=updated_user)


@router.delete("/{user_id}", response_model=MessageResponse)
def delete_user(
    user_id: uuid.UUID = Depends(get_user_id),
    store: UserStore = Depends(get_user_store),
) -> MessageResponse:
    """Delete a user."""
    try:
        deleted = store.delete(user_id)
    except UserStoreError as exc:
        raise _store_failed(exc, "Failed to Delete User!") from exc

    if not deleted:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=USER_NOT_FOUND)
    return MessageResponse(message="User deleted successfully!")
