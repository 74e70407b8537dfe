"""FastAPI dependency implementations."""

from __future__ import annotations

import json
import uuid
from typing import Any

from fastapi import HTTPException, Request

from src.user_management.api.http.app_data import ApplicationDependencies
from src.user_management.core.services import UserRequestValidator
from src.user_management.core.storage import UserStore

INVALID_BODY = "Invalid Request Body!"
INVALID_USER_ID = "Invalid User Id!"


def get_app_dependencies(request: Request) -> ApplicationDependencies:
    """Get the application-wide dependency container."""
    return request.app.state.app_dependencies


def get_user_store(request: Request) -> UserStore:
    """Get the configured user store."""
    return get_app_dependencies(request).user_store


def get_user_validator(request: Request) -> UserRequestValidator:
    """Get the request validator."""
    return get_app_dependencies(request).user_validator


async def get_json_body(request: Request) -> Any:
    """Decode the request body as JSON, rejecting anything undecodable with a 400."""
    raw = await request.body()
    try:
        return json.loads(raw)
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise HTTPException(status_code=400, detail=INVALID_BODY) from exc


def get_user_id(user_id: str) -> uuid.UUID:
    """Parse the ``{user_id}`` path segment as a UUID."""
    try:
        return uuid.UUID(user_id)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=INVALID_USER_ID) from exc
