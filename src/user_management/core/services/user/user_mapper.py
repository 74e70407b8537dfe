"""Translation between request models and the User entity."""

from src.user_management.core.models.user_requests import (
    CreateUserRequest,
    UpdateUserRequest,
)
from src.user_management.entities.user import User, UserStatus


def create_request_to_entity(request: CreateUserRequest) -> User:
    """Build a new, not yet persisted, user from a create request.

    The id stays unset so the store can assign one.
    """
    return User(
        first_name=request.first_name,
        last_name=request.last_name,
        email=str(request.email),
        phone=request.phone,
        age=request.age or 0,
        status=request.status or UserStatus.ACTIVE,
    )


def apply_update(existing: User, request: UpdateUserRequest) -> User:
    """Merge the fields present in ``request`` onto ``existing``.

    Fields that are absent or null in the request keep their current value.
    ``existing`` is not modified; the merged copy is returned for the caller
    to persist.
    """
    changes = request.model_dump(exclude_none=True)
    if "email" in changes:
        changes["email"] = str(changes["email"])
    return existing.model_copy(update=changes)
