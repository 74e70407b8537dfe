"""Core services exports."""

from .database.db_session import DbSessionService
from .user.user_mapper import apply_update, create_request_to_entity
from .user.user_validation import UserRequestValidator, UserValidationError

__all__ = [
    # Database Service
    "DbSessionService",
    # User Services
    "UserRequestValidator",
    "UserValidationError",
    "apply_update",
    "create_request_to_entity",
]
