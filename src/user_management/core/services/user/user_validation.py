"""Validation of decoded request bodies into user request models."""

from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from src.user_management.core.models.user_requests import (
    CreateUserRequest,
    UpdateUserRequest,
)

T = TypeVar("T", bound=BaseModel)


class UserValidationError(ValueError):
    """Raised when a request body violates one or more field rules.

    Attributes:
        errors: One message per violated constraint, in field order.
    """

    def __init__(self, errors: list[str]):
        self.errors = errors
        super().__init__("; ".join(errors))


def _format_error(error: dict[str, Any]) -> str:
    location = ".".join(str(part) for part in error["loc"]) or "body"
    return f"{location}: {error['msg']}"


class UserRequestValidator:
    """Validates create and update payloads.

    Instances hold no state, so a single validator can be shared by every
    request. It is constructed by the application and handed to the routes
    through dependency injection.
    """

    def validate_create(self, payload: Any) -> CreateUserRequest:
        return self._validate(CreateUserRequest, payload)

    def validate_update(self, payload: Any) -> UpdateUserRequest:
        return self._validate(UpdateUserRequest, payload)

    def _validate(self, model_class: type[T], payload: Any) -> T:
        if not isinstance(payload, dict):
            raise UserValidationError(["body: Input should be a JSON object"])
        try:
            return model_class.model_validate(payload)
        except ValidationError as exc:
            raise UserValidationError(
                [_format_error(error) for error in exc.errors()]
            ) from exc
