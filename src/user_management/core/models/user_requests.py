"""Request payloads accepted by the user endpoints.

These are transient shapes that never reach the store directly; the mapper
turns them into :class:`User` entities.
"""

from typing import Annotated, Any

from pydantic import (
    BaseModel,
    ConfigDict,
    EmailStr,
    Field,
    StrictInt,
    StrictStr,
    field_validator,
)
from pydantic.alias_generators import to_camel

from src.user_management.entities.user import UserStatus

E164_PATTERN = r"^\+[0-9]{1,15}$"
# Range of the INT column backing age
MAX_AGE = 2_147_483_647

Name = Annotated[StrictStr, Field(min_length=2, max_length=50)]
Phone = Annotated[StrictStr, Field(pattern=E164_PATTERN)]
Age = Annotated[StrictInt, Field(gt=0, le=MAX_AGE)]


class _RequestModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="ignore"
    )

    @field_validator("email", mode="before", check_fields=False)
    @classmethod
    def reject_display_name(cls, value: Any) -> Any:
        """Accept a bare address only, never the `Name <address>` form."""
        if isinstance(value, str) and ("<" in value or ">" in value):
            raise ValueError(
                "value is not a valid email address: display names are not allowed"
            )
        return value


class CreateUserRequest(_RequestModel):
    """Payload for creating a user."""

    first_name: Name
    last_name: Name
    email: EmailStr
    phone: Phone
    age: Age | None = None
    status: UserStatus | None = None


class UpdateUserRequest(_RequestModel):
    """Payload for a partial update.

    Every field is optional. A missing or ``null`` field leaves the stored
    value unchanged.
    """

    first_name: Name | None = None
    last_name: Name | None = None
    email: EmailStr | None = None
    phone: Phone | None = None
    age: Age | None = None
    status: UserStatus | None = None
