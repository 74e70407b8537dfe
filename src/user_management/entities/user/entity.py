"""User domain entity."""

import uuid
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class UserStatus(str, Enum):
    """Lifecycle status of a user account."""

    ACTIVE = "Active"
    INACTIVE = "Inactive"


class User(BaseModel):
    """User entity representing a person in the system.

    The identifier is left unset until a store persists the entity; stores
    assign it on creation and never change it afterwards. An ``age`` of ``0``
    means the age was not provided.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: uuid.UUID | None = Field(
        default=None, description="Unique identifier for the user"
    )
    first_name: str = Field(description="User's first name")
    last_name: str = Field(description="User's last name")
    email: str = Field(description="User's email address")
    phone: str = Field(description="User's phone number in E.164 format")
    age: int = Field(default=0, description="User's age, 0 when not provided")
    status: UserStatus = Field(
        default=UserStatus.ACTIVE, description="Account status"
    )
