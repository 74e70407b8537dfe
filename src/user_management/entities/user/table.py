"""User database table model."""

import uuid
from datetime import UTC, datetime

import sqlalchemy as sa
from sqlmodel import Field, SQLModel

from .entity import UserStatus


class UserTable(SQLModel, table=True):
    """Database persistence model for users.

    This represents how the User entity is stored in the ``users`` table.
    It's separate from the domain entity so that storage details such as the
    nullable ``age`` column and ``created_at`` stay out of the API shape.
    """

    __tablename__ = "users"
    __table_args__ = (
        sa.CheckConstraint(
            "status IN ('Active', 'Inactive')", name="ck_users_status"
        ),
    )

    user_id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    first_name: str
    last_name: str
    email: str = Field(unique=True)
    phone: str
    age: int | None = Field(default=None, nullable=True)
    status: str = Field(
        default=UserStatus.ACTIVE.value,
        sa_column_kwargs={"server_default": UserStatus.ACTIVE.value},
    )
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(UTC),
        sa_column_kwargs={"server_default": sa.func.now()},
    )
