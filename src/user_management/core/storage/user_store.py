"""User store interface and implementations.

Provides a single interface for user persistence with an in-memory backend
(tests, demos) and a relational backend built on SQLModel.
"""

from __future__ import annotations

import threading
import uuid
from abc import ABC, abstractmethod

from loguru import logger
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import select

from src.user_management.core.services.database.db_session import DbSessionService
from src.user_management.entities.user import User, UserStatus, UserTable
from src.user_management.runtime.config.config_data import ConfigData


class UserStoreError(RuntimeError):
    """Raised when the storage backend fails or rejects a write."""


class UserStore(ABC):
    """Abstract interface for user storage backends.

    Not-found is a normal outcome: lookups return ``None`` and deletes return
    ``False``. :class:`UserStoreError` is raised only when the backend fails.
    """

    @abstractmethod
    def create(self, user: User) -> User:
        """Persist a new user under a freshly assigned id.

        Args:
            user: User data; any id it carries is ignored

        Returns:
            The stored user with its id populated

        Raises:
            UserStoreError: If the backend rejects the write (e.g. duplicate email)
        """

    @abstractmethod
    def get_all(self) -> list[User]:
        """Return every stored user, in no particular order."""

    @abstractmethod
    def get_by_id(self, user_id: uuid.UUID) -> User | None:
        """Return the user stored at ``user_id`` or ``None``."""

    @abstractmethod
    def update(self, user: User, user_id: uuid.UUID) -> User | None:
        """Replace the user stored at ``user_id`` with ``user``'s content.

        The stored id always stays ``user_id``, whatever ``user.id`` holds.

        Returns:
            The updated user, or ``None`` if no user exists at ``user_id``
        """

    @abstractmethod
    def delete(self, user_id: uuid.UUID) -> bool:
        """Remove the user at ``user_id``.

        Returns:
            True if a user was removed, False if none existed
        """

    @abstractmethod
    def health_check(self) -> bool:
        """Check whether the backend can serve requests."""


class InMemoryUserStore(UserStore):
    """Dictionary backed store guarded by a lock.

    Every read and write holds the lock, so one instance can be shared across
    request threads. Users are copied in and out so callers never hold a
    reference to stored state.
    """

    def __init__(self):
        self._users: dict[uuid.UUID, User] = {}
        self._lock = threading.RLock()

    def _ensure_email_free(self, email: str, owner_id: uuid.UUID | None = None) -> None:
        for user_id, stored in self._users.items():
            if stored.email == email and user_id != owner_id:
                raise UserStoreError(f"Email already in use: {email}")

    def create(self, user: User) -> User:
        with self._lock:
            self._ensure_email_free(user.email)
            user_id = uuid.uuid4()
            while user_id in self._users:
                user_id = uuid.uuid4()
            stored = user.model_copy(update={"id": user_id})
            self._users[user_id] = stored
            return stored.model_copy()

    def get_all(self) -> list[User]:
        with self._lock:
            return [user.model_copy() for user in self._users.values()]

    def get_by_id(self, user_id: uuid.UUID) -> User | None:
        with self._lock:
            stored = self._users.get(user_id)
            return stored.model_copy() if stored is not None else None

    def update(self, user: User, user_id: uuid.UUID) -> User | None:
        with self._lock:
            if user_id not in self._users:
                return None
            self._ensure_email_free(user.email, owner_id=user_id)
            stored = user.model_copy(update={"id": user_id})
            self._users[user_id] = stored
            return stored.model_copy()

    def delete(self, user_id: uuid.UUID) -> bool:
        with self._lock:
            return self._users.pop(user_id, None) is not None

    def health_check(self) -> bool:
        return True


def _row_to_entity(row: UserTable) -> User:
    return User(
        id=row.user_id,
        first_name=row.first_name,
        last_name=row.last_name,
        email=row.email,
        phone=row.phone,
        age=row.age or 0,
        status=UserStatus(row.status),
    )


def _copy_entity_to_row(user: User, row: UserTable) -> None:
    row.first_name = user.first_name
    row.last_name = user.last_name
    row.email = user.email
    row.phone = user.phone
    row.age = user.age if user.age > 0 else None
    row.status = user.status.value


class SqlUserStore(UserStore):
    """Relational store writing to the ``users`` table.

    Each operation runs in its own session and transaction. Backend errors
    are rolled back and surface as :class:`UserStoreError`.
    """

    def __init__(self, db_service: DbSessionService):
        self._db = db_service

    def create(self, user: User) -> User:
        try:
            with self._db.session_scope() as session:
                row = UserTable()
                _copy_entity_to_row(user, row)
                session.add(row)
                session.flush()
                created = _row_to_entity(row)
        except (SQLAlchemyError, OverflowError) as e:
            logger.warning("Failed to create user: {}", e)
            raise UserStoreError("Failed to create user") from e
        logger.info("Created user {}", created.id)
        return created

    def get_all(self) -> list[User]:
        try:
            with self._db.session_scope() as session:
                rows = session.exec(select(UserTable)).all()
                return [_row_to_entity(row) for row in rows]
        except SQLAlchemyError as e:
            raise UserStoreError("Failed to list users") from e

    def get_by_id(self, user_id: uuid.UUID) -> User | None:
        try:
            with self._db.session_scope() as session:
                row = session.get(UserTable, user_id)
                if row is None:
                    return None
                return _row_to_entity(row)
        except SQLAlchemyError as e:
            raise UserStoreError(f"Failed to fetch user {user_id}") from e

    def update(self, user: User, user_id: uuid.UUID) -> User | None:
        try:
            with self._db.session_scope() as session:
                row = session.get(UserTable, user_id)
                if row is None:
                    return None
                _copy_entity_to_row(user, row)
                session.add(row)
                session.flush()
                updated = _row_to_entity(row)
        except (SQLAlchemyError, OverflowError) as e:
            logger.warning("Failed to update user {}: {}", user_id, e)
            raise UserStoreError(f"Failed to update user {user_id}") from e
        logger.info("Updated user {}", user_id)
        return updated

    def delete(self, user_id: uuid.UUID) -> bool:
        try:
            with self._db.session_scope() as session:
                row = session.get(UserTable, user_id)
                if row is None:
                    return False
                session.delete(row)
        except SQLAlchemyError as e:
            raise UserStoreError(f"Failed to delete user {user_id}") from e
        logger.info("Deleted user {}", user_id)
        return True

    def health_check(self) -> bool:
        return self._db.health_check()


def build_user_store(
    config: ConfigData, db_service: DbSessionService | None = None
) -> UserStore:
    """Create the store backend selected by ``config.store.backend``."""
    if config.store.backend == "memory":
        logger.info("User store: in-memory")
        return InMemoryUserStore()

    db_service = db_service or DbSessionService()
    if config.store.create_tables:
        db_service.create_all()
    logger.info("User store: relational ({})", db_service.engine.url)
    return SqlUserStore(db_service)
