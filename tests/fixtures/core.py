from __future__ import annotations

from collections.abc import Generator
from typing import Any

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import Engine, StaticPool
from sqlmodel import SQLModel, create_engine

from src.user_management.api.http.app import create_app
from src.user_management.api.http.app_data import ApplicationDependencies
from src.user_management.core.services import DbSessionService, UserRequestValidator
from src.user_management.core.storage import InMemoryUserStore, SqlUserStore, UserStore
from src.user_management.entities.user import User, UserStatus


@pytest.fixture
def engine() -> Generator[Engine]:
    """Create a fresh in-memory SQLite engine with the users table."""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    # Import models to register them with the metadata
    from src.user_management.entities.user import UserTable  # noqa: F401

    SQLModel.metadata.create_all(engine)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def db_service(engine: Engine) -> DbSessionService:
    return DbSessionService(engine)


@pytest.fixture
def memory_store() -> InMemoryUserStore:
    return InMemoryUserStore()


@pytest.fixture
def sql_store(db_service: DbSessionService) -> SqlUserStore:
    return SqlUserStore(db_service)


@pytest.fixture(params=["memory", "sql"])
def store(request: pytest.FixtureRequest) -> UserStore:
    """Each store backend in turn, for contract tests."""
    if request.param == "memory":
        return request.getfixturevalue("memory_store")
    return request.getfixturevalue("sql_store")


@pytest.fixture
def validator() -> UserRequestValidator:
    return UserRequestValidator()


@pytest.fixture
def client(store: UserStore, validator: UserRequestValidator) -> TestClient:
    """API client wired to the parametrized store backend."""
    app = create_app(
        ApplicationDependencies(user_store=store, user_validator=validator)
    )
    return TestClient(app)


@pytest.fixture
def alice_payload() -> dict[str, Any]:
    return {
        "firstName": "Alice",
        "lastName": "Smith",
        "email": "alice@example.com",
        "phone": "+94771234567",
        "age": 28,
        "status": "Active",
    }


@pytest.fixture
def alice() -> User:
    return User(
        first_name="Alice",
        last_name="Smith",
        email="alice@example.com",
        phone="+94771234567",
        age=28,
        status=UserStatus.ACTIVE,
    )


@pytest.fixture
def bob() -> User:
    return User(
        first_name="Bob",
        last_name="Wilson",
        email="bob@example.com",
        phone="+14155550123",
    )
