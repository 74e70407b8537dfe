"""Database engine and session factory used across the application."""

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from loguru import logger
from sqlalchemy import Engine, text
from sqlmodel import Session, SQLModel, create_engine

from src.user_management.runtime.config.config_data import DatabaseConfig
from src.user_management.runtime.context import get_config


class DbSessionService:
    def __init__(self, engine: Engine | None = None):
        """Initialize the shared database engine and session factory.

        Args:
            engine: Pre-built engine to use instead of one built from the
                current configuration (tests pass an in-memory SQLite engine).
        """
        if engine is not None:
            self._engine = engine
            return

        main_config = get_config()
        db_config = main_config.database

        logger.info(
            "Configuring database engine for environment: {}",
            main_config.app.environment,
        )
        engine_kwargs: dict[str, Any] = {
            "echo": db_config.echo,
            "connect_args": self._get_connect_args(db_config),
        }

        if not db_config.is_sqlite:
            engine_kwargs.update(
                {
                    "pool_size": db_config.pool_size,
                    "max_overflow": db_config.max_overflow,
                    "pool_timeout": db_config.pool_timeout,
                    "pool_recycle": db_config.pool_recycle,
                    "pool_pre_ping": True,  # Validate connections before use
                }
            )
        elif main_config.app.environment == "production":
            logger.warning(
                "SQLite is not recommended for production use. "
                "Consider PostgreSQL for better performance and reliability."
            )

        self._engine = create_engine(db_config.connection_string, **engine_kwargs)
        logger.info("Database engine initialized for {}", self._engine.url)

    @property
    def engine(self) -> Engine:
        return self._engine

    def _get_connect_args(self, db_config: DatabaseConfig) -> dict:
        """Get database-specific connection arguments."""
        if db_config.is_sqlite:
            return {
                "check_same_thread": False,  # Sessions are used from the threadpool
                "timeout": 20,  # Lock timeout
            }
        if db_config.url.startswith("postgresql"):
            return {
                "application_name": "user_management_api",
                "connect_timeout": 30,
            }
        return {}

    def create_all(self) -> None:
        """Create all tables registered on the SQLModel metadata."""
        from src.user_management.entities.user import UserTable  # noqa: F401

        SQLModel.metadata.create_all(self._engine)
        logger.info("Database initialized with tables.")

    def get_session(self) -> Session:
        """Return a new SQLModel session bound to the shared engine."""
        return Session(
            self._engine,
            expire_on_commit=False,  # Prevent lazy loading issues
            autoflush=True,
        )

    @contextmanager
    def session_scope(self) -> Iterator[Session]:
        """Provide a transactional scope around a series of operations."""
        db = self.get_session()
        try:
            yield db
            db.commit()
        except Exception as e:
            db.rollback()
            logger.bind(error_type=type(e).__name__).error(
                "Database transaction failed: {}", e
            )
            raise
        finally:
            db.close()

    def health_check(self) -> bool:
        """Perform a health check on the database connection."""
        try:
            with self._engine.connect() as connection:
                connection.execute(text("SELECT 1"))
                return True
        except Exception as e:
            logger.bind(error_type=type(e).__name__).error(
                "Database health check failed: {}", e
            )
            return False

    def dispose(self) -> None:
        """Release pooled connections."""
        self._engine.dispose()
