"""User storage backends."""

from .user_store import (
    InMemoryUserStore,
    SqlUserStore,
    UserStore,
    UserStoreError,
    build_user_store,
)

__all__ = [
    "InMemoryUserStore",
    "SqlUserStore",
    "UserStore",
    "UserStoreError",
    "build_user_store",
]
