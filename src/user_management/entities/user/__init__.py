"""User entity package.

- User, UserStatus: domain entity
- UserTable: database persistence model
"""

from .entity import User, UserStatus
from .table import UserTable

__all__ = ["User", "UserStatus", "UserTable"]
