from dataclasses import dataclass

from src.user_management.core.services import DbSessionService, UserRequestValidator
from src.user_management.core.storage import UserStore


@dataclass
class ApplicationDependencies:
    user_store: UserStore
    user_validator: UserRequestValidator
    database_service: DbSessionService | None = None
