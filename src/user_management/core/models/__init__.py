"""Request models for the user API."""

from .user_requests import CreateUserRequest, UpdateUserRequest

__all__ = ["CreateUserRequest", "UpdateUserRequest"]
