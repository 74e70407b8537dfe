"""Test configuration and fixtures for the User Management API."""

from tests.fixtures import *  # noqa: F401,F403
