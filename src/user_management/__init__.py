"""User Management API: CRUD service for user records."""
