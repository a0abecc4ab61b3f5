"""Entities module with entity-centric structure.

Each entity has its own package containing:
- entity.py: Domain models and request/response representations
- table.py: Database persistence model
- repository.py: Data access layer
"""

from .core.user import User, UserForm, UserPublic, UserRepository, UserTable

__all__ = [
    "User",
    "UserForm",
    "UserPublic",
    "UserTable",
    "UserRepository",
]
