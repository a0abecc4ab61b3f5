"""User entity module.

- User, UserPublic, UserForm: domain model and its representations
- UserTable: Database persistence model
- UserRepository: Data access layer
"""

from .entity import User, UserForm, UserPublic
from .repository import UserRepository
from .table import UserTable

__all__ = ["User", "UserForm", "UserPublic", "UserTable", "UserRepository"]
