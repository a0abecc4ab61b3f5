"""Core services exports."""

from .database.data_store import DataStore, QueryResult
from .user.user_service import UserService

__all__ = [
    "DataStore",
    "QueryResult",
    "UserService",
]
