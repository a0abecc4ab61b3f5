"""User repository for data access operations."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import insert, select, update

from src.users_api.core.errors import StoreError

from .entity import User, UserForm
from .table import UserTable

if TYPE_CHECKING:
    from src.users_api.core.services.database.data_store import DataStore

users = UserTable.__table__


class UserRepository:
    """Data-access layer for users.

    Every statement is a parameterized SQLAlchemy Core statement executed
    through the ``DataStore``.
    """

    def __init__(self, store: DataStore) -> None:
        self._store = store

    def list_all(self) -> list[User]:
        """Return every user in store-native order."""
        result = self._store.query(select(users))
        return [User.model_validate(row) for row in result.rows]

    def get(self, user_id: int) -> User | None:
        result = self._store.query(select(users).where(users.c.id == user_id))
        row = result.first()
        if row is None:
            return None
        return User.model_validate(row)

    def create(self, form: UserForm) -> int:
        """Insert a user and return the identifier assigned by the store."""
        statement = insert(users).values(
            email=form.email,
            password=form.password,
            name=form.name,
        )
        result = self._store.query(statement)
        if result.inserted_id is None:
            raise StoreError("Insert did not return an identifier", sql=str(statement))
        return int(result.inserted_id)

    def update(self, user_id: int, form: UserForm) -> int:
        """Overwrite the mutable fields of a user; return the affected row count."""
        statement = (
            update(users)
            .where(users.c.id == user_id)
            .values(email=form.email, password=form.password, name=form.name)
        )
        result = self._store.query(statement)
        return result.affected_rows
