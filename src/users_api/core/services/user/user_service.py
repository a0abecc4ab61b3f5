from loguru import logger

from src.users_api.core.errors import (
    ConflictError,
    DuplicateKeyError,
    NotFoundError,
    StoreError,
)
from src.users_api.core.services.database.data_store import DataStore
from src.users_api.entities.core.user import User, UserForm, UserRepository

EMAIL_EXISTS_MESSAGE = "Email already exists"
USER_NOT_FOUND_MESSAGE = "User not found"


class UserService:
    """List, create and update users.

    Each write is followed by a re-fetch of the row so the caller always gets
    the stored representation. With ``atomic_writes`` the write and the
    re-fetch share one transaction and a failed re-fetch rolls the write
    back; without it the write is committed before the re-fetch is issued.
    """

    def __init__(self, store: DataStore, atomic_writes: bool = True) -> None:
        self._store = store
        self._repo = UserRepository(store)
        self._atomic_writes = atomic_writes

    def list_users(self) -> list[User]:
        with self._store.unit_of_work():
            return self._repo.list_all()

    def create_user(self, form: UserForm) -> User:
        """Insert a user and return the stored row.

        Raises:
            ConflictError: the email is already used by another user.
            StoreError: the insert or the re-fetch failed.
        """
        with self._store.unit_of_work():
            try:
                user_id = self._repo.create(form)
            except DuplicateKeyError as e:
                logger.warning("Rejected user creation: email already exists")
                raise ConflictError(EMAIL_EXISTS_MESSAGE) from e

            if not self._atomic_writes:
                self._store.commit()

            user = self._repo.get(user_id)
            if user is None:
                raise StoreError(f"Inserted user {user_id} could not be read back")

        logger.info("Created user {}", user.id)
        return user

    def update_user(self, user_id: int, form: UserForm) -> User:
        """Overwrite a user's fields and return the stored row.

        Raises:
            ConflictError: the new email is already used by another user.
            NotFoundError: no user has ``user_id``.
            StoreError: the update or the re-fetch failed.
        """
        with self._store.unit_of_work():
            try:
                affected = self._repo.update(user_id, form)
            except DuplicateKeyError as e:
                logger.warning("Rejected update of user {}: email already exists", user_id)
                raise ConflictError(EMAIL_EXISTS_MESSAGE) from e

            if not self._atomic_writes:
                self._store.commit()

            user = self._repo.get(user_id)

        if user is None:
            logger.info("Update matched no user with id {}", user_id)
            raise NotFoundError(USER_NOT_FOUND_MESSAGE)

        logger.info("Updated user {} ({} row(s) affected)", user.id, affected)
        return user
