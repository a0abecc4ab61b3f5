"""Error taxonomy shared by the store, the services and the HTTP layer.

Request body validation failures are reported by FastAPI as
``RequestValidationError`` and shaped in ``api/http/errors.py``; everything
below is raised by the store or the services and mapped to a status code
there.
"""

from __future__ import annotations

DUPLICATE_KEY_CODE = "ER_DUP_ENTRY"


class UsersApiError(Exception):
    """Base class for errors that terminate a request with a known status."""

    status_code: int = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class StoreError(UsersApiError):
    """A statement failed in the database.

    Carries the driver message, the offending statement text and a
    machine-readable code.
    """

    status_code = 500

    def __init__(
        self,
        message: str,
        sql: str | None = None,
        code: str | None = None,
    ) -> None:
        super().__init__(message)
        self.sql = sql
        self.code = code


class DuplicateKeyError(StoreError):
    """A write violated a unique constraint."""

    def __init__(self, message: str, sql: str | None = None) -> None:
        super().__init__(message, sql=sql, code=DUPLICATE_KEY_CODE)


class ConflictError(UsersApiError):
    """The requested write conflicts with an existing record."""

    status_code = 409


class NotFoundError(UsersApiError):
    """The addressed record does not exist."""

    status_code = 404
