"""Relational store used by the request handlers.

``DataStore`` owns the SQLAlchemy engine and exposes a single
``query(statement, params)`` operation. Statements issued inside
``unit_of_work()`` share one session and transaction; statements issued
outside run in a transaction of their own.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field
from typing import Any

from loguru import logger
from sqlalchemy import StaticPool, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError, StatementError
from sqlalchemy.sql import Executable
from sqlmodel import Session, SQLModel, create_engine

from src.users_api.core.errors import DuplicateKeyError, StoreError
from src.users_api.runtime.config.config_data import DatabaseConfig

# SQLSTATE for unique_violation (PostgreSQL) and MySQL's ER_DUP_ENTRY number
_PG_UNIQUE_VIOLATION = "23505"
_MYSQL_DUP_ENTRY = 1062
_DUPLICATE_MARKERS = ("unique constraint failed", "duplicate entry", "duplicate key")


@dataclass
class QueryResult:
    """Outcome of one statement."""

    rows: list[dict[str, Any]] = field(default_factory=list)
    inserted_id: int | None = None
    affected_rows: int = 0

    def first(self) -> dict[str, Any] | None:
        return self.rows[0] if self.rows else None


def is_duplicate_key(exc: StatementError) -> bool:
    """Return True when ``exc`` reports a unique-constraint violation."""
    if not isinstance(exc, IntegrityError):
        return False

    orig = exc.orig
    if getattr(orig, "pgcode", None) == _PG_UNIQUE_VIOLATION:
        return True
    if getattr(orig, "sqlstate", None) == _PG_UNIQUE_VIOLATION:
        return True

    args = getattr(orig, "args", ())
    if args and args[0] == _MYSQL_DUP_ENTRY:
        return True

    message = str(orig).lower()
    return any(marker in message for marker in _DUPLICATE_MARKERS)


def translate_error(exc: StatementError) -> StoreError:
    """Convert a SQLAlchemy statement error into the store error taxonomy."""
    message = str(exc.orig) if exc.orig is not None else str(exc)
    if is_duplicate_key(exc):
        return DuplicateKeyError(message, sql=exc.statement)
    return StoreError(message, sql=exc.statement, code=type(exc).__name__)


class DataStore:
    """SQL execution collaborator injected into the request handlers."""

    def __init__(self, engine: Engine) -> None:
        self._engine = engine
        self._current: ContextVar[Session | None] = ContextVar(
            f"data_store_session_{id(self)}", default=None
        )

    @classmethod
    def from_config(cls, db_config: DatabaseConfig) -> DataStore:
        """Create the engine described by ``db_config``."""
        engine_kwargs: dict[str, Any] = {
            "echo": db_config.echo,
            "pool_pre_ping": True,
        }

        if db_config.backend == "sqlite":
            engine_kwargs["connect_args"] = {
                "check_same_thread": False,  # handlers run in a threadpool
                "timeout": 20,
            }
            if db_config.is_in_memory:
                # One shared connection, otherwise every thread sees its own empty db
                engine_kwargs["poolclass"] = StaticPool

        logger.info("Initializing database engine for backend {}", db_config.backend)
        return cls(create_engine(db_config.url, **engine_kwargs))

    @property
    def engine(self) -> Engine:
        return self._engine

    @contextmanager
    def unit_of_work(self) -> Iterator[Session]:
        """Run the enclosed statements in one transaction.

        Commits when the block exits normally and rolls back when it raises.
        Nested calls join the outer unit of work.
        """
        active = self._current.get()
        if active is not None:
            yield active
            return

        session = Session(self._engine, expire_on_commit=False)
        token = self._current.set(session)
        try:
            yield session
            session.commit()
        except Exception as e:
            session.rollback()
            logger.bind(error_type=type(e).__name__).debug(
                "Database transaction rolled back"
            )
            raise
        finally:
            self._current.reset(token)
            session.close()

    def commit(self) -> None:
        """Commit the statements issued so far in the active unit of work."""
        session = self._current.get()
        if session is None:
            return
        try:
            session.commit()
        except StatementError as e:
            raise translate_error(e) from e

    def query(
        self,
        statement: str | Executable,
        params: Mapping[str, Any] | None = None,
    ) -> QueryResult:
        """Execute one statement and return its rows or write outcome.

        ``statement`` is either SQL text with ``:name`` placeholders bound
        from ``params`` or a SQLAlchemy Core statement.

        Raises:
            DuplicateKeyError: the statement violated a unique constraint.
            StoreError: any other database failure.
        """
        session = self._current.get()
        if session is None:
            with self.unit_of_work():
                return self.query(statement, params)

        if isinstance(statement, str):
            statement = text(statement)

        try:
            result = session.connection().execute(statement, dict(params or {}))
        except StatementError as e:
            error = translate_error(e)
            if isinstance(error, DuplicateKeyError):
                logger.warning("Duplicate key rejected by the database")
            else:
                logger.bind(sql=error.sql).error("Statement failed: {}", error.message)
            raise error from e

        if result.returns_rows:
            rows = [dict(row._mapping) for row in result]
            return QueryResult(rows=rows, affected_rows=len(rows))

        inserted_id = None
        if getattr(result, "is_insert", False):
            primary_key = result.inserted_primary_key
            inserted_id = primary_key[0] if primary_key else None
        elif result.lastrowid:
            inserted_id = result.lastrowid

        return QueryResult(inserted_id=inserted_id, affected_rows=result.rowcount)

    def create_tables(self) -> None:
        """Create all registered tables that do not exist yet."""
        from src.users_api.entities.core.user import UserTable  # noqa: F401

        SQLModel.metadata.create_all(self._engine)
        logger.info("Database initialized with tables.")

    def health_check(self) -> bool:
        """Perform a health check on the database connection."""
        try:
            with self._engine.connect() as connection:
                connection.execute(text("SELECT 1"))
                return True
        except Exception as e:
            logger.error(
                "Database health check failed",
                extra={
                    "error_type": type(e).__name__,
                    "error_message": str(e),
                },
            )
            return False

    def dispose(self) -> None:
        """Release pooled connections."""
        self._engine.dispose()
