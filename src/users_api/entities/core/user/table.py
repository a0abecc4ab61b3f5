"""User database table model."""

from sqlmodel import Field, SQLModel


class UserTable(SQLModel, table=True):
    """Database persistence model for users.

    ``id`` is assigned by the database; ``email`` carries the unique
    constraint that surfaces as a duplicate-key error on writes.
    """

    __tablename__ = "users"

    id: int | None = Field(default=None, primary_key=True)
    email: str = Field(max_length=255, unique=True, nullable=False)
    password: str = Field(max_length=255, nullable=False)
    name: str = Field(max_length=255, nullable=False)
