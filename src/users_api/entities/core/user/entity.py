"""User domain entity and its request/response representations."""

import re
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_core import PydanticCustomError

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[A-Za-z]{2,}$")
PASSWORD_MIN_LENGTH = 8
NAME_MIN_LENGTH = 2


class User(BaseModel):
    """A stored user row, password included.

    Never returned from create or update; see ``UserPublic``.
    """

    model_config = ConfigDict(from_attributes=True)

    id: int = Field(description="Identifier assigned by the database")
    email: str = Field(description="User's email address, unique")
    password: str = Field(description="User's password as stored")
    name: str = Field(description="User's display name")

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, User):
            return False

        return (
            self.id == other.id
            and self.email == other.email
            and self.password == other.password
            and self.name == other.name
        )

    def __hash__(self) -> int:
        return hash((self.id, self.email, self.password, self.name))


class UserPublic(BaseModel):
    """Password-stripped user representation returned to clients."""

    id: int
    email: str
    name: str

    @classmethod
    def from_user(cls, user: User) -> "UserPublic":
        return cls(id=user.id, email=user.email, name=user.name)


class UserForm(BaseModel):
    """Client-supplied fields for create and update.

    Every field is validated independently so a request with several bad
    fields reports all of them. Unknown keys, including ``id``, are ignored.
    """

    email: str = Field(description="Well-formed email address")
    password: str = Field(description=f"At least {PASSWORD_MIN_LENGTH} characters")
    name: str = Field(description=f"At least {NAME_MIN_LENGTH} characters")

    @field_validator("email")
    @classmethod
    def _check_email(cls, value: str) -> str:
        if not EMAIL_PATTERN.fullmatch(value):
            raise PydanticCustomError("invalid_email", "Invalid email")
        return value

    @field_validator("password")
    @classmethod
    def _check_password(cls, value: str) -> str:
        if len(value) < PASSWORD_MIN_LENGTH:
            raise PydanticCustomError(
                "password_too_short",
                "Password too short ({min_length} characters min.)",
                {"min_length": PASSWORD_MIN_LENGTH},
            )
        return value

    @field_validator("name")
    @classmethod
    def _check_name(cls, value: str) -> str:
        if len(value) < NAME_MIN_LENGTH:
            raise PydanticCustomError(
                "name_too_short",
                "Name too short ({min_length} characters min.)",
                {"min_length": NAME_MIN_LENGTH},
            )
        return value
