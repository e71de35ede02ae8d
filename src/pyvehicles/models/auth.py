"""Authentication models."""

from __future__ import annotations

import traceback

from pydantic import BaseModel, ConfigDict, Field, field_validator

from pyvehicles.exceptions import HttpError
from pyvehicles.models._base import CatalogBaseModel


class AuthToken(CatalogBaseModel):
    """Reply of ``POST /api/auth/``."""

    token: str

    @field_validator("token")
    @classmethod
    def _token_non_empty(cls, value: str) -> str:
        token = value.strip()
        if not token:
            raise ValueError("token must be non-empty")
        return token


class Profile(CatalogBaseModel):
    """The authenticated user.

    The defaults form the "nobody logged in" profile.
    """

    id: int = 0
    username: str = ""


class AuthError(BaseModel):
    """Last authentication failure, all fields optional strings."""

    model_config = ConfigDict(frozen=True)

    name: str = ""
    message: str = ""
    code: str = ""
    stack: str = ""

    @property
    def is_empty(self) -> bool:
        return not (self.name or self.message or self.code or self.stack)

    @classmethod
    def from_exception(cls, exc: HttpError) -> AuthError:
        return cls(
            name=type(exc).__name__,
            message=exc.message,
            code="" if exc.status_code is None else str(exc.status_code),
            stack="".join(traceback.format_exception(exc)),
        )


class Credentials(BaseModel):
    """Username/password body for login and registration."""

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
    )

    username: str = Field(default="")
    password: str = Field(default="")
