"""User model."""

from __future__ import annotations

from pydantic import Field, field_validator

from .base import ApiModel, id_field


class User(ApiModel):
    """A registered user as cached by the client.

    ``token`` is present on the user returned by login/register; passwords
    are never part of the model.
    """

    id: str = id_field()
    username: str = ""
    email: str = ""
    profile_picture: str | None = Field(default=None, alias="profilePicture")
    token: str | None = None

    @field_validator("id", mode="before")
    @classmethod
    def _require_id(cls, value: object) -> object:
        if value is None or (isinstance(value, str) and not value.strip()):
            raise ValueError("user id must not be empty")
        return str(value) if isinstance(value, int) else value
