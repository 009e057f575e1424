"""Story models.

Stories are owned by the server; the client caches them per page. The
author of a story is fixed at creation: ``StoryUpdate`` carries no author
field, so an edit can never reassign it.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import Field, field_validator, model_validator

from .base import ApiModel, id_field
from .user import User


class Genre(str, Enum):
    """Fixed set of story genres."""

    FANTASY = "fantasy"
    ROMANCE = "romance"
    MYSTERY = "mystery"
    SCIENCE_FICTION = "science-fiction"
    HORROR = "horror"
    THRILLER = "thriller"
    HISTORICAL_FICTION = "historical-fiction"
    ADVENTURE = "adventure"
    YOUNG_ADULT = "young-adult"
    LITERARY_FICTION = "literary-fiction"
    DYSTOPIAN = "dystopian"
    PARANORMAL = "paranormal"
    CONTEMPORARY = "contemporary"
    CRIME = "crime"
    DRAMA = "drama"
    COMEDY = "comedy"
    ACTION = "action"
    SLICE_OF_LIFE = "slice-of-life"
    SUPERNATURAL = "supernatural"
    PSYCHOLOGICAL = "psychological"

    @property
    def label(self) -> str:
        """Display name, e.g. ``Science Fiction``."""
        words = self.value.split("-")
        return " ".join(w if w == "of" else w.capitalize() for w in words)


def _reference_id(value: Any) -> Any:
    """Reduce ``{"_id": ...}`` objects to their id."""
    if isinstance(value, dict):
        return value.get("_id") or value.get("id")
    return value


class StoryAuthor(ApiModel):
    """Author reference embedded in a story."""

    id: str = id_field()
    username: str = ""
    profile_picture: str | None = Field(default=None, alias="profilePicture")


class Comment(ApiModel):
    """Comment left on a story."""

    id: str = id_field()
    content: str
    author: StoryAuthor | None = None
    created_at: datetime | None = Field(default=None, alias="createdAt")

    @field_validator("author", mode="before")
    @classmethod
    def _promote_author_id(cls, value: Any) -> Any:
        return {"_id": value} if isinstance(value, str) else value


class Story(ApiModel):
    """A story as returned by the API."""

    id: str = id_field()
    title: str
    genre: Genre
    content: str = ""
    image: str | None = None
    is_ai_generated: bool = Field(default=False, alias="isAIGenerated")
    author: StoryAuthor
    likes: list[str] = Field(default_factory=list)
    comments: list[Comment] = Field(default_factory=list)
    word_count: int | None = Field(default=None, alias="wordCount")
    created_at: datetime | None = Field(default=None, alias="createdAt")

    @field_validator("author", mode="before")
    @classmethod
    def _promote_author_id(cls, value: Any) -> Any:
        return {"_id": value} if isinstance(value, str) else value

    @field_validator("likes", mode="before")
    @classmethod
    def _like_ids(cls, value: Any) -> Any:
        if value is None:
            return []
        if isinstance(value, list):
            return [_reference_id(item) for item in value]
        return value

    @property
    def like_count(self) -> int:
        return len(self.likes)

    def is_liked_by(self, user_id: str | None) -> bool:
        return user_id is not None and user_id in self.likes

    def is_authored_by(self, user: User | None) -> bool:
        return user is not None and self.author.id == user.id


class StoryDraft(ApiModel):
    """Payload for creating a story."""

    title: str
    genre: Genre | str
    content: str
    is_ai_generated: bool = Field(default=False, alias="isAIGenerated")


class StoryUpdate(ApiModel):
    """Payload for editing a story; unset fields are left unchanged."""

    title: str | None = None
    genre: Genre | str | None = None
    content: str | None = None


class StoryPage(ApiModel):
    """One page of the public catalog."""

    stories: list[Story] = Field(default_factory=list)
    page: int = 1
    pages: int = 1
    total: int = 0

    @model_validator(mode="before")
    @classmethod
    def _accept_bare_list(cls, data: Any) -> Any:
        if data is None:
            return {}
        if isinstance(data, list):
            return {"stories": data, "total": len(data)}
        return data


class UserStories(ApiModel):
    """Stories written by one user."""

    stories: list[Story] = Field(default_factory=list)


class LikeResult(ApiModel):
    """Outcome of toggling a like."""

    is_liked: bool = Field(alias="isLiked")
    likes: int | None = None


class GeneratedStory(ApiModel):
    """Text produced by the AI generation endpoint."""

    content: str
    title: str | None = None
