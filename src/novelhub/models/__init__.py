"""Models for NovelAI Hub.

Pydantic models mirroring the JSON exchanged with the REST API.
"""

from .base import ApiModel
from .story import (
    Comment,
    GeneratedStory,
    Genre,
    LikeResult,
    Story,
    StoryAuthor,
    StoryDraft,
    StoryPage,
    StoryUpdate,
    UserStories,
)
from .upload import ImageUpload
from .user import User

__all__ = [
    "ApiModel",
    "User",
    "Genre",
    "Story",
    "StoryAuthor",
    "Comment",
    "StoryDraft",
    "StoryUpdate",
    "StoryPage",
    "UserStories",
    "LikeResult",
    "GeneratedStory",
    "ImageUpload",
]
