"""Client Services for NovelAI Hub.

Thin wrappers around the REST API. Pages call services; services call
``ApiClient``; nothing here holds UI state.

Services:
- auth: registration, login, profile, password reset
- stories: story CRUD, likes, comments, AI generation
- validation / formatting: pure helpers shared with the pages

Usage:
    from novelhub.services import StoryService

    service = StoryService(client)
    page = await service.get_stories(page=2, genre="mystery")
"""

from .auth import AuthService
from .formatting import calculate_reading_time, format_story_preview
from .stories import StoryService

__all__ = [
    "AuthService",
    "StoryService",
    "calculate_reading_time",
    "format_story_preview",
]
