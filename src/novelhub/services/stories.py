"""Story Service - story endpoints of the REST API.

Validates input before anything is sent, wraps each endpoint and normalizes
responses into models. Failures are logged and re-raised as typed errors,
except ``get_user_stories`` which degrades to an empty listing so totals
computed from it stay safe.
"""

from __future__ import annotations

import logging
from typing import Any, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from novelhub.api import endpoints
from novelhub.api.client import ApiClient
from novelhub.core.exceptions import InvalidResponseError, NovelHubError, ValidationError
from novelhub.models.story import (
    Comment,
    GeneratedStory,
    LikeResult,
    Story,
    StoryDraft,
    StoryPage,
    StoryUpdate,
    UserStories,
)
from novelhub.models.upload import ImageUpload

from .formatting import calculate_reading_time, format_story_preview
from .validation import (
    require_id,
    validate_comment,
    validate_content,
    validate_image,
    validate_prompt,
    validate_story_data,
    validate_title,
)

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)

STORY_STATUS_MESSAGES = {
    404: "Story not found",
}

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10


def _positive_int(value: Any, default: int) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError):
        return default
    return number if number > 0 else default


def _clean(value: str | None) -> str | None:
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def _parse(model: type[M], data: Any) -> M:
    try:
        return model.model_validate(data)
    except PydanticValidationError as e:
        raise InvalidResponseError() from e


class StoryService:
    """Service for creating, browsing, editing and liking stories.

    Usage:
        service = StoryService(client)
        page = await service.get_stories(genre="fantasy", search="dragon")
        for story in page.stories:
            print(service.format_story_preview(story.content))
    """

    format_story_preview = staticmethod(format_story_preview)
    calculate_reading_time = staticmethod(calculate_reading_time)

    def __init__(self, client: ApiClient):
        self.client = client

    async def _call(self, action: str, method: str, path: str, **kwargs: Any) -> dict[str, Any]:
        try:
            return await self.client.request(
                method, path, status_messages=STORY_STATUS_MESSAGES, **kwargs
            )
        except NovelHubError as e:
            logger.error(f"{action} error: {e}")
            raise

    @staticmethod
    def _body(payload: dict[str, Any], image: ImageUpload | None) -> dict[str, Any]:
        """JSON body, or multipart form fields when an image is attached."""
        if image is None:
            return {"json": payload}
        form = {
            key: str(value).lower() if isinstance(value, bool) else str(value)
            for key, value in payload.items()
        }
        return {"data": form, "files": {"image": image.as_file()}}

    # =========================================================================
    # CRUD
    # =========================================================================

    async def create_story(self, draft: StoryDraft, image: ImageUpload | None = None) -> Story:
        """Publish a new story as the signed-in user."""
        validate_story_data(draft.title, draft.content, image)
        payload = await self._call(
            "Create story",
            "POST",
            endpoints.STORIES,
            authenticated=True,
            **self._body(draft.to_payload(), image),
        )
        return _parse(Story, payload.get("data"))

    async def get_stories(
        self,
        page: int | None = DEFAULT_PAGE,
        limit: int | None = DEFAULT_LIMIT,
        genre: str | None = None,
        search: str | None = None,
    ) -> StoryPage:
        """Fetch one page of the public catalog, optionally filtered."""
        params: dict[str, Any] = {
            "page": _positive_int(page, DEFAULT_PAGE),
            "limit": _positive_int(limit, DEFAULT_LIMIT),
        }
        genre = _clean(genre)
        search = _clean(search)
        if genre:
            params["genre"] = genre
        if search:
            params["search"] = search

        payload = await self._call("Get stories", "GET", endpoints.STORIES, params=params)
        return _parse(StoryPage, payload.get("data"))

    async def get_story_by_id(self, story_id: str) -> Story:
        story_id = require_id(story_id, "Story ID is required")
        payload = await self._call("Get story", "GET", endpoints.story(story_id))
        return _parse(Story, payload.get("data"))

    async def update_story(
        self,
        story_id: str,
        update: StoryUpdate,
        image: ImageUpload | None = None,
    ) -> Story:
        """Edit a story. Only fields set on ``update`` are validated and sent."""
        story_id = require_id(story_id, "Story ID is required")
        if update.title is not None:
            validate_title(update.title)
        if update.content is not None:
            validate_content(update.content)
        if image is not None:
            validate_image(image)

        payload = await self._call(
            "Update story",
            "PUT",
            endpoints.story(story_id),
            authenticated=True,
            **self._body(update.to_payload(), image),
        )
        return _parse(Story, payload.get("data"))

    async def delete_story(self, story_id: str) -> str:
        """Delete a story and return the server's message."""
        story_id = require_id(story_id, "Story ID is required")
        payload = await self._call(
            "Delete story", "DELETE", endpoints.story(story_id), authenticated=True
        )
        return payload.get("message") or ""

    # =========================================================================
    # Social
    # =========================================================================

    async def toggle_like(self, story_id: str) -> LikeResult:
        """Like the story, or remove the like if already given."""
        story_id = require_id(story_id, "Story ID is required")
        payload = await self._call(
            "Toggle like", "POST", endpoints.like_story(story_id), authenticated=True
        )
        return _parse(LikeResult, payload.get("data"))

    async def add_comment(self, story_id: str, content: str) -> Comment:
        story_id = require_id(story_id, "Story ID is required")
        content = validate_comment(content)
        payload = await self._call(
            "Add comment",
            "POST",
            endpoints.comment_story(story_id),
            authenticated=True,
            json={"content": content},
        )
        return _parse(Comment, payload.get("data"))

    async def get_user_stories(
        self,
        user_id: str,
        page: int | None = DEFAULT_PAGE,
        limit: int | None = DEFAULT_LIMIT,
    ) -> UserStories:
        """Fetch a user's stories, always as ``UserStories``.

        Request failures and malformed responses yield an empty listing.
        """
        user_id = require_id(user_id, "User ID is required")
        params = {
            "page": _positive_int(page, DEFAULT_PAGE),
            "limit": _positive_int(limit, DEFAULT_LIMIT),
        }
        try:
            payload = await self._call(
                "Get user stories",
                "GET",
                endpoints.user_stories(user_id),
                authenticated=True,
                params=params,
            )
            return self._normalize_user_stories(payload.get("data"))
        except ValidationError:
            raise
        except NovelHubError as e:
            logger.warning(f"Returning no stories for user {user_id}: {e}")
            return UserStories()

    @staticmethod
    def _normalize_user_stories(data: Any) -> UserStories:
        if not data:
            return UserStories()
        if isinstance(data, list):
            return _parse(UserStories, {"stories": data})
        if isinstance(data, dict) and "stories" in data:
            return _parse(UserStories, {"stories": data.get("stories") or []})
        return _parse(UserStories, {"stories": [data]})

    # =========================================================================
    # AI generation
    # =========================================================================

    async def generate_ai_story(self, prompt: str) -> GeneratedStory:
        """Ask the API to write a story from a prompt."""
        prompt = validate_prompt(prompt)
        payload = await self._call(
            "Generate AI story",
            "POST",
            endpoints.GENERATE_STORY,
            authenticated=True,
            json={"prompt": prompt},
        )
        return _parse(GeneratedStory, payload.get("data"))
