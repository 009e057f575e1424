"""The signed-in user's own stories."""

from __future__ import annotations

from novelhub.models.story import Story

from .base import PageContext, PageController
from .browse import StoryCard


class MyStoriesPage(PageController):
    heading = "My Stories"

    def __init__(self, context: PageContext):
        super().__init__(context)
        self.loading = True
        self.stories: list[Story] = []
        self.pending_delete: str | None = None
        self.deleting = False

    @property
    def cards(self) -> list[StoryCard]:
        return [StoryCard.from_story(story) for story in self.stories]

    @property
    def empty_message(self) -> str | None:
        if self.loading or self.stories:
            return None
        return "You haven't written any stories yet"

    async def load(self) -> None:
        user = self.current_user
        if user is None:
            self.loading = False
            return
        result = await self._call(self.context.stories.get_user_stories(user.id))
        if result.ok and result.value is not None:
            self.stories = result.value.stories

    # Deleting asks for confirmation first.

    def request_delete(self, story_id: str) -> None:
        self.pending_delete = story_id

    def cancel_delete(self) -> None:
        self.pending_delete = None

    async def confirm_delete(self) -> None:
        story_id = self.pending_delete
        if story_id is None:
            return
        result = await self._call(
            self.context.stories.delete_story(story_id),
            error_message="Failed to delete story. Please try again.",
            loading_attr="deleting",
        )
        if result.superseded:
            return
        self.pending_delete = None
        if result.ok:
            self.stories = [story for story in self.stories if story.id != story_id]

    def view(self, story_id: str) -> None:
        self.go(f"/story/{story_id}")

    def edit(self, story_id: str) -> None:
        self.go(f"/story/{story_id}/edit")

    def write_new(self) -> None:
        self.go("/write")
