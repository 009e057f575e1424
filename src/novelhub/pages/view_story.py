"""Single story with likes and comments."""

from __future__ import annotations

from novelhub.core.cancellation import RequestTracker
from novelhub.models.story import Story
from novelhub.services.formatting import calculate_reading_time

from .base import PageContext, PageController
from .edit_story import LOAD_ERROR


class ViewStoryPage(PageController):
    def __init__(self, context: PageContext):
        super().__init__(context)
        self.loading = True
        self.story_id = context.params.get("id", "")
        self.story: Story | None = None
        self.liking = False
        self.commenting = False
        self.comment_text = ""
        self._likes = RequestTracker()
        self._comments = RequestTracker()

    @property
    def reading_time(self) -> int:
        return calculate_reading_time(self.story.content) if self.story else 0

    @property
    def can_edit(self) -> bool:
        return self.story is not None and self.story.is_authored_by(self.current_user)

    @property
    def is_liked(self) -> bool:
        user = self.current_user
        return self.story is not None and self.story.is_liked_by(user.id if user else None)

    async def load(self) -> None:
        result = await self._call(
            self.context.stories.get_story_by_id(self.story_id),
            error_message=LOAD_ERROR,
        )
        if result.ok:
            self.story = result.value

    def teardown(self) -> None:
        super().teardown()
        self._likes.cancel()
        self._comments.cancel()

    async def toggle_like(self) -> None:
        """Visitors are sent to login; members flip their like."""
        user = self.current_user
        if user is None:
            self.go("/login")
            return
        if self.story is None:
            return

        result = await self._call(
            self.context.stories.toggle_like(self.story_id),
            error_message="Failed to update like. Please try again.",
            tracker=self._likes,
            loading_attr="liking",
        )
        if not result.ok or result.value is None or self.story is None:
            return

        likes = [like for like in self.story.likes if like != user.id]
        if result.value.is_liked:
            likes.append(user.id)
        self.story = self.story.model_copy(update={"likes": likes})

    async def add_comment(self, text: str | None = None) -> None:
        if self.current_user is None:
            self.go("/login")
            return
        if self.story is None:
            return
        if text is not None:
            self.comment_text = text

        result = await self._call(
            self.context.stories.add_comment(self.story_id, self.comment_text),
            tracker=self._comments,
            loading_attr="commenting",
        )
        if result.ok and result.value is not None and self.story is not None:
            comments = [*self.story.comments, result.value]
            self.story = self.story.model_copy(update={"comments": comments})
            self.comment_text = ""

    def edit(self) -> None:
        self.go(f"/story/{self.story_id}/edit")

    def back_to_my_stories(self) -> None:
        self.go("/my-stories")
