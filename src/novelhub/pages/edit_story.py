"""Author-only story editor."""

from __future__ import annotations

from novelhub.models.story import Genre, Story, StoryUpdate
from novelhub.services.validation import count_words

from .base import FormPage, PageContext
from .write_story import STORY_FIELDS, story_form_error

LOAD_ERROR = "Failed to load story. Please try again."


class EditStoryPage(FormPage):
    heading = "Edit Story"
    fields = STORY_FIELDS
    genres = tuple(Genre)

    def __init__(self, context: PageContext):
        super().__init__(context)
        self.story_id = context.params.get("id", "")
        self.story: Story | None = None
        self.word_count = 0
        self.confirming_discard = False

    def _on_change(self, name: str, value: str) -> None:
        if name == "content":
            self.word_count = count_words(value)

    async def load(self) -> None:
        result = await self._call(
            self.context.stories.get_story_by_id(self.story_id),
            error_message=LOAD_ERROR,
        )
        story = result.value
        if not result.ok or story is None:
            return
        if not story.is_authored_by(self.current_user):
            self.go("/")
            return

        self.story = story
        self.form = {
            "title": story.title,
            "genre": story.genre.value,
            "content": story.content,
        }
        self.word_count = count_words(story.content)

    @property
    def has_changes(self) -> bool:
        if self.story is None:
            return False
        return (
            self.form["title"] != self.story.title
            or self.form["genre"] != self.story.genre.value
            or self.form["content"] != self.story.content
        )

    async def submit(self) -> None:
        if self.story is None:
            return
        self.error = story_form_error(self.form, self.word_count)
        if self.error:
            return

        update = StoryUpdate(
            title=self.form["title"],
            genre=self.form["genre"],
            content=self.form["content"],
        )
        result = await self._call(self.context.stories.update_story(self.story_id, update))
        if result.ok and result.value is not None:
            self.story = result.value
            self.go(f"/story/{self.story_id}")

    def cancel(self) -> None:
        """Leave the editor, asking first if there are unsaved changes."""
        if self.has_changes:
            self.confirming_discard = True
        else:
            self.go(f"/story/{self.story_id}")

    def confirm_discard(self) -> None:
        self.confirming_discard = False
        self.go(f"/story/{self.story_id}")

    def keep_editing(self) -> None:
        self.confirming_discard = False
