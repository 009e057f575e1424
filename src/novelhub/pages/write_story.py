"""Manual story editor."""

from __future__ import annotations

from novelhub.models.story import Genre, StoryDraft
from novelhub.services.validation import MIN_STORY_WORDS, count_words

from .base import FormPage, PageContext

STORY_FIELDS = ("title", "genre", "content")


def story_form_error(form: dict[str, str], word_count: int) -> str | None:
    """First problem with a title/genre/content form, or None."""
    if not form.get("title", "").strip():
        return "Please provide a title for your story"
    if not form.get("genre"):
        return "Please select a genre for your story"
    if word_count < MIN_STORY_WORDS:
        return f"Story must be at least {MIN_STORY_WORDS} words long"
    return None


class WriteStoryPage(FormPage):
    heading = "Write Your Story"
    fields = STORY_FIELDS
    genres = tuple(Genre)

    def __init__(self, context: PageContext):
        super().__init__(context)
        self.word_count = 0
        self.confirming_clear = False

    def _on_change(self, name: str, value: str) -> None:
        if name == "content":
            self.word_count = count_words(value)

    async def submit(self) -> None:
        self.error = story_form_error(self.form, self.word_count)
        if self.error:
            return

        draft = StoryDraft(
            title=self.form["title"],
            genre=self.form["genre"],
            content=self.form["content"],
            is_ai_generated=False,
        )
        result = await self._call(self.context.stories.create_story(draft))
        if result.ok and result.value is not None:
            self.go(f"/story/{result.value.id}")

    # Clearing asks first, unless there is nothing to lose.

    def request_clear(self) -> None:
        if any(value.strip() for value in self.form.values()):
            self.confirming_clear = True
        else:
            self.confirm_clear()

    def confirm_clear(self) -> None:
        self.form = {name: "" for name in self.fields}
        self.word_count = 0
        self.error = None
        self.confirming_clear = False

    def cancel_clear(self) -> None:
        self.confirming_clear = False
