"""Public catalog with genre/search filters and pagination."""

from __future__ import annotations

from dataclasses import dataclass

from novelhub.models.story import Genre, Story
from novelhub.services.formatting import calculate_reading_time, format_story_preview

from .base import PageContext, PageController

FILTERS = ("genre", "search")


@dataclass(frozen=True)
class StoryCard:
    """What a listing shows for one story."""

    id: str
    title: str
    genre: str
    is_ai_generated: bool
    preview: str
    author: str
    reading_time: int
    like_count: int

    @classmethod
    def from_story(cls, story: Story) -> "StoryCard":
        return cls(
            id=story.id,
            title=story.title,
            genre=story.genre.label,
            is_ai_generated=story.is_ai_generated,
            preview=format_story_preview(story.content),
            author=story.author.username,
            reading_time=calculate_reading_time(story.content),
            like_count=story.like_count,
        )

    @property
    def meta(self) -> str:
        return f"{self.reading_time} min read • {self.like_count} likes"


class BrowsePage(PageController):
    """Every filter change refetches; only the latest fetch is applied."""

    heading = "Browse Stories"
    genres = tuple(Genre)

    def __init__(self, context: PageContext):
        super().__init__(context)
        self.loading = True
        self.genre = ""
        self.search = ""
        self.page = 1
        self.pages = 1
        self.total = 0
        self.stories: list[Story] = []

    @property
    def cards(self) -> list[StoryCard]:
        return [StoryCard.from_story(story) for story in self.stories]

    @property
    def empty_message(self) -> str | None:
        if self.loading or self.stories:
            return None
        return "No stories found"

    async def load(self) -> None:
        await self.fetch()

    async def fetch(self) -> None:
        result = await self._call(
            self.context.stories.get_stories(
                page=self.page,
                limit=self.context.settings.stories_page_size,
                genre=self.genre or None,
                search=self.search or None,
            )
        )
        if result.ok and result.value is not None:
            self.stories = result.value.stories
            self.pages = result.value.pages
            self.total = result.value.total

    async def set_filter(self, name: str, value: str) -> None:
        """Change ``genre`` or ``search``; returns to the first page."""
        if name not in FILTERS:
            raise KeyError(f"Unknown filter: {name}")
        setattr(self, name, value)
        self.page = 1
        await self.fetch()

    async def set_page(self, page: int) -> None:
        self.page = page
        await self.fetch()
