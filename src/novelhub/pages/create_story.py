"""Three-step AI story wizard: details, prompt, review."""

from __future__ import annotations

from enum import Enum

from novelhub.models.story import Genre, StoryDraft

from .base import PageContext, PageController


class WizardStep(int, Enum):
    DETAILS = 0
    PROMPT = 1
    REVIEW = 2


STEP_LABELS = {
    WizardStep.DETAILS: "Story Details",
    WizardStep.PROMPT: "Story Prompt",
    WizardStep.REVIEW: "Review & Save",
}


class CreateStoryWizard(PageController):
    """Collects title and genre, generates text from a prompt, then saves.

    Usage:
        wizard.title, wizard.genre = "The Last Door", "mystery"
        await wizard.next()                  # -> PROMPT
        wizard.prompt = "A locksmith finds a door with no lock"
        await wizard.next()                  # generates -> REVIEW
        await wizard.save()                  # next_path == /story/<id>
    """

    heading = "Create Your Story"
    genres = tuple(Genre)

    def __init__(self, context: PageContext):
        super().__init__(context)
        self.step = WizardStep.DETAILS
        self.title = ""
        self.genre = ""
        self.prompt = ""
        self.generated_content = ""

    @property
    def action_label(self) -> str:
        if self.step is WizardStep.REVIEW:
            return "Save Story"
        if self.step is WizardStep.PROMPT:
            return "Generating..." if self.loading else "Generate Story"
        return "Next"

    def _check_details(self) -> bool:
        if not self.title.strip():
            self.error = "Please provide a title"
            return False
        if not self.genre:
            self.error = "Please select a genre"
            return False
        return True

    async def next(self) -> None:
        """Advance one step; from PROMPT this generates the story first."""
        self.error = None
        if self.step is WizardStep.DETAILS:
            if self._check_details():
                self.step = WizardStep.PROMPT
        elif self.step is WizardStep.PROMPT:
            await self.generate()
        else:
            await self.save()

    def back(self) -> None:
        self.error = None
        if self.step is not WizardStep.DETAILS:
            self.step = WizardStep(self.step - 1)

    async def generate(self) -> None:
        if not self.prompt.strip():
            self.error = "Please provide a story prompt"
            return
        result = await self._call(self.context.stories.generate_ai_story(self.prompt))
        if result.ok and result.value is not None:
            self.generated_content = result.value.content
            self.step = WizardStep.REVIEW

    async def save(self) -> None:
        draft = StoryDraft(
            title=self.title,
            genre=self.genre,
            content=self.generated_content,
            is_ai_generated=True,
        )
        result = await self._call(self.context.stories.create_story(draft))
        if result.ok and result.value is not None:
            self.go(f"/story/{result.value.id}")
