"""Account settings: statistics, profile form, picture upload, logout."""

from __future__ import annotations

from dataclasses import dataclass

from novelhub.core.exceptions import ValidationError
from novelhub.models.story import Story
from novelhub.models.upload import ImageUpload
from novelhub.services.validation import (
    count_words,
    validate_image,
    validate_password,
    validate_passwords_match,
)

from .base import FormPage, PageContext


@dataclass(frozen=True)
class AccountStats:
    total_stories: int = 0
    total_likes: int = 0
    total_words: int = 0

    @classmethod
    def from_stories(cls, stories: list[Story]) -> "AccountStats":
        return cls(
            total_stories=len(stories),
            total_likes=sum(story.like_count for story in stories),
            total_words=sum(
                story.word_count if story.word_count is not None else count_words(story.content)
                for story in stories
            ),
        )


class AccountPage(FormPage):
    """Profile management for the signed-in user.

    Password fields are only validated and sent when a new password is
    given. A picked image is checked locally before ``upload_image`` may
    send it.
    """

    heading = "Account Settings"
    fields = ("username", "email", "current_password", "new_password", "confirm_password")

    def __init__(self, context: PageContext):
        super().__init__(context)
        self.stats = AccountStats()
        self.image: ImageUpload | None = None
        self.image_error: str | None = None
        self.uploading = False
        self._fill_from_user()

    def _fill_from_user(self) -> None:
        user = self.current_user
        if user is not None:
            self.form["username"] = user.username
            self.form["email"] = user.email

    async def load(self) -> None:
        user = self.current_user
        if user is None:
            return
        result = await self._call(self.context.stories.get_user_stories(user.id))
        if result.ok and result.value is not None:
            self.stats = AccountStats.from_stories(result.value.stories)

    def _form_error(self) -> str | None:
        new_password = self.form["new_password"]
        try:
            if new_password:
                validate_password(
                    new_password,
                    "New password must be at least 6 characters long",
                    field="new_password",
                )
            validate_passwords_match(
                new_password, self.form["confirm_password"], "New passwords do not match"
            )
        except ValidationError as e:
            return e.message
        return None

    async def submit(self) -> None:
        self.success = None
        self.error = self._form_error()
        if self.error:
            return

        changes = {
            "username": self.form["username"],
            "email": self.form["email"],
        }
        if self.form["new_password"]:
            changes["current_password"] = self.form["current_password"]
            changes["new_password"] = self.form["new_password"]

        result = await self._call(self.context.auth.update_profile(**changes))
        if result.ok:
            self.success = "Profile updated successfully"
            for name in ("current_password", "new_password", "confirm_password"):
                self.form[name] = ""

    def select_image(self, image: ImageUpload) -> bool:
        """Pick an image; returns False and sets ``image_error`` if it is rejected."""
        try:
            validate_image(image)
        except ValidationError as e:
            self.image = None
            self.image_error = e.message
            return False
        self.image = image
        self.image_error = None
        return True

    async def upload_image(self) -> None:
        if self.image is None:
            return
        self.success = None
        result = await self._call(
            self.context.auth.update_profile_picture(self.image),
            loading_attr="uploading",
        )
        if result.ok:
            self.image = None
            self.success = "Profile picture updated successfully"

    def logout(self) -> None:
        self.context.auth.logout()
        self.go("/login")
