"""Client-side validation.

Advisory only: the API validates authoritatively. These checks exist so a
form can show a precise message without a round trip.
"""

from __future__ import annotations

from novelhub.core.exceptions import ValidationError
from novelhub.models.upload import ImageUpload

MAX_TITLE_LENGTH = 100
MAX_CONTENT_LENGTH = 50_000
MAX_COMMENT_LENGTH = 1_000
MAX_PROMPT_LENGTH = 1_000
MAX_IMAGE_SIZE = 5 * 1024 * 1024  # 5MB
ALLOWED_IMAGE_TYPES = ("image/jpeg", "image/png", "image/gif")
MIN_STORY_WORDS = 100
MIN_PASSWORD_LENGTH = 6


def count_words(text: str | None) -> int:
    """Count whitespace-separated words."""
    if not text:
        return 0
    return len(text.split())


def require_id(value: str | None, message: str) -> str:
    if not value or not str(value).strip():
        raise ValidationError(message, field="id")
    return str(value)


def validate_story_data(
    title: str | None,
    content: str | None,
    image: ImageUpload | None = None,
) -> None:
    """Check title, content and an optional image before sending a story.

    Raises:
        ValidationError: On the first rule that fails
    """
    validate_title(title)
    validate_content(content)
    if image is not None:
        validate_image(image)


def validate_title(title: str | None) -> None:
    if not title or not title.strip():
        raise ValidationError("Title is required", field="title")
    if len(title) > MAX_TITLE_LENGTH:
        raise ValidationError(
            f"Title must be less than {MAX_TITLE_LENGTH} characters", field="title"
        )


def validate_content(content: str | None) -> None:
    if not content or not content.strip():
        raise ValidationError("Content is required", field="content")
    if len(content) > MAX_CONTENT_LENGTH:
        raise ValidationError(
            f"Content must be less than {MAX_CONTENT_LENGTH} characters", field="content"
        )


def validate_image(image: ImageUpload) -> None:
    """Restrict uploads to small JPG/PNG/GIF files."""
    if image.content_type not in ALLOWED_IMAGE_TYPES:
        raise ValidationError(
            "Invalid image type. Allowed types: JPG, PNG, GIF", field="image"
        )
    if image.size > MAX_IMAGE_SIZE:
        raise ValidationError("Image size must be less than 5MB", field="image")


def validate_comment(content: str | None) -> str:
    """Return the trimmed comment."""
    if not content or not content.strip():
        raise ValidationError("Comment content is required", field="content")
    if len(content) > MAX_COMMENT_LENGTH:
        raise ValidationError(
            f"Comment must be less than {MAX_COMMENT_LENGTH} characters", field="content"
        )
    return content.strip()


def validate_prompt(prompt: str | None) -> str:
    """Return the trimmed AI prompt."""
    if not prompt or not prompt.strip():
        raise ValidationError("Story prompt is required", field="prompt")
    if len(prompt) > MAX_PROMPT_LENGTH:
        raise ValidationError(
            f"Prompt must be less than {MAX_PROMPT_LENGTH} characters", field="prompt"
        )
    return prompt.strip()


def validate_password(password: str | None, message: str, field: str = "password") -> None:
    if not password or len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(message, field=field)


def validate_passwords_match(
    password: str | None,
    confirmation: str | None,
    message: str,
    field: str = "confirm_password",
) -> None:
    if (password or "") != (confirmation or ""):
        raise ValidationError(message, field=field)
