"""Display helpers for story text."""

from __future__ import annotations

import math

WORDS_PER_MINUTE = 200
PREVIEW_MAX_LENGTH = 150
SENTENCE_CUT_MIN_RATIO = 0.7
ELLIPSIS = "..."


def calculate_reading_time(content: str | None, words_per_minute: int = WORDS_PER_MINUTE) -> int:
    """Estimate reading time in whole minutes, never less than one."""
    if not content:
        return 1
    word_count = len(content.split())
    return max(1, math.ceil(word_count / words_per_minute))


def format_story_preview(content: str | None, max_length: int = PREVIEW_MAX_LENGTH) -> str:
    """Shorten story text for cards and listings.

    Content that already fits is returned as is. Longer content ends after
    the last sentence in the first ``max_length`` characters, provided that
    sentence end lies past 70% of the window; otherwise it ends at the last
    word boundary followed by an ellipsis.

    Args:
        content: Full story text
        max_length: Size of the preview window in characters

    Returns:
        Preview text
    """
    if not content:
        return ""
    if len(content) <= max_length:
        return content

    content = content.strip()
    if len(content) <= max_length:
        return content

    window = content[:max_length]
    sentence_end = max(window.rfind("."), window.rfind("?"), window.rfind("!"))
    if sentence_end > max_length * SENTENCE_CUT_MIN_RATIO:
        return content[: sentence_end + 1]

    last_space = window.rfind(" ")
    if last_space == -1:
        return window + ELLIPSIS
    return content[:last_space] + ELLIPSIS
