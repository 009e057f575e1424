"""REST endpoint paths, relative to the configured API base URL."""

from urllib.parse import quote

# Auth endpoints
REGISTER = "/users/register"
LOGIN = "/users/login"
FORGOT_PASSWORD = "/users/forgot-password"
RESET_PASSWORD = "/users/reset-password"
PROFILE = "/users/profile"
PROFILE_PICTURE = "/users/profile/picture"

# Story endpoints
STORIES = "/stories"
GENERATE_STORY = "/stories/generate"


def _segment(value: str) -> str:
    return quote(str(value), safe="")


def story(story_id: str) -> str:
    return f"{STORIES}/{_segment(story_id)}"


def user_stories(user_id: str) -> str:
    return f"{STORIES}/user/{_segment(user_id)}"


def like_story(story_id: str) -> str:
    return f"{story(story_id)}/like"


def comment_story(story_id: str) -> str:
    return f"{story(story_id)}/comments"
