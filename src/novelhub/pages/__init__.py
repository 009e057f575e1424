"""Page controllers: the state and actions behind each screen."""

from .account import AccountPage, AccountStats
from .base import FormPage, PageContext, PageController
from .browse import BrowsePage, StoryCard
from .create_story import STEP_LABELS, CreateStoryWizard, WizardStep
from .edit_story import EditStoryPage
from .home import HomePage
from .login import LoginPage
from .my_stories import MyStoriesPage
from .reset_password import ResetPasswordPage
from .signup import SignupPage
from .view_story import ViewStoryPage
from .write_story import WriteStoryPage

__all__ = [
    "AccountPage",
    "AccountStats",
    "FormPage",
    "PageContext",
    "PageController",
    "BrowsePage",
    "StoryCard",
    "STEP_LABELS",
    "CreateStoryWizard",
    "WizardStep",
    "EditStoryPage",
    "HomePage",
    "LoginPage",
    "MyStoriesPage",
    "ResetPasswordPage",
    "SignupPage",
    "ViewStoryPage",
    "WriteStoryPage",
]
