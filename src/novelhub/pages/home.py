"""Landing page."""

from .base import PageController

FEATURES = (
    ("Generate Stories", "Create unique stories using AI, tailored to your preferences and ideas."),
    ("Write Your Own", "Express your creativity by writing and sharing your own original stories."),
    ("Browse Stories", "Discover and read stories from our growing community of writers."),
)


class HomePage(PageController):
    heading = "Welcome to NovelAI Hub"
    tagline = "Discover AI-generated stories tailored to your interests"
    features = FEATURES

    def start_creating(self) -> None:
        self.go("/create")
