"""Path matching for the application shell."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any
from urllib.parse import parse_qs, urlsplit


@dataclass(frozen=True)
class Route:
    """A path pattern such as ``/story/:id/edit`` bound to a page class."""

    pattern: str
    page: Any
    protected: bool = False

    @property
    def segments(self) -> list[str]:
        return [s for s in self.pattern.strip("/").split("/") if s]

    def match(self, path: str) -> dict[str, str] | None:
        """Return the captured ``:params`` or None when the path differs."""
        parts = [s for s in path.strip("/").split("/") if s]
        segments = self.segments
        if len(parts) != len(segments):
            return None

        params: dict[str, str] = {}
        for segment, part in zip(segments, parts):
            if segment.startswith(":"):
                params[segment[1:]] = part
            elif segment != part:
                return None
        return params


def split_location(location: str) -> tuple[str, dict[str, str]]:
    """Split ``/reset-password?token=x`` into path and single-valued query."""
    parts = urlsplit(location)
    query = {key: values[-1] for key, values in parse_qs(parts.query).items()}
    return parts.path or "/", query


class Router:
    """Ordered route table; the first matching route wins."""

    def __init__(self, routes: list[Route] | None = None):
        self.routes: list[Route] = list(routes or [])

    def match(self, path: str) -> tuple[Route, dict[str, str]] | None:
        for route in self.routes:
            params = route.match(path)
            if params is not None:
                return route, params
        return None
