"""REST API access for NovelAI Hub."""

from . import endpoints
from .client import ApiClient

__all__ = ["ApiClient", "endpoints"]
