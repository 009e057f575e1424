"""Core utilities and configuration for NovelAI Hub.

This module contains:
- Configuration and settings management
- The client exception hierarchy
- Bounded retry, cancellation tokens and request results
"""
from .cancellation import CancellationToken, RequestTracker
from .config import Settings, get_settings, settings
from .exceptions import (
    BadRequestError,
    ForbiddenError,
    InvalidResponseError,
    NetworkError,
    NotFoundError,
    NovelHubError,
    RateLimitError,
    RequestError,
    RetryExhaustedError,
    ServerError,
    UnauthorizedError,
    ValidationError,
    error_for_status,
)
from .result import RequestResult, attempt
from .retry import RetryOutcome, RetryPolicy

__all__ = [
    # Config
    "settings",
    "Settings",
    "get_settings",
    # Errors
    "NovelHubError",
    "ValidationError",
    "RequestError",
    "BadRequestError",
    "UnauthorizedError",
    "ForbiddenError",
    "NotFoundError",
    "RateLimitError",
    "ServerError",
    "NetworkError",
    "InvalidResponseError",
    "RetryExhaustedError",
    "error_for_status",
    # Requests
    "CancellationToken",
    "RequestTracker",
    "RequestResult",
    "attempt",
    "RetryPolicy",
    "RetryOutcome",
]
