"""Routing: path matching and the route guard."""

from .guard import DEGRADED_MESSAGE, GuardDecision, GuardState, Redirect, RouteGuard
from .router import Route, Router, split_location

__all__ = [
    "DEGRADED_MESSAGE",
    "GuardDecision",
    "GuardState",
    "Redirect",
    "RouteGuard",
    "Route",
    "Router",
    "split_location",
]
