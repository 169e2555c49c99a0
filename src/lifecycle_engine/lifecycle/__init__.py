"""Lifecycle orchestration over options and cache change tracking."""

from .hints import ALL_KEYS, UpdateHints
from .base import LifecycleBase, LifecycleState, UpdateCallback

__all__ = [
    "ALL_KEYS",
    "LifecycleBase",
    "LifecycleState",
    "UpdateCallback",
    "UpdateHints",
]
