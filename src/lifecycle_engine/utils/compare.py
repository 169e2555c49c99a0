"""Equality helpers shared by the option validator and the change trackers."""

from __future__ import annotations

from typing import Any


def values_equal(left: Any, right: Any) -> bool:
    """Structural equality with an identity fast path."""

    if left is right:
        return True
    return bool(left == right)


__all__ = ["values_equal"]
