"""Structural merge helpers for nested option trees."""

from __future__ import annotations

from collections.abc import Mapping, MutableMapping
from typing import Any


def clone_value(value: Any) -> Any:
    """Copy nested mappings, lists and tuples; leave every other value shared."""

    if isinstance(value, Mapping):
        return {key: clone_value(item) for key, item in value.items()}
    if isinstance(value, list):
        return [clone_value(item) for item in value]
    if isinstance(value, tuple):
        return tuple(clone_value(item) for item in value)
    return value


def assign_deep(target: MutableMapping[str, Any], *sources: Mapping[str, Any] | None) -> MutableMapping[str, Any]:
    """Merge ``sources`` into ``target`` key by key and return ``target``.

    Nested mappings are merged rather than replaced so that updating one leaf
    keeps its siblings. Values are cloned on the way in, so ``target`` never
    aliases containers owned by a source.
    """

    for source in sources:
        if not source:
            continue
        for key, value in source.items():
            existing = target.get(key)
            if isinstance(value, Mapping) and isinstance(existing, MutableMapping):
                assign_deep(existing, value)
            else:
                target[key] = clone_value(value)
    return target


__all__ = ["assign_deep", "clone_value"]
