"""Change-tracking caches and the change sets they report."""

from __future__ import annotations

import importlib
from types import ModuleType
from typing import Dict, Iterable, Tuple

__all__ = [
    "CacheEntrySpec",
    "Change",
    "ChangeSet",
    "ChangeTracker",
    "ComputedCache",
    "ReferenceTracker",
    "UNSET",
]

_EXPORTS: Dict[str, Tuple[str, ...]] = {
    "changeset": ("Change", "ChangeSet", "UNSET"),
    "tracker": ("CacheEntrySpec", "ChangeTracker", "ComputedCache", "ReferenceTracker"),
}


def _load_module(name: str) -> ModuleType:
    return importlib.import_module(f"lifecycle_engine.cache.{name}")


def __getattr__(name: str):
    for module_name, symbols in _EXPORTS.items():
        if name in symbols:
            module = _load_module(module_name)
            return getattr(module, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


def __dir__() -> Iterable[str]:
    return sorted(set(__all__))
