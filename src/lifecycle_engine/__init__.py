"""Lifecycle engine: validated options, change-tracked caches and coalesced updates."""

from importlib import import_module
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

_PROJECT_ROOT = Path(__file__).resolve().parents[2]
load_dotenv(_PROJECT_ROOT / ".env", override=False)

__all__ = ("cache", "config", "errors", "lifecycle", "options", "utils", "LifecycleBase")


def __getattr__(name: str) -> Any:
    if name == "LifecycleBase":
        from .lifecycle.base import LifecycleBase

        globals()[name] = LifecycleBase
        return LifecycleBase
    if name in __all__:
        module = import_module(f"{__name__}.{name}")
        globals()[name] = module
        return module
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
