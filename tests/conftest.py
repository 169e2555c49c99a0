"""Pytest fixtures and path configuration for lifecycle engine tests."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Any, Dict, List, Tuple

import pytest

REPO_ROOT = Path(__file__).resolve().parents[1]
SRC_DIR = REPO_ROOT / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))


class RecordingCallback:
    """Update callback that keeps every ``(changed_options, changed_cache)`` pair."""

    def __init__(self) -> None:
        self.calls: List[Tuple[Any, Any]] = []

    def __call__(self, changed_options: Any, changed_cache: Any) -> None:
        self.calls.append((changed_options, changed_cache))

    @property
    def count(self) -> int:
        return len(self.calls)

    @property
    def last(self) -> Tuple[Any, Any]:
        return self.calls[-1]

    def reset(self) -> None:
        self.calls.clear()


class CountingCompute:
    """Pure compute function that reads its value from a mutable source."""

    def __init__(self, source: Dict[str, Any], key: str) -> None:
        self.source = source
        self.key = key
        self.calls: List[Tuple[bool, Any]] = []

    def __call__(self, force: bool, previous: Any) -> Any:
        self.calls.append((force, previous))
        return self.source[self.key]


@pytest.fixture()
def recorder() -> RecordingCallback:
    return RecordingCallback()


@pytest.fixture()
def make_compute():
    """Factory for :class:`CountingCompute` instances bound to one source mapping."""

    def _factory(source: Dict[str, Any], key: str) -> CountingCompute:
        return CountingCompute(source, key)

    return _factory
