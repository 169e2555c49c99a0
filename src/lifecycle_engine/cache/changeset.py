"""Change records produced by one tracker update."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Generic, Hashable, Iterator, Optional, Tuple, TypeVar

K = TypeVar("K", bound=Hashable)


class _Unset:
    """Marker for a key that has never been computed."""

    _instance: Optional["_Unset"] = None

    def __new__(cls) -> "_Unset":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False


UNSET: Any = _Unset()


@dataclass(frozen=True, slots=True)
class Change(Generic[K]):
    """New and previous value of a single key that changed."""

    key: K
    value: Any
    previous: Any = None

    # True when the key had no stored value before this update.
    initial: bool = False


@dataclass(frozen=True, slots=True)
class ChangeSet(Generic[K]):
    """Ordered, duplicate free changes reported by one update."""

    changes: Tuple[Change[K], ...] = ()
    forced: bool = False
    _index: Dict[K, Change[K]] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        index: Dict[K, Change[K]] = {}
        for change in self.changes:
            if change.key in index:
                raise ValueError(f"ChangeSet received duplicate key {change.key!r}.")
            index[change.key] = change
        object.__setattr__(self, "_index", index)

    @classmethod
    def empty(cls, *, forced: bool = False) -> "ChangeSet[K]":
        return cls(changes=(), forced=forced)

    @property
    def anything_changed(self) -> bool:
        return bool(self.changes)

    @property
    def changed_keys(self) -> Tuple[K, ...]:
        return tuple(change.key for change in self.changes)

    def keys(self) -> Tuple[K, ...]:
        return self.changed_keys

    def values(self) -> Dict[K, Any]:
        """Map each changed key to its new value."""

        return {change.key: change.value for change in self.changes}

    def previous(self) -> Dict[K, Any]:
        """Map each changed key to the value it replaced."""

        return {change.key: change.previous for change in self.changes}

    def get(self, key: K, default: Optional[Change[K]] = None) -> Optional[Change[K]]:
        return self._index.get(key, default)

    def __getitem__(self, key: K) -> Change[K]:
        return self._index[key]

    def __contains__(self, key: object) -> bool:
        return key in self._index

    def __iter__(self) -> Iterator[K]:
        return iter(self.changed_keys)

    def __len__(self) -> int:
        return len(self.changes)

    def __bool__(self) -> bool:
        return self.anything_changed


__all__ = ["Change", "ChangeSet", "UNSET"]
