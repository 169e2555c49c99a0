"""Keyed stores that recompute values on request and report what changed."""

from __future__ import annotations

import copy
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Callable, Dict, Generic, Hashable, Iterable, List, Optional, Tuple, TypeVar

from ..errors import CacheConfigurationError, UnknownCacheKeyError
from ..utils.compare import values_equal
from .changeset import UNSET, Change, ChangeSet

LOGGER = logging.getLogger("lifecycle engine.cache")

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")

ComputeFn = Callable[[bool, Any], Any]
EqualFn = Callable[[Any, Any], bool]


@dataclass(frozen=True, slots=True)
class CacheEntrySpec:
    """How to (re)compute one cache key and how to tell whether it changed."""

    compute: ComputeFn
    equal: Optional[EqualFn] = None

    def __post_init__(self) -> None:
        if not callable(self.compute):
            raise CacheConfigurationError("CacheEntrySpec.compute must be callable.")
        if self.equal is not None and not callable(self.equal):
            raise CacheConfigurationError("CacheEntrySpec.equal must be callable when provided.")

    @classmethod
    def coerce(cls, key: Hashable, entry: Any) -> "CacheEntrySpec":
        """Accept a spec, a bare compute function or a ``(compute, equal)`` pair."""

        if isinstance(entry, CacheEntrySpec):
            return entry
        if isinstance(entry, (tuple, list)) and len(entry) in (1, 2):
            return cls(*entry)
        if callable(entry):
            return cls(compute=entry)
        raise CacheConfigurationError(f"Cache key {key!r} has an unusable specification: {entry!r}")


class ChangeTracker(Generic[K, V]):
    """Generic diff engine over a fixed key set.

    Subclasses decide where values come from by implementing :meth:`_compute`.
    Values that were never computed are stored as :data:`UNSET` and always
    count as changed on their first computation.
    """

    def __init__(
        self,
        keys: Iterable[K],
        *,
        equality: Optional[Mapping[K, EqualFn]] = None,
    ) -> None:
        self._keys: Tuple[K, ...] = tuple(dict.fromkeys(keys))
        self._values: Dict[K, Any] = {key: UNSET for key in self._keys}
        self._equality: Dict[K, EqualFn] = dict(equality or {})

    @property
    def keys(self) -> Tuple[K, ...]:
        return self._keys

    @property
    def values(self) -> Mapping[K, V]:
        """Read-only view of every key computed so far."""

        return MappingProxyType(
            {key: value for key, value in self._values.items() if value is not UNSET}
        )

    def is_computed(self, key: K) -> bool:
        return self._values.get(key, UNSET) is not UNSET

    def __contains__(self, key: object) -> bool:
        return key in self._values

    def __getitem__(self, key: K) -> V:
        value = self._values[key]
        if value is UNSET:
            raise KeyError(key)
        return value

    def update(self, keys: Optional[Iterable[K]] = None, force: bool = False) -> ChangeSet[K]:
        """Recompute the requested keys and return the ones whose value changed.

        ``force`` recomputes every key regardless of ``keys``. Without force,
        ``None`` recomputes nothing and a sequence recomputes exactly its keys.
        """

        if force:
            targets = self._keys
        elif keys is None:
            return ChangeSet.empty()
        else:
            targets = self._resolve_targets(keys)

        changes: List[Change[K]] = []
        for key in targets:
            change = self._refresh(key, force)
            if change is not None:
                changes.append(change)
        if changes:
            LOGGER.debug(
                "%s refreshed %d key(s), changed: %s",
                type(self).__name__,
                len(targets),
                ", ".join(repr(change.key) for change in changes),
            )
        return ChangeSet(changes=tuple(changes), forced=force)

    def _resolve_targets(self, keys: Iterable[K]) -> Tuple[K, ...]:
        if isinstance(keys, (str, bytes)):
            keys = (keys,)  # type: ignore[assignment]
        targets = tuple(dict.fromkeys(keys))
        unknown = [key for key in targets if key not in self._values]
        if unknown:
            raise UnknownCacheKeyError(unknown)
        return targets

    def _refresh(self, key: K, force: bool) -> Optional[Change[K]]:
        stored = self._values[key]
        initial = stored is UNSET
        previous = self._previous_for_compute(key) if initial else stored
        value = self._compute(key, force, previous)
        if not initial and self._equal(key, stored, value):
            return None
        self._values[key] = value
        return Change(key=key, value=value, previous=previous, initial=initial)

    def _previous_for_compute(self, key: K) -> Any:
        return None

    def _equal(self, key: K, previous: Any, value: Any) -> bool:
        equal = self._equality.get(key)
        if equal is None:
            return values_equal(previous, value)
        return bool(equal(previous, value))

    def _compute(self, key: K, force: bool, previous: Any) -> Any:
        raise NotImplementedError


class ComputedCache(ChangeTracker[K, V]):
    """Cache whose values are derived by per-key compute functions.

    ``seed`` supplies the ``previous`` argument of each key's first computation.
    With ``trust_seed`` the seeded values are stored as already computed, so a
    first computation that reproduces the seed is not reported as a change.
    """

    def __init__(
        self,
        spec: Mapping[K, Any],
        *,
        seed: Optional[Mapping[K, Any]] = None,
        trust_seed: bool = False,
    ) -> None:
        if not isinstance(spec, Mapping):
            raise CacheConfigurationError(
                f"Cache spec must be a mapping, received {type(spec).__name__}."
            )
        entries = {key: CacheEntrySpec.coerce(key, entry) for key, entry in spec.items()}
        super().__init__(
            entries.keys(),
            equality={key: entry.equal for key, entry in entries.items() if entry.equal is not None},
        )
        self._entries = entries
        seed = dict(seed or {})
        unknown = [key for key in seed if key not in entries]
        if unknown:
            raise CacheConfigurationError(f"Cache seed names undeclared keys: {unknown!r}")
        self._seed = {} if trust_seed else seed
        if trust_seed:
            self._values.update(seed)

    def _previous_for_compute(self, key: K) -> Any:
        return self._seed.get(key)

    def _compute(self, key: K, force: bool, previous: Any) -> Any:
        return self._entries[key].compute(force, previous)


class ReferenceTracker(ChangeTracker[K, V]):
    """Tracks values held by a live mapping by snapshotting them on refresh.

    ``snapshot`` copies a value before it is stored, so later in-place edits of
    the source show up as changes. It defaults to :func:`copy.deepcopy`.
    """

    def __init__(
        self,
        source: Mapping[K, Any],
        keys: Optional[Iterable[K]] = None,
        *,
        snapshot: Callable[[Any], Any] = copy.deepcopy,
    ) -> None:
        super().__init__(source.keys() if keys is None else keys)
        self._source = source
        self._snapshot = snapshot

    def _compute(self, key: K, force: bool, previous: Any) -> Any:
        return self._snapshot(self._source[key])


__all__ = [
    "CacheEntrySpec",
    "ChangeTracker",
    "ComputedCache",
    "ComputeFn",
    "EqualFn",
    "ReferenceTracker",
]
