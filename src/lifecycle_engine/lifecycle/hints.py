"""Request shapes that drive a single lifecycle cycle."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Hashable, Optional, Tuple, Union


class _AllKeys:
    """Marker requesting every cache key."""

    _instance: Optional["_AllKeys"] = None

    def __new__(cls) -> "_AllKeys":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "ALL_KEYS"


ALL_KEYS = _AllKeys()

CacheRequest = Union[None, _AllKeys, Tuple[Hashable, ...]]


@dataclass(frozen=True, slots=True)
class UpdateHints:
    """What one cycle should look at.

    ``force`` set to ``True`` recomputes every option and cache key. ``False``
    is an explicit non-forced update, which refreshes all cache keys with the
    compute force flag off. ``None`` means the caller only named keys through
    ``changed_options`` and ``changed_cache``.
    """

    force: Optional[bool] = None
    changed_options: Optional[Tuple[str, ...]] = None
    changed_cache: CacheRequest = None

    @property
    def forced(self) -> bool:
        return self.force is True

    def cache_request(
        self, all_keys: Tuple[Hashable, ...]
    ) -> Tuple[Optional[Tuple[Hashable, ...]], bool]:
        """Translate into ``(keys, force)`` arguments for a cache tracker."""

        if self.forced:
            return None, True
        if self.changed_cache is ALL_KEYS:
            return all_keys, False
        if self.changed_cache is not None:
            return self.changed_cache, False
        if self.force is not None:
            return all_keys, False
        return None, False

    def options_request(self) -> Tuple[Optional[Tuple[str, ...]], bool]:
        """Translate into ``(keys, force)`` arguments for the options tracker."""

        if self.forced:
            return None, True
        return self.changed_options, False


__all__ = ["ALL_KEYS", "CacheRequest", "UpdateHints"]
