"""Exception hierarchy shared by the options, cache and lifecycle layers."""

from __future__ import annotations

from typing import Any


class LifecycleEngineError(Exception):
    """Base class for every error raised by the engine itself."""


class OptionsConfigurationError(LifecycleEngineError, ValueError):
    """Raised when an options definition cannot be resolved into a template."""


class CacheConfigurationError(LifecycleEngineError, ValueError):
    """Raised when a cache specification is malformed."""


class InvalidOptionValueError(LifecycleEngineError, ValueError):
    """Signals that a candidate option value was rejected by its descriptor."""

    def __init__(self, key: str, value: Any, reason: str = "") -> None:
        self.key = key
        self.value = value
        self.reason = reason
        message = f"Invalid value {value!r} for option {key!r}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class UnknownCacheKeyError(LifecycleEngineError, KeyError):
    """Raised when a cache refresh names keys that the cache does not declare."""

    def __init__(self, keys: Any) -> None:
        self.keys = tuple(keys)
        super().__init__(f"Unknown cache keys requested: {list(self.keys)!r}")

    def __str__(self) -> str:
        return str(self.args[0])


class LifecycleReentrancyError(LifecycleEngineError, RuntimeError):
    """Raised when the update callback re-enters the lifecycle that invoked it."""


__all__ = [
    "CacheConfigurationError",
    "InvalidOptionValueError",
    "LifecycleEngineError",
    "LifecycleReentrancyError",
    "OptionsConfigurationError",
    "UnknownCacheKeyError",
]
