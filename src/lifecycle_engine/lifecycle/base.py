"""Lifecycle base: options, cache and a single coalescing update callback."""

from __future__ import annotations

import logging
from collections.abc import Mapping, MutableMapping
from enum import Enum
from typing import Any, Callable, Dict, Hashable, Iterable, Optional

from ..cache.changeset import ChangeSet
from ..cache.tracker import ComputedCache, ReferenceTracker
from ..config.settings import EngineSettings
from ..errors import LifecycleReentrancyError
from ..options.merge import assign_deep, clone_value
from ..options.template import ResolvedOptions, resolve_options_template
from ..options.validation import initialize_options, revalidate_options
from ..utils.compare import values_equal
from .hints import ALL_KEYS, UpdateHints

LOGGER = logging.getLogger("lifecycle engine.lifecycle")

UpdateCallback = Callable[[ChangeSet[str], ChangeSet[Hashable]], Any]


class LifecycleState(str, Enum):
    CONSTRUCTING = "constructing"
    ACTIVE = "active"


class LifecycleBase:
    """Tracks options and cache values and notifies one callback about changes.

    Every public call runs exactly one synchronous cycle. A cycle refreshes the
    cache first, then the options, and invokes ``update_callback`` once with
    ``(changed_options, changed_cache)`` if either reported a change. The cycle
    run during construction is forced, so the callback always sees the full
    initial state.

    Parameters
    ----------
    options_definition:
        Nested mapping of ``(default, descriptor)`` pairs, see
        :func:`~lifecycle_engine.options.template.resolve_options_template`.
    cache_spec:
        Mapping of cache key to a compute function ``(force, previous)``, a
        ``(compute, equal)`` pair or a :class:`CacheEntrySpec`.
    update_callback:
        Called with both change sets. It must not call back into this instance.
    initial_options:
        Partial options merged over the defaults; invalid keys keep their default.
    """

    def __init__(
        self,
        options_definition: Mapping[str, Any],
        cache_spec: Mapping[Hashable, Any],
        update_callback: UpdateCallback,
        initial_options: Optional[Mapping[str, Any]] = None,
        *,
        settings: Optional[EngineSettings] = None,
    ) -> None:
        if not callable(update_callback):
            raise TypeError("update_callback must be callable.")
        self.phase = LifecycleState.CONSTRUCTING
        self.settings = settings or EngineSettings()
        self._resolved: ResolvedOptions = resolve_options_template(options_definition)
        if initial_options is not None and not isinstance(initial_options, Mapping):
            LOGGER.warning(
                "Ignoring initial options of type %s; expected a mapping.",
                type(initial_options).__name__,
            )
            initial_options = None
        self._options: Dict[str, Any] = initialize_options(
            initial_options,
            self._resolved,
            report_invalid=self.settings.report_invalid_options,
        )
        self._cache: ComputedCache[Hashable, Any] = ComputedCache(cache_spec)
        self._options_tracker: ReferenceTracker[str, Any] = ReferenceTracker(
            self._options, snapshot=clone_value
        )
        self._update_callback = update_callback
        self._in_cycle = False
        self.cycle_count = 0
        self.notify_count = 0

        self._run_cycle(UpdateHints(force=True))
        self.phase = LifecycleState.ACTIVE

    @property
    def template(self) -> Mapping[str, Any]:
        return self._resolved.template

    @property
    def defaults(self) -> Mapping[str, Any]:
        return self._resolved.defaults

    @property
    def cache(self) -> Mapping[Hashable, Any]:
        """Read-only view of the current cache values."""

        return self._cache.values

    def options(self, new_options: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
        """Apply ``new_options`` if given and return the full options state.

        Invalid keys are dropped with a warning; the remaining keys still apply.
        """

        if new_options:
            self._ensure_idle()
            if not isinstance(new_options, Mapping):
                LOGGER.warning(
                    "Ignoring options update of type %s; expected a mapping.",
                    type(new_options).__name__,
                )
                return self._options
            result = revalidate_options(
                new_options,
                self._resolved.template,
                self._options,
                report_invalid=self.settings.report_invalid_options,
            )
            assign_deep(self._options, result.validated)
            self._run_cycle(UpdateHints(changed_options=result.changed_keys))
        return self._options

    def update(self, force: bool = False) -> None:
        """Run a cycle over the whole cache; ``force`` also re-checks every option."""

        self._ensure_idle()
        force = bool(force)
        if force:
            self._resanitize_options()
        self._run_cycle(UpdateHints(force=force))

    def update_cache(self, keys: Optional[Iterable[Hashable]] = None) -> None:
        """Recompute ``keys`` (every cache key when ``None``) without touching options."""

        self._ensure_idle()
        if keys is None:
            request = ALL_KEYS
        elif isinstance(keys, (str, bytes)):
            request = (keys,)
        else:
            request = tuple(keys)
        self._run_cycle(UpdateHints(changed_cache=request))

    def _resanitize_options(self) -> None:
        sanitized = initialize_options(
            self._options,
            self._resolved,
            report_invalid=self.settings.report_invalid_options,
        )
        _replace_in_place(self._options, sanitized, self._resolved.template)

    def _ensure_idle(self) -> None:
        if self._in_cycle:
            raise LifecycleReentrancyError(
                "LifecycleBase does not support re-entrant calls from its update callback."
            )

    def _run_cycle(self, hints: UpdateHints) -> None:
        self._ensure_idle()
        self._in_cycle = True
        try:
            cache_keys, cache_force = hints.cache_request(self._cache.keys)
            changed_cache = self._cache.update(cache_keys, cache_force)
            option_keys, options_force = hints.options_request()
            changed_options = self._options_tracker.update(option_keys, options_force)
            self.cycle_count += 1
            if not (changed_options.anything_changed or changed_cache.anything_changed):
                LOGGER.debug("Cycle %d: nothing changed.", self.cycle_count)
                return
            LOGGER.debug(
                "Cycle %d: options %s, cache %s.",
                self.cycle_count,
                list(changed_options.changed_keys),
                list(changed_cache.changed_keys),
            )
            self.notify_count += 1
            self._update_callback(changed_options, changed_cache)
        finally:
            self._in_cycle = False

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(phase={self.phase.value!r}, "
            f"options={sorted(self._options)!r}, cache={list(self._cache.keys)!r})"
        )


def _replace_in_place(
    target: MutableMapping[str, Any],
    sanitized: Mapping[str, Any],
    template: Mapping[str, Any],
) -> None:
    """Make ``target`` equal to ``sanitized`` while keeping its nested option dicts."""

    for key in [key for key in target if key not in sanitized]:
        del target[key]
    for key, value in sanitized.items():
        existing = target.get(key)
        if isinstance(template.get(key), Mapping) and isinstance(existing, MutableMapping):
            _replace_in_place(existing, value, template[key])
        elif key not in target or not values_equal(existing, value):
            target[key] = value


__all__ = ["LifecycleBase", "LifecycleState", "UpdateCallback"]
