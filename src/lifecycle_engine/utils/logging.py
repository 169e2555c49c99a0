"""Logging setup for applications that embed lifecycle instances."""

from __future__ import annotations

import logging
from logging import Logger
from typing import Iterable, Optional, Union

ENGINE_LOGGER = "lifecycle engine"
LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def resolve_level(level: Union[int, str]) -> int:
    """Turn a numeric level or a name such as ``"debug"`` into a logging level."""

    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(str(level).strip().upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown logging level: {level!r}")
    return resolved


def configure_logging(
    level: Union[int, str] = logging.WARNING,
    *,
    name: str = ENGINE_LOGGER,
    propagate: bool = False,
    extra_loggers: Optional[Iterable[str]] = None,
) -> Logger:
    """Route engine diagnostics to stderr and return the configured logger.

    The options, cache and lifecycle modules log under ``"lifecycle engine.*"``
    and reach a handler attached to ``name`` when ``name`` is one of their
    ancestors. Calling this again only updates levels; no second stream
    handler is added.
    """

    numeric = resolve_level(level)
    targets = [logging.getLogger(name)]
    targets.extend(logging.getLogger(extra) for extra in extra_loggers or ())
    for target in targets:
        if not any(isinstance(handler, logging.StreamHandler) for handler in target.handlers):
            handler = logging.StreamHandler()
            handler.setFormatter(logging.Formatter(LOG_FORMAT))
            target.addHandler(handler)
        target.setLevel(numeric)
        target.propagate = propagate
    return targets[0]


__all__ = ["ENGINE_LOGGER", "configure_logging", "resolve_level"]
