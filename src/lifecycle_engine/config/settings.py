"""Engine-wide settings shared by every lifecycle instance."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, fields
from typing import Any, Mapping, MutableMapping, Optional

from ..utils.env import load_repo_dotenv
from ..utils.logging import ENGINE_LOGGER, configure_logging, resolve_level

_ENV_PREFIX = "LIFECYCLE_ENGINE_"
_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off"}


@dataclass(slots=True)
class EngineSettings:
    """Controls diagnostics emitted by the options and cache layers."""

    report_invalid_options: bool = True
    log_level: str = "WARNING"
    logger_name: str = ENGINE_LOGGER

    def __post_init__(self) -> None:
        self.report_invalid_options = _coerce_bool("report_invalid_options", self.report_invalid_options)
        level = str(self.log_level).strip().upper()
        try:
            resolve_level(level)
        except ValueError as exc:
            raise ValueError(f"EngineSettings.log_level must be a logging level name, received {self.log_level!r}.") from exc
        self.log_level = level
        if not isinstance(self.logger_name, str) or not self.logger_name.strip():
            raise ValueError(f"EngineSettings.logger_name must be a non-empty string, received {self.logger_name!r}.")
        self.logger_name = self.logger_name.strip()

    @property
    def level(self) -> int:
        return resolve_level(self.log_level)

    def apply_logging(self) -> logging.Logger:
        """Attach a stream handler to ``logger_name`` at the configured level."""

        return configure_logging(self.level, name=self.logger_name)

    @classmethod
    def from_mapping(cls, payload: Optional[Mapping[str, Any]]) -> "EngineSettings":
        """Build settings from a mapping, ignoring keys that are not settings."""

        known = {item.name for item in fields(cls)}
        kwargs = {key: value for key, value in (payload or {}).items() if key in known}
        return cls(**kwargs)

    @classmethod
    def from_env(cls, environ: Optional[MutableMapping[str, str]] = None) -> "EngineSettings":
        """Read ``LIFECYCLE_ENGINE_*`` variables after loading the repository .env."""

        if environ is None:
            load_repo_dotenv()
            environ = os.environ
        payload = {}
        for item in fields(cls):
            raw = environ.get(_ENV_PREFIX + item.name.upper())
            if raw is not None:
                payload[item.name] = raw
        return cls.from_mapping(payload)

    def as_dict(self) -> dict[str, Any]:
        return {
            "report_invalid_options": self.report_invalid_options,
            "log_level": self.log_level,
            "logger_name": self.logger_name,
        }


def _coerce_bool(name: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUTHY:
            return True
        if lowered in _FALSY:
            return False
    raise ValueError(f"EngineSettings.{name} must be a boolean, received {value!r}.")


__all__ = ["EngineSettings"]
