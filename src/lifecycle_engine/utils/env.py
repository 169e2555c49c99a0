"""Locate and load the .env file consulted by ``EngineSettings.from_env``."""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv

_REPO_ROOT = Path(__file__).resolve().parents[3]
DOTENV_OVERRIDE_VAR = "LIFECYCLE_ENGINE_DOTENV"


def dotenv_path() -> Path:
    """Return the .env location, honouring ``LIFECYCLE_ENGINE_DOTENV`` when set."""

    override = os.environ.get(DOTENV_OVERRIDE_VAR)
    if override:
        return Path(override).expanduser()
    return _REPO_ROOT / ".env"


@lru_cache(maxsize=1)
def load_repo_dotenv() -> bool:
    """Load the .env file once; variables already in the environment win."""

    env_path = dotenv_path()
    if not env_path.is_file():
        return False
    load_dotenv(env_path, override=False)
    return True


__all__ = ["DOTENV_OVERRIDE_VAR", "dotenv_path", "load_repo_dotenv"]
