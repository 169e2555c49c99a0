"""Utility helpers for logging, environment loading and value comparison."""

from .logging import configure_logging, resolve_level
from .env import load_repo_dotenv
from .compare import values_equal

__all__ = [
    "configure_logging",
    "load_repo_dotenv",
    "resolve_level",
    "values_equal",
]
