"""Configuration helpers for the lifecycle engine."""

from .settings import EngineSettings
from .loader import dump_options_file, load_options_file

__all__ = [
    "EngineSettings",
    "dump_options_file",
    "load_options_file",
]
