"""Option templates, validation and deep merging."""

from __future__ import annotations

import importlib
from types import ModuleType
from typing import Dict, Iterable, Tuple

__all__ = [
    "EnumChoices",
    "OptionType",
    "ResolvedOptions",
    "ValidationResult",
    "assign_deep",
    "initialize_options",
    "resolve_options_template",
    "revalidate_options",
]

_EXPORTS: Dict[str, Tuple[str, ...]] = {
    "merge": ("assign_deep",),
    "template": ("ResolvedOptions", "resolve_options_template"),
    "types": ("EnumChoices", "OptionType"),
    "validation": ("ValidationResult", "initialize_options", "revalidate_options"),
}


def _load_module(name: str) -> ModuleType:
    return importlib.import_module(f"lifecycle_engine.options.{name}")


def __getattr__(name: str):
    for module_name, symbols in _EXPORTS.items():
        if name in symbols:
            module = _load_module(module_name)
            return getattr(module, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


def __dir__() -> Iterable[str]:
    return sorted(set(__all__))
