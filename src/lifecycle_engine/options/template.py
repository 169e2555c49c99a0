"""Expand an options definition into a validator template and a defaults tree."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Dict, Tuple

from ..errors import InvalidOptionValueError, OptionsConfigurationError
from .types import Descriptor, EnumChoices, OptionType, apply_descriptor, describe, normalise_descriptor

OptionsTemplate = Mapping[str, Any]


@dataclass(frozen=True, slots=True)
class ResolvedOptions:
    """Template (descriptors only) and defaults (values only) of identical shape."""

    template: OptionsTemplate
    defaults: Mapping[str, Any]

    def keys(self) -> Tuple[str, ...]:
        return tuple(self.template.keys())


def resolve_options_template(definition: Mapping[str, Any]) -> ResolvedOptions:
    """Split ``definition`` into a read-only template and a defaults tree.

    Every leaf of ``definition`` must be a ``(default, descriptor)`` pair; every
    inner node must be a mapping. Defaults are checked against their own
    descriptor unless the descriptor is a custom validator.
    """

    if not isinstance(definition, Mapping):
        raise OptionsConfigurationError(
            f"Options definition must be a mapping, received {type(definition).__name__}."
        )
    template, defaults = _resolve_node(definition, path=())
    return ResolvedOptions(template=template, defaults=MappingProxyType(defaults))


def _resolve_node(node: Mapping[str, Any], *, path: Tuple[str, ...]) -> Tuple[OptionsTemplate, Dict[str, Any]]:
    if not node:
        where = ".".join(path) or "<root>"
        raise OptionsConfigurationError(f"Options subtree {where} declares no options.")
    template: Dict[str, Any] = {}
    defaults: Dict[str, Any] = {}
    for key, entry in node.items():
        if not isinstance(key, str):
            raise OptionsConfigurationError(f"Option keys must be strings, received {key!r}.")
        key_path = path + (key,)
        if isinstance(entry, Mapping):
            template[key], defaults[key] = _resolve_node(entry, path=key_path)
            continue
        default, descriptor = _split_leaf(entry, key_path)
        template[key] = descriptor
        defaults[key] = default
    return MappingProxyType(template), defaults


def _split_leaf(entry: Any, path: Tuple[str, ...]) -> Tuple[Any, Descriptor]:
    dotted = ".".join(path)
    if not isinstance(entry, (tuple, list)) or len(entry) != 2:
        raise OptionsConfigurationError(
            f"Option {dotted} must be a (default, descriptor) pair or a nested mapping."
        )
    default, raw_descriptor = entry
    try:
        descriptor = normalise_descriptor(raw_descriptor)
    except OptionsConfigurationError as exc:
        raise OptionsConfigurationError(f"Option {dotted}: {exc}") from exc
    if isinstance(descriptor, (OptionType, EnumChoices, tuple)):
        try:
            apply_descriptor(descriptor, dotted, default, None)
        except InvalidOptionValueError as exc:
            raise OptionsConfigurationError(
                f"Default {default!r} for option {dotted} does not satisfy {describe(descriptor)}."
            ) from exc
    return default, descriptor


__all__ = ["OptionsTemplate", "ResolvedOptions", "resolve_options_template"]
