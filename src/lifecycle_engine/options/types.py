"""Option value descriptors and the rules used to match candidates against them."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Tuple, Union

from ..errors import InvalidOptionValueError, OptionsConfigurationError


class OptionType(str, Enum):
    """Primitive value kinds an option descriptor can require."""

    BOOLEAN = "boolean"
    NUMBER = "number"
    STRING = "string"
    ARRAY = "array"
    OBJECT = "object"
    FUNCTION = "function"
    NULL = "null"


@dataclass(frozen=True, slots=True)
class EnumChoices:
    """A closed set of literal string values."""

    choices: Tuple[str, ...]

    @classmethod
    def parse(cls, pattern: str) -> "EnumChoices":
        choices = tuple(dict.fromkeys(pattern.split()))
        if not choices:
            raise OptionsConfigurationError("Enum descriptors must list at least one value.")
        return cls(choices=choices)

    def __contains__(self, value: object) -> bool:
        return isinstance(value, str) and value in self.choices


OptionValidator = Callable[[Any, Any], Any]
Descriptor = Union[OptionType, EnumChoices, Tuple["Descriptor", ...], OptionValidator]

_TYPE_NAMES = {member.value: member for member in OptionType}


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


_TYPE_CHECKS: dict[OptionType, Callable[[Any], bool]] = {
    OptionType.BOOLEAN: lambda value: isinstance(value, bool),
    OptionType.NUMBER: _is_number,
    OptionType.STRING: lambda value: isinstance(value, str),
    OptionType.ARRAY: lambda value: isinstance(value, (list, tuple)),
    OptionType.OBJECT: lambda value: isinstance(value, Mapping),
    OptionType.FUNCTION: callable,
    OptionType.NULL: lambda value: value is None,
}


def normalise_descriptor(descriptor: Any) -> Descriptor:
    """Convert a user supplied descriptor into its canonical form.

    Strings naming an :class:`OptionType` select that type; any other string is
    parsed as a whitespace separated enum. Lists and tuples become unions.
    """

    if isinstance(descriptor, OptionType):
        return descriptor
    if isinstance(descriptor, EnumChoices):
        return descriptor
    if isinstance(descriptor, str):
        option_type = _TYPE_NAMES.get(descriptor.strip())
        if option_type is not None:
            return option_type
        return EnumChoices.parse(descriptor)
    if isinstance(descriptor, (list, tuple)):
        if not descriptor:
            raise OptionsConfigurationError("Union descriptors must not be empty.")
        return tuple(normalise_descriptor(member) for member in descriptor)
    if callable(descriptor):
        return descriptor
    raise OptionsConfigurationError(f"Unsupported option descriptor: {descriptor!r}")


def apply_descriptor(descriptor: Descriptor, key: str, candidate: Any, current: Any) -> Any:
    """Return the sanitized ``candidate`` or raise :class:`InvalidOptionValueError`."""

    if isinstance(descriptor, OptionType):
        if _TYPE_CHECKS[descriptor](candidate):
            return candidate
        raise InvalidOptionValueError(key, candidate, f"expected {descriptor.value}")
    if isinstance(descriptor, EnumChoices):
        if candidate in descriptor:
            return candidate
        raise InvalidOptionValueError(
            key, candidate, f"expected one of {' '.join(descriptor.choices)}"
        )
    if isinstance(descriptor, tuple):
        for member in descriptor:
            try:
                return apply_descriptor(member, key, candidate, current)
            except InvalidOptionValueError:
                continue
        raise InvalidOptionValueError(key, candidate, "no descriptor in the union matched")
    try:
        return descriptor(candidate, current)
    except InvalidOptionValueError:
        raise
    except Exception as exc:
        reason = str(exc) or type(exc).__name__
        raise InvalidOptionValueError(key, candidate, f"validator failed: {reason}") from exc


def describe(descriptor: Descriptor) -> str:
    """Human readable summary used in log messages."""

    if isinstance(descriptor, OptionType):
        return descriptor.value
    if isinstance(descriptor, EnumChoices):
        return " | ".join(repr(choice) for choice in descriptor.choices)
    if isinstance(descriptor, tuple):
        return " or ".join(describe(member) for member in descriptor)
    return getattr(descriptor, "__name__", "validator")


__all__ = [
    "Descriptor",
    "EnumChoices",
    "OptionType",
    "OptionValidator",
    "apply_descriptor",
    "describe",
    "normalise_descriptor",
]
