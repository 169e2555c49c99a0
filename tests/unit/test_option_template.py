"""Tests for resolving option definitions into templates and defaults."""

from __future__ import annotations

from types import MappingProxyType

import pytest

from lifecycle_engine.errors import OptionsConfigurationError
from lifecycle_engine.options.template import resolve_options_template
from lifecycle_engine.options.types import EnumChoices, OptionType


def _definition() -> dict:
    return {
        "visible": (True, OptionType.BOOLEAN),
        "overflow": {
            "x": ("scroll", "visible hidden scroll"),
            "y": ("scroll", "visible hidden scroll"),
        },
        "padding": (0, ["number", OptionType.NULL]),
    }


def test_resolve_splits_template_and_defaults() -> None:
    resolved = resolve_options_template(_definition())

    assert resolved.keys() == ("visible", "overflow", "padding")
    assert dict(resolved.defaults) == {
        "visible": True,
        "overflow": {"x": "scroll", "y": "scroll"},
        "padding": 0,
    }
    assert resolved.template["visible"] is OptionType.BOOLEAN
    assert resolved.template["overflow"]["x"] == EnumChoices(("visible", "hidden", "scroll"))
    assert resolved.template["padding"] == (OptionType.NUMBER, OptionType.NULL)


def test_resolved_template_is_read_only() -> None:
    resolved = resolve_options_template(_definition())

    assert isinstance(resolved.template, MappingProxyType)
    assert isinstance(resolved.template["overflow"], MappingProxyType)
    with pytest.raises(TypeError):
        resolved.template["visible"] = OptionType.STRING  # type: ignore[index]


def test_callable_descriptor_is_kept_and_default_trusted() -> None:
    def clamp(candidate, current):  # type: ignore[no-untyped-def]
        return max(0, min(10, int(candidate)))

    resolved = resolve_options_template({"level": (-5, clamp)})

    assert resolved.template["level"] is clamp
    assert resolved.defaults["level"] == -5


@pytest.mark.parametrize(
    "definition",
    [
        {},
        {"a": {}},
        {"a": True},
        {"a": (1, OptionType.NUMBER, "extra")},
        {"a": (1, 42)},
        {"a": (1, [])},
        {"a": (1, "   ")},
        {1: (1, OptionType.NUMBER)},
    ],
)
def test_malformed_definitions_raise(definition: dict) -> None:
    with pytest.raises(OptionsConfigurationError):
        resolve_options_template(definition)


def test_default_must_satisfy_its_descriptor() -> None:
    with pytest.raises(OptionsConfigurationError, match="mode"):
        resolve_options_template({"mode": ("auto", "visible hidden")})


def test_non_mapping_definition_raises() -> None:
    with pytest.raises(OptionsConfigurationError):
        resolve_options_template([("a", 1)])  # type: ignore[arg-type]
