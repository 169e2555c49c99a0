"""Tests for initial option merging and revalidation against previous state."""

from __future__ import annotations

import logging

import pytest

from lifecycle_engine.errors import InvalidOptionValueError
from lifecycle_engine.options.template import resolve_options_template
from lifecycle_engine.options.types import OptionType
from lifecycle_engine.options.validation import initialize_options, revalidate_options


def _positive(candidate, current):  # type: ignore[no-untyped-def]
    value = int(candidate)
    if value <= 0:
        raise InvalidOptionValueError("size", candidate, "must be positive")
    return value


@pytest.fixture()
def resolved():
    return resolve_options_template(
        {
            "a": ("x", "x y z"),
            "b": (1, OptionType.NUMBER),
            "size": (4, _positive),
            "nested": {
                "p": (1, OptionType.NUMBER),
                "q": (2, OptionType.NUMBER),
            },
        }
    )


def test_initialize_applies_defaults_for_missing_keys(resolved) -> None:
    options = initialize_options(None, resolved)

    assert options == {"a": "x", "b": 1, "size": 4, "nested": {"p": 1, "q": 2}}
    options["nested"]["p"] = 100
    assert resolved.defaults["nested"]["p"] == 1


def test_initialize_isolates_invalid_keys(resolved, caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING, logger="lifecycle engine.options"):
        options = initialize_options({"a": 42, "b": 7, "unknown": True}, resolved)

    assert options["a"] == "x"
    assert options["b"] == 7
    assert "unknown" not in options
    assert set(options) == {"a", "b", "size", "nested"}
    assert "a (expected one of x y z)" in caplog.text
    assert "unknown (unknown option)" in caplog.text


def test_initialize_coerces_through_validators(resolved) -> None:
    options = initialize_options({"size": "12", "nested": {"q": 5}}, resolved)

    assert options["size"] == 12
    assert options["nested"] == {"p": 1, "q": 5}


def test_initialize_keeps_default_when_nested_value_is_not_a_mapping(resolved) -> None:
    options = initialize_options({"nested": 3}, resolved)

    assert options["nested"] == {"p": 1, "q": 2}


def test_revalidate_drops_unchanged_values(resolved) -> None:
    previous = initialize_options(None, resolved)

    result = revalidate_options(
        {"a": "x", "b": 2, "nested": {"p": 1, "q": 3}}, resolved.template, previous
    )

    assert result.validated == {"b": 2, "nested": {"q": 3}}
    assert result.changed_keys == ("b", "nested")
    assert result.something_changed
    assert result.rejected == ()


def test_revalidate_of_current_state_is_empty(resolved) -> None:
    previous = initialize_options({"b": 3}, resolved)

    result = revalidate_options(dict(previous), resolved.template, previous)

    assert result.validated == {}
    assert result.changed_keys == ()
    assert not result.something_changed


def test_revalidate_reports_rejected_paths(resolved) -> None:
    previous = initialize_options(None, resolved)

    result = revalidate_options(
        {"size": -1, "nested": {"p": "one", "q": 9}, "b": 5}, resolved.template, previous
    )

    assert result.validated == {"nested": {"q": 9}, "b": 5}
    assert result.rejected == ("size", "nested.p")


def test_revalidate_can_silence_warnings(resolved, caplog: pytest.LogCaptureFixture) -> None:
    previous = initialize_options(None, resolved)

    with caplog.at_level(logging.DEBUG, logger="lifecycle engine.options"):
        revalidate_options({"b": "bad"}, resolved.template, previous, report_invalid=False)

    assert not [record for record in caplog.records if record.levelno >= logging.WARNING]
    assert "Discarded 1 invalid option(s)." in caplog.text


def test_revalidate_isolates_validators_raising_unexpected_errors() -> None:
    def pick_mode(candidate, current):  # type: ignore[no-untyped-def]
        return candidate["mode"]

    resolved = resolve_options_template({"m": ("a", pick_mode), "b": (1, OptionType.NUMBER)})
    previous = initialize_options({"m": {}}, resolved, report_invalid=False)

    result = revalidate_options({"m": {}, "b": 2}, resolved.template, previous, report_invalid=False)

    assert previous == {"m": "a", "b": 1}
    assert result.validated == {"b": 2}
    assert result.rejected == ("m",)
