"""Tests translating update hints into tracker requests."""

from __future__ import annotations

from lifecycle_engine.lifecycle.hints import ALL_KEYS, UpdateHints

KEYS = ("x", "y")


def test_forced_hints_recompute_everything() -> None:
    hints = UpdateHints(force=True, changed_options=("a",), changed_cache=("x",))

    assert hints.cache_request(KEYS) == (None, True)
    assert hints.options_request() == (None, True)


def test_explicit_non_forced_update_refreshes_all_cache_keys() -> None:
    hints = UpdateHints(force=False)

    assert hints.cache_request(KEYS) == (KEYS, False)
    assert hints.options_request() == (None, False)


def test_changed_cache_variants() -> None:
    assert UpdateHints(changed_cache=ALL_KEYS).cache_request(KEYS) == (KEYS, False)
    assert UpdateHints(changed_cache=("y",)).cache_request(KEYS) == (("y",), False)
    assert UpdateHints(changed_cache=()).cache_request(KEYS) == ((), False)
    assert UpdateHints().cache_request(KEYS) == (None, False)


def test_changed_options_pass_through() -> None:
    hints = UpdateHints(changed_options=("a", "b"))

    assert hints.options_request() == (("a", "b"), False)
    assert hints.cache_request(KEYS) == (None, False)
