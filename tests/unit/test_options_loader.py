"""Tests for YAML backed option files."""

from __future__ import annotations

import pytest

from lifecycle_engine.config.loader import dump_options_file, load_options_file


def test_load_options_file_reads_nested_mapping(tmp_path) -> None:
    path = tmp_path / "options.yaml"
    path.write_text("b: 3\nnested:\n  p: 9\n", encoding="utf-8")

    assert load_options_file(path) == {"b": 3, "nested": {"p": 9}}


def test_empty_file_yields_empty_mapping(tmp_path) -> None:
    path = tmp_path / "empty.yaml"
    path.write_text("", encoding="utf-8")

    assert load_options_file(path) == {}


def test_top_level_must_be_a_mapping(tmp_path) -> None:
    path = tmp_path / "list.yaml"
    path.write_text("- a\n- b\n", encoding="utf-8")

    with pytest.raises(ValueError, match="mapping"):
        load_options_file(str(path))


def test_dump_then_load_preserves_key_order(tmp_path) -> None:
    options = {"z": 1, "a": {"q": 2, "p": 1}}

    path = dump_options_file(options, tmp_path / "out" / "options.yaml")

    assert path.read_text(encoding="utf-8").splitlines()[0] == "z: 1"
    assert list(load_options_file(path)) == ["z", "a"]
