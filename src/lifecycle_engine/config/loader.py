"""Load initial options for a lifecycle from YAML files."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Union

import yaml


def load_options_file(path: Union[str, Path]) -> Dict[str, Any]:
    """Return the options mapping stored in ``path``.

    An empty document yields an empty mapping. Anything other than a mapping at
    the top level is rejected, since options are always keyed.
    """

    file_path = Path(path)
    with file_path.open("r", encoding="utf-8") as handle:
        payload = yaml.safe_load(handle)
    if payload is None:
        return {}
    if not isinstance(payload, dict):
        raise ValueError(
            f"Options file {file_path} must contain a mapping at the top level, "
            f"found {type(payload).__name__}."
        )
    return payload


def dump_options_file(options: Dict[str, Any], path: Union[str, Path]) -> Path:
    """Write ``options`` to ``path`` in block style and return the path."""

    file_path = Path(path)
    file_path.parent.mkdir(parents=True, exist_ok=True)
    with file_path.open("w", encoding="utf-8") as handle:
        yaml.safe_dump(options, handle, default_flow_style=False, sort_keys=False)
    return file_path


__all__ = ["dump_options_file", "load_options_file"]
