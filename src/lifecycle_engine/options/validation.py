"""Validation and merging of incoming options against a resolved template."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from ..errors import InvalidOptionValueError
from ..utils.compare import values_equal
from .merge import assign_deep, clone_value
from .template import OptionsTemplate, ResolvedOptions
from .types import apply_descriptor

LOGGER = logging.getLogger("lifecycle engine.options")

_Rejection = Tuple[str, str]


@dataclass(frozen=True, slots=True)
class ValidationResult:
    """Sanitized partial options plus the top-level keys whose value changed."""

    validated: Dict[str, Any] = field(default_factory=dict)
    changed_keys: Tuple[str, ...] = ()
    rejected: Tuple[str, ...] = ()

    @property
    def something_changed(self) -> bool:
        return bool(self.changed_keys)


def initialize_options(
    candidate: Optional[Mapping[str, Any]],
    resolved: ResolvedOptions,
    *,
    report_invalid: bool = True,
) -> Dict[str, Any]:
    """Build a complete options state from ``candidate`` merged over the defaults.

    Invalid or unknown keys fall back to their default. The returned tree is
    freshly allocated and has exactly the template's key set.
    """

    rejected: List[_Rejection] = []
    validated = _validate_tree(
        candidate or {},
        resolved.template,
        resolved.defaults,
        dedup=False,
        path=(),
        rejected=rejected,
    )
    _report(rejected, report_invalid)
    return assign_deep(clone_value(resolved.defaults), validated)


def revalidate_options(
    candidate: Mapping[str, Any],
    template: OptionsTemplate,
    previous: Mapping[str, Any],
    *,
    report_invalid: bool = True,
) -> ValidationResult:
    """Validate ``candidate`` and keep only values that differ from ``previous``."""

    rejected: List[_Rejection] = []
    validated = _validate_tree(
        candidate,
        template,
        previous,
        dedup=True,
        path=(),
        rejected=rejected,
    )
    _report(rejected, report_invalid)
    return ValidationResult(
        validated=validated,
        changed_keys=tuple(validated.keys()),
        rejected=tuple(path for path, _ in rejected),
    )


def _validate_tree(
    candidate: Mapping[str, Any],
    template: OptionsTemplate,
    current: Mapping[str, Any],
    *,
    dedup: bool,
    path: Tuple[str, ...],
    rejected: List[_Rejection],
) -> Dict[str, Any]:
    validated: Dict[str, Any] = {}
    for key, value in candidate.items():
        dotted = ".".join(path + (str(key),))
        if key not in template:
            rejected.append((dotted, "unknown option"))
            continue
        descriptor = template[key]
        current_value = current.get(key) if isinstance(current, Mapping) else None
        if isinstance(descriptor, Mapping):
            if not isinstance(value, Mapping):
                rejected.append((dotted, "expected a mapping of nested options"))
                continue
            nested = _validate_tree(
                value,
                descriptor,
                current_value if isinstance(current_value, Mapping) else {},
                dedup=dedup,
                path=path + (key,),
                rejected=rejected,
            )
            if nested:
                validated[key] = nested
            continue
        try:
            sanitized = apply_descriptor(descriptor, dotted, value, current_value)
        except InvalidOptionValueError as exc:
            rejected.append((dotted, exc.reason or "rejected by validator"))
            continue
        if dedup and key in current and values_equal(current_value, sanitized):
            continue
        validated[key] = sanitized
    return validated


def _report(rejected: List[_Rejection], enabled: bool) -> None:
    if not rejected:
        return
    if enabled:
        details = ", ".join(f"{path} ({reason})" for path, reason in rejected)
        LOGGER.warning("Discarding invalid options: %s", details)
    else:
        LOGGER.debug("Discarded %d invalid option(s).", len(rejected))


__all__ = ["ValidationResult", "initialize_options", "revalidate_options"]
