"""Field edits on parsed records with targeted re-validation."""

from __future__ import annotations

from dataclasses import replace
from typing import Any, Iterable, List, TypeVar

from ghgflow.core.errors import RecordUpdateError

from .validate import RULES_BY_RECORD, FieldRule, check_value

RecordT = TypeVar("RecordT")


def _rules_for(record: object) -> dict[str, FieldRule]:
    try:
        rules = RULES_BY_RECORD[type(record)]
    except KeyError as exc:
        raise RecordUpdateError(f"unsupported record type: {type(record).__name__}") from exc
    return {rule.name: rule for rule in rules}


def _merge_flags(current: Iterable[str], order: List[str], invalid: set[str], touched: set[str]) -> List[str]:
    kept = {name for name in current if name not in touched} | invalid
    return [name for name in order if name in kept]


def update_record(record: RecordT, **changes: Any) -> RecordT:
    """Return a copy of ``record`` with ``changes`` applied.

    Each changed field is checked with the same rules used at parse time: its
    error flag is set or cleared accordingly, and invalid numbers are stored as
    ``0.0``. Flags on fields that were not touched are left alone.

    Raises:
        RecordUpdateError: For unknown fields or attempts to change ``id`` or
            ``error_fields`` directly.
    """

    rules = _rules_for(record)
    unknown = sorted(set(changes) - set(rules))
    if unknown:
        raise RecordUpdateError(f"cannot update fields: {', '.join(unknown)}")

    values: dict[str, Any] = {}
    invalid: set[str] = set()
    for name, raw in changes.items():
        value, valid = check_value(rules[name], raw)
        values[name] = value
        if not valid:
            invalid.add(name)

    error_fields = _merge_flags(record.error_fields, list(rules), invalid, set(changes))  # type: ignore[attr-defined]
    return replace(record, **values, error_fields=error_fields)  # type: ignore[type-var]


__all__ = ["update_record"]
