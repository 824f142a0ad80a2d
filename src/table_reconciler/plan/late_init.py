"""
Late initialization: fill unset desired fields from the observed table.

Rules
-----
- A field is copied only when the desired value is None and the observed value is
  non-empty. A set desired value is never overwritten, even when it differs.
- Nested records (throughput, stream, encryption, projection) are filled field by
  field.
- Index tuples are matched by `index_name`: matching indexes are filled
  recursively, observed indexes the owner did not list are *not* added to a list
  the owner has set.
- Running twice with the same inputs changes nothing the second time.
"""

from __future__ import annotations

from dataclasses import fields, is_dataclass, replace
from typing import Any

from src.table_reconciler.desired.models import TableParameters
from src.table_reconciler.models import GlobalSecondaryIndex, LocalSecondaryIndex
from src.table_reconciler.plan.projection import project_observed
from src.table_reconciler.state.states import TableDescription

_INDEX_TYPES = (GlobalSecondaryIndex, LocalSecondaryIndex)


def late_initialize(params: TableParameters, observed: TableDescription | None) -> bool:
    """
    Fill unset fields of `params` in place from `observed`.

    Returns True when at least one field changed, so callers know whether the
    desired record needs persisting.
    """
    if observed is None:
        return False

    source = project_observed(observed)
    changed = False
    for f in fields(TableParameters):
        current = getattr(params, f.name)
        merged = _fill(current, getattr(source, f.name))
        if merged is not current:
            setattr(params, f.name, merged)
            changed = True
    return changed


# ---------- helpers ----------


def _fill(current: Any, incoming: Any) -> Any:
    """Return `current` with gaps filled from `incoming`; returns `current` itself if unchanged."""
    if incoming is None or incoming == ():
        return current
    if current is None:
        return incoming
    if is_dataclass(current) and type(current) is type(incoming):
        return _fill_record(current, incoming)
    if _is_index_tuple(current):
        return _fill_indexes(current, incoming)
    return current


def _fill_record(current: Any, incoming: Any) -> Any:
    updates: dict[str, Any] = {}
    for f in fields(current):
        value = getattr(current, f.name)
        merged = _fill(value, getattr(incoming, f.name))
        if merged is not value:
            updates[f.name] = merged
    return replace(current, **updates) if updates else current


def _fill_indexes(current: tuple, incoming: tuple) -> tuple:
    incoming_by_name = {index.index_name: index for index in incoming}
    filled = tuple(
        _fill(index, incoming_by_name[index.index_name])
        if index.index_name in incoming_by_name
        else index
        for index in current
    )
    if all(new is old for new, old in zip(filled, current)):
        return current
    return filled


def _is_index_tuple(value: Any) -> bool:
    return (
        isinstance(value, tuple)
        and len(value) > 0
        and all(isinstance(item, _INDEX_TYPES) for item in value)
    )
