"""
Patch computation: desired record + observed snapshot -> minimal delta.

Principles
----------
- The observed snapshot is first projected into the desired shape
  (see `plan/projection.py`), then compared field by field.
- No side effects; neither input is mutated.
- Unset desired values (None) are unmanaged and never produce a delta.
- Fields listed in `TableParameters.NON_COMPARABLE_FIELDS` are skipped.
- Nested records produce partial deltas: only the differing sub-fields are set.
- Global secondary indexes are keyed by name and emitted sorted by name:
    - desired only   → the full desired index
    - observed only  → an index carrying just its name (removal)
    - both, differ   → name + differing sub-fields
- A disabled stream and disabled encryption compare equal to "not configured",
  because DescribeTable omits both descriptions in that case. A record with
  every sub-field unset manages nothing.
- Table and index throughput are not compared while the table is on-demand and
  stays on-demand: DynamoDB reports zero units and rejects capacity updates.
  A table still switching to on-demand keeps its throughput delta, so capacity
  is settled before the billing mode changes.

Output
------
A `TableParameters` whose non-None fields are exactly the fields to change.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import fields, is_dataclass, replace
from typing import Any

from src.enums import BillingMode
from src.table_reconciler.desired.models import TableParameters
from src.table_reconciler.errors import PatchComputationError
from src.table_reconciler.models import (
    GlobalSecondaryIndex,
    Projection,
    SSESpecification,
    StreamSpecification,
)
from src.table_reconciler.plan.projection import project_observed
from src.table_reconciler.state.states import TableDescription

_GLOBAL_INDEXES_FIELD = "global_secondary_indexes"


def compute_patch(observed: TableDescription, desired: TableParameters) -> TableParameters:
    """Return the fields of `desired` that differ from `observed`."""
    _check_index_names(desired.global_secondary_indexes or (), side="desired")
    _check_index_names(observed.global_secondary_indexes, side="observed")

    if throughput_unmanaged(desired, observed):
        desired = _without_throughput(desired)

    current = project_observed(observed)
    patch = TableParameters()
    for name in _comparable_field_names():
        desired_value = getattr(desired, name)
        current_value = getattr(current, name)
        if name == _GLOBAL_INDEXES_FIELD:
            delta = _diff_global_indexes(desired_value, current_value)
        else:
            delta = _diff_value(desired_value, current_value)
        setattr(patch, name, delta)
    return patch


def is_empty_patch(patch: TableParameters) -> bool:
    """True when no comparable field of `patch` is populated."""
    return all(getattr(patch, name) is None for name in _comparable_field_names())


def populated_fields(patch: TableParameters) -> tuple[str, ...]:
    """Names of the comparable fields populated in `patch`, in declaration order."""
    return tuple(name for name in _comparable_field_names() if getattr(patch, name) is not None)


def throughput_unmanaged(desired: TableParameters, observed: TableDescription) -> bool:
    """True when the table is on-demand and the desired billing mode keeps it so."""
    if observed.billing_mode != BillingMode.PAY_PER_REQUEST:
        return False
    return desired.billing_mode in (None, BillingMode.PAY_PER_REQUEST)


# ---------- diff helpers ----------


def _comparable_field_names() -> tuple[str, ...]:
    return tuple(
        f.name
        for f in fields(TableParameters)
        if f.name not in TableParameters.NON_COMPARABLE_FIELDS
    )


def _diff_value(desired: Any, current: Any) -> Any:
    if desired is None:
        return None
    if is_dataclass(desired) and desired == type(desired)():
        return None
    if _normalize(desired) == _normalize(current):
        return None
    if is_dataclass(desired) and type(current) is type(desired):
        return _diff_record(desired, current)
    return desired


def _diff_record(desired: Any, current: Any) -> Any:
    """Partial copy of `desired` holding only sub-fields that differ; None if none do."""
    deltas: dict[str, Any] = {}
    for f in fields(desired):
        delta = _diff_value(getattr(desired, f.name), getattr(current, f.name))
        if delta is not None:
            deltas[f.name] = delta
    if not deltas:
        return None
    empty = type(desired)()
    return replace(empty, **deltas)


def _diff_global_indexes(
    desired: tuple[GlobalSecondaryIndex, ...] | None,
    current: tuple[GlobalSecondaryIndex, ...] | None,
) -> tuple[GlobalSecondaryIndex, ...] | None:
    if desired is None:
        return None

    desired_by_name = {index.index_name: index for index in desired}
    current_by_name = {index.index_name: index for index in current or ()}

    entries: list[GlobalSecondaryIndex] = []
    for name in sorted(desired_by_name.keys() | current_by_name.keys()):
        desired_index = desired_by_name.get(name)
        current_index = current_by_name.get(name)
        if desired_index is None:
            entries.append(GlobalSecondaryIndex(index_name=name))
        elif current_index is None:
            entries.append(desired_index)
        else:
            delta = _diff_value(desired_index, current_index)
            if delta is not None:
                entries.append(replace(delta, index_name=name))
    return tuple(entries) or None


def _without_throughput(params: TableParameters) -> TableParameters:
    indexes = params.global_secondary_indexes
    if indexes is not None:
        indexes = tuple(replace(index, provisioned_throughput=None) for index in indexes)
    return replace(params, provisioned_throughput=None, global_secondary_indexes=indexes)


def _normalize(value: Any) -> Any:
    """Canonical form used only for equality checks."""
    if isinstance(value, StreamSpecification) and value.stream_enabled is False:
        return None
    if isinstance(value, SSESpecification) and value == SSESpecification(enabled=False):
        return None
    if isinstance(value, Projection) and value.non_key_attributes is not None:
        return replace(value, non_key_attributes=tuple(sorted(value.non_key_attributes)))
    if isinstance(value, tuple):
        return tuple(_normalize(item) for item in value)
    if is_dataclass(value):
        return replace(value, **{f.name: _normalize(getattr(value, f.name)) for f in fields(value)})
    return value


def _check_index_names(indexes: Sequence[Any], *, side: str) -> None:
    seen: set[str] = set()
    for index in indexes:
        name = index.index_name
        if not name:
            raise PatchComputationError(f"A {side} global secondary index has no name")
        if name in seen:
            raise PatchComputationError(
                f"Duplicate {side} global secondary index name: {name!r}"
            )
        seen.add(name)
