"""
Decide whether a table already matches its desired parameters.

A table that is creating or updating (or whose encryption is being updated)
rejects mutations, so it is treated as up to date until it settles. Otherwise
the table is up to date exactly when the patch is empty.
"""

from __future__ import annotations

from enum import StrEnum

from src.enums import SSEStatus, TableStatus
from src.table_reconciler.desired.models import TableParameters
from src.table_reconciler.plan.patch import compute_patch, is_empty_patch
from src.table_reconciler.state.states import TableDescription

TRANSIENT_TABLE_STATUSES: frozenset[str] = frozenset(
    {TableStatus.UPDATING.value, TableStatus.CREATING.value}
)


class UpToDateDecision(StrEnum):
    TRANSIENT = "transient"  # mid-transition; wait, do not update
    CONVERGED = "converged"
    NEEDS_UPDATE = "needs_update"


def is_transient(observed: TableDescription) -> bool:
    """True while the table, or its encryption, is mid-transition."""
    if observed.table_status in TRANSIENT_TABLE_STATUSES:
        return True
    sse = observed.sse_description
    return sse is not None and sse.status == SSEStatus.UPDATING


def evaluate_up_to_date(
    desired: TableParameters, observed: TableDescription
) -> UpToDateDecision:
    """Return which of the three outcomes applies; the patch is only computed for stable tables."""
    if is_transient(observed):
        return UpToDateDecision.TRANSIENT
    patch = compute_patch(observed, desired)
    if is_empty_patch(patch):
        return UpToDateDecision.CONVERGED
    return UpToDateDecision.NEEDS_UPDATE


def is_up_to_date(desired: TableParameters, observed: TableDescription) -> bool:
    """Boolean view of `evaluate_up_to_date`: only NEEDS_UPDATE is out of date."""
    return evaluate_up_to_date(desired, observed) is not UpToDateDecision.NEEDS_UPDATE
