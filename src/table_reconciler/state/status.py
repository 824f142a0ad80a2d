"""Map an observed table status onto the condition set on the managed table."""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType

from src.enums import Condition, TableStatus

_CONDITION_BY_STATUS: Mapping[str, Condition] = MappingProxyType(
    {
        TableStatus.CREATING.value: Condition.CREATING,
        TableStatus.DELETING.value: Condition.DELETING,
        TableStatus.ACTIVE.value: Condition.AVAILABLE,
        TableStatus.ARCHIVED.value: Condition.UNAVAILABLE,
        TableStatus.INACCESSIBLE_ENCRYPTION_CREDENTIALS.value: Condition.UNAVAILABLE,
        TableStatus.ARCHIVING.value: Condition.UNAVAILABLE,
    }
)


def interpret_status(status: str | None) -> Condition:
    """
    Return the condition for `status`.

    UPDATING, unknown statuses and a missing status all map to UNKNOWN, which
    callers treat as "leave the current condition alone".
    """
    if status is None:
        return Condition.UNKNOWN
    return _CONDITION_BY_STATUS.get(status, Condition.UNKNOWN)
