"""
Request types: immutable, declarative operations targeting a single table.

Conventions
-----------
- Every request names its table through `table_name` (the external name).
- `TableChange` is the closed set of top-level changes UpdateTable accepts one
  at a time; an `UpdateTableRequest` carries at most one of them.
- `IndexAction` is the set of global secondary index operations; an update may
  carry any number of them, one per index.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TypeAlias

from src.table_reconciler.models import (
    AttributeDefinition,
    GlobalSecondaryIndex,
    KeySchemaElement,
    LocalSecondaryIndex,
    Projection,
    ProvisionedThroughput,
    SSESpecification,
    StreamSpecification,
    Tag,
)

# ---------- top-level changes (one per update) ----------


@dataclass(frozen=True)
class UpdateThroughput:
    """Set table read and write capacity (both are always sent)."""

    read_capacity_units: int
    write_capacity_units: int


@dataclass(frozen=True)
class UpdateStream:
    """Enable, disable or reconfigure the change stream."""

    stream_enabled: bool
    stream_view_type: str | None = None


@dataclass(frozen=True)
class UpdateEncryption:
    """Change server-side encryption; `kms_master_key_id` only when the key changes."""

    enabled: bool | None = None
    sse_type: str | None = None
    kms_master_key_id: str | None = None


@dataclass(frozen=True)
class UpdateBillingMode:
    """Switch billing mode; switching to PROVISIONED must carry throughput."""

    billing_mode: str
    provisioned_throughput: ProvisionedThroughput | None = None


TableChange: TypeAlias = UpdateThroughput | UpdateStream | UpdateEncryption | UpdateBillingMode


# ---------- global secondary index actions ----------


@dataclass(frozen=True)
class CreateGlobalSecondaryIndex:
    """Create an index: needs key schema and projection (and throughput when provisioned)."""

    index_name: str
    key_schema: tuple[KeySchemaElement, ...]
    projection: Projection
    provisioned_throughput: ProvisionedThroughput | None = None


@dataclass(frozen=True)
class UpdateGlobalSecondaryIndex:
    """Change the throughput of an existing index."""

    index_name: str
    provisioned_throughput: ProvisionedThroughput


@dataclass(frozen=True)
class DeleteGlobalSecondaryIndex:
    """Delete an index by name."""

    index_name: str


IndexAction: TypeAlias = (
    CreateGlobalSecondaryIndex | UpdateGlobalSecondaryIndex | DeleteGlobalSecondaryIndex
)


# ---------- requests ----------


@dataclass(frozen=True)
class UpdateTableRequest:
    """
    One UpdateTable call.

    - change: the single top-level change selected this pass (None => none).
    - index_actions: one action per global secondary index that differs.
    - attribute_definitions: sent only alongside index creation.
    """

    table_name: str
    change: TableChange | None = None
    index_actions: tuple[IndexAction, ...] = ()
    attribute_definitions: tuple[AttributeDefinition, ...] | None = None

    @property
    def is_empty(self) -> bool:
        return self.change is None and not self.index_actions


@dataclass(frozen=True)
class CreateTableRequest:
    """One CreateTable call built from the full desired record."""

    table_name: str
    attribute_definitions: tuple[AttributeDefinition, ...]
    key_schema: tuple[KeySchemaElement, ...]
    billing_mode: str | None = None
    provisioned_throughput: ProvisionedThroughput | None = None
    global_secondary_indexes: tuple[GlobalSecondaryIndex, ...] = ()
    local_secondary_indexes: tuple[LocalSecondaryIndex, ...] = ()
    stream_specification: StreamSpecification | None = None
    sse_specification: SSESpecification | None = None
    tags: tuple[Tag, ...] = ()


@dataclass(frozen=True)
class DeleteTableRequest:
    """One DeleteTable call."""

    table_name: str
