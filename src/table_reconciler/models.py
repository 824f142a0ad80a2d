"""
Value types shared by the desired record, the observed snapshot and the requests.

All types are frozen and use tuples for nested sequences, so a value can be handed
from one stage to the next without being copied. `None` always means "unset";
an empty tuple or a zero is a real value.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class KeySchemaElement:
    """One key attribute and its role (HASH or RANGE)."""

    attribute_name: str | None = None
    key_type: str | None = None


@dataclass(frozen=True, slots=True)
class AttributeDefinition:
    """Name and scalar type of a key attribute."""

    attribute_name: str | None = None
    attribute_type: str | None = None


@dataclass(frozen=True, slots=True)
class Projection:
    """Attributes copied from the table into an index."""

    projection_type: str | None = None
    non_key_attributes: tuple[str, ...] | None = None


@dataclass(frozen=True, slots=True)
class ProvisionedThroughput:
    """Read and write capacity units."""

    read_capacity_units: int | None = None
    write_capacity_units: int | None = None


@dataclass(frozen=True, slots=True)
class StreamSpecification:
    """Change stream settings."""

    stream_enabled: bool | None = None
    stream_view_type: str | None = None


@dataclass(frozen=True, slots=True)
class SSESpecification:
    """Server-side encryption settings."""

    enabled: bool | None = None
    sse_type: str | None = None
    kms_master_key_id: str | None = None


@dataclass(frozen=True, slots=True)
class GlobalSecondaryIndex:
    """Global secondary index; identity is `index_name`."""

    index_name: str | None = None
    key_schema: tuple[KeySchemaElement, ...] | None = None
    projection: Projection | None = None
    provisioned_throughput: ProvisionedThroughput | None = None


@dataclass(frozen=True, slots=True)
class LocalSecondaryIndex:
    """Local secondary index; fixed once the table exists."""

    index_name: str | None = None
    key_schema: tuple[KeySchemaElement, ...] | None = None
    projection: Projection | None = None


@dataclass(frozen=True, slots=True)
class Tag:
    """A single key/value tag."""

    key: str
    value: str
