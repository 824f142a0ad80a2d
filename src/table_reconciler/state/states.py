"""
Observed table state dataclasses.

These types capture what DescribeTable reports *right now*:
- Table identity and lifecycle status
- Key schema, attribute definitions and secondary indexes
- Throughput, stream, encryption and billing descriptions

Notes:
- Dataclasses are frozen and use tuples for nested data.
- A snapshot is built fresh on every pass and never mutated; the parser in
  `state/adapters/describe_parser.py` is the only construction site outside tests.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from src.table_reconciler.models import (
    AttributeDefinition,
    KeySchemaElement,
    Projection,
    StreamSpecification,
)


@dataclass(frozen=True, slots=True)
class ProvisionedThroughputDescription:
    """Observed capacity; zero units are reported for on-demand tables."""

    read_capacity_units: int = 0
    write_capacity_units: int = 0
    number_of_decreases_today: int = 0
    last_increase_date_time: datetime | None = None
    last_decrease_date_time: datetime | None = None


@dataclass(frozen=True, slots=True)
class SSEDescription:
    """Observed server-side encryption state."""

    status: str | None = None
    sse_type: str | None = None
    kms_master_key_arn: str | None = None


@dataclass(frozen=True, slots=True)
class BillingModeSummary:
    """Observed billing mode."""

    billing_mode: str | None = None
    last_update_to_pay_per_request_date_time: datetime | None = None


@dataclass(frozen=True, slots=True)
class GlobalSecondaryIndexDescription:
    """Observed global secondary index."""

    index_name: str
    key_schema: tuple[KeySchemaElement, ...] = ()
    projection: Projection | None = None
    provisioned_throughput: ProvisionedThroughputDescription | None = None
    index_status: str | None = None
    backfilling: bool | None = None
    index_arn: str | None = None
    item_count: int | None = None
    index_size_bytes: int | None = None


@dataclass(frozen=True, slots=True)
class LocalSecondaryIndexDescription:
    """Observed local secondary index."""

    index_name: str
    key_schema: tuple[KeySchemaElement, ...] = ()
    projection: Projection | None = None
    index_arn: str | None = None


@dataclass(frozen=True, slots=True)
class TableDescription:
    """
    Point-in-time snapshot of one table.

    Fields
    ------
    table_name : str
        Name used in API calls (the external name).
    table_status : str | None
        Lifecycle phase; see `src.enums.TableStatus`.
    stream_specification : StreamSpecification | None
        Absent when the table has no stream.
    sse_description : SSEDescription | None
        Absent when the table uses the default AWS owned key.
    """

    table_name: str
    table_status: str | None = None
    table_arn: str | None = None
    table_id: str | None = None
    attribute_definitions: tuple[AttributeDefinition, ...] = ()
    key_schema: tuple[KeySchemaElement, ...] = ()
    global_secondary_indexes: tuple[GlobalSecondaryIndexDescription, ...] = ()
    local_secondary_indexes: tuple[LocalSecondaryIndexDescription, ...] = ()
    provisioned_throughput: ProvisionedThroughputDescription | None = None
    stream_specification: StreamSpecification | None = None
    latest_stream_arn: str | None = None
    latest_stream_label: str | None = None
    sse_description: SSEDescription | None = None
    billing_mode_summary: BillingModeSummary | None = None
    item_count: int | None = None
    table_size_bytes: int | None = None
    creation_date_time: datetime | None = None

    @property
    def billing_mode(self) -> str | None:
        """Observed billing mode, or None when DescribeTable omitted it."""
        return self.billing_mode_summary.billing_mode if self.billing_mode_summary else None

