"""
Adapter: DescribeTable response parser

Turns the `Table` mapping of a DescribeTable / CreateTable / UpdateTable response
into a `TableDescription`. Missing keys become None or empty tuples; nothing is
defaulted beyond that.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from src.table_reconciler.models import (
    AttributeDefinition,
    KeySchemaElement,
    Projection,
    StreamSpecification,
)
from src.table_reconciler.state.states import (
    BillingModeSummary,
    GlobalSecondaryIndexDescription,
    LocalSecondaryIndexDescription,
    ProvisionedThroughputDescription,
    SSEDescription,
    TableDescription,
)


def parse_table_description(payload: Mapping[str, Any]) -> TableDescription:
    """Parse the `Table` (or `TableDescription`) element of a response."""
    return TableDescription(
        table_name=payload["TableName"],
        table_status=payload.get("TableStatus"),
        table_arn=payload.get("TableArn"),
        table_id=payload.get("TableId"),
        attribute_definitions=tuple(
            AttributeDefinition(
                attribute_name=item.get("AttributeName"),
                attribute_type=item.get("AttributeType"),
            )
            for item in payload.get("AttributeDefinitions", ())
        ),
        key_schema=_parse_key_schema(payload.get("KeySchema")),
        global_secondary_indexes=tuple(
            _parse_global_index(item) for item in payload.get("GlobalSecondaryIndexes", ())
        ),
        local_secondary_indexes=tuple(
            _parse_local_index(item) for item in payload.get("LocalSecondaryIndexes", ())
        ),
        provisioned_throughput=_parse_throughput(payload.get("ProvisionedThroughput")),
        stream_specification=_parse_stream(payload.get("StreamSpecification")),
        latest_stream_arn=payload.get("LatestStreamArn"),
        latest_stream_label=payload.get("LatestStreamLabel"),
        sse_description=_parse_sse(payload.get("SSEDescription")),
        billing_mode_summary=_parse_billing(payload.get("BillingModeSummary")),
        item_count=payload.get("ItemCount"),
        table_size_bytes=payload.get("TableSizeBytes"),
        creation_date_time=payload.get("CreationDateTime"),
    )


# ---------- helpers ----------


def _parse_key_schema(items: Any) -> tuple[KeySchemaElement, ...]:
    return tuple(
        KeySchemaElement(attribute_name=item.get("AttributeName"), key_type=item.get("KeyType"))
        for item in items or ()
    )


def _parse_projection(item: Mapping[str, Any] | None) -> Projection | None:
    if item is None:
        return None
    non_key = item.get("NonKeyAttributes")
    return Projection(
        projection_type=item.get("ProjectionType"),
        non_key_attributes=tuple(non_key) if non_key is not None else None,
    )


def _parse_throughput(item: Mapping[str, Any] | None) -> ProvisionedThroughputDescription | None:
    if item is None:
        return None
    return ProvisionedThroughputDescription(
        read_capacity_units=item.get("ReadCapacityUnits", 0),
        write_capacity_units=item.get("WriteCapacityUnits", 0),
        number_of_decreases_today=item.get("NumberOfDecreasesToday", 0),
        last_increase_date_time=item.get("LastIncreaseDateTime"),
        last_decrease_date_time=item.get("LastDecreaseDateTime"),
    )


def _parse_global_index(item: Mapping[str, Any]) -> GlobalSecondaryIndexDescription:
    return GlobalSecondaryIndexDescription(
        index_name=item["IndexName"],
        key_schema=_parse_key_schema(item.get("KeySchema")),
        projection=_parse_projection(item.get("Projection")),
        provisioned_throughput=_parse_throughput(item.get("ProvisionedThroughput")),
        index_status=item.get("IndexStatus"),
        backfilling=item.get("Backfilling"),
        index_arn=item.get("IndexArn"),
        item_count=item.get("ItemCount"),
        index_size_bytes=item.get("IndexSizeBytes"),
    )


def _parse_local_index(item: Mapping[str, Any]) -> LocalSecondaryIndexDescription:
    return LocalSecondaryIndexDescription(
        index_name=item["IndexName"],
        key_schema=_parse_key_schema(item.get("KeySchema")),
        projection=_parse_projection(item.get("Projection")),
        index_arn=item.get("IndexArn"),
    )


def _parse_stream(item: Mapping[str, Any] | None) -> StreamSpecification | None:
    if item is None:
        return None
    return StreamSpecification(
        stream_enabled=item.get("StreamEnabled"),
        stream_view_type=item.get("StreamViewType"),
    )


def _parse_sse(item: Mapping[str, Any] | None) -> SSEDescription | None:
    if item is None:
        return None
    return SSEDescription(
        status=item.get("Status"),
        sse_type=item.get("SSEType"),
        kms_master_key_arn=item.get("KMSMasterKeyArn"),
    )


def _parse_billing(item: Mapping[str, Any] | None) -> BillingModeSummary | None:
    if item is None:
        return None
    return BillingModeSummary(
        billing_mode=item.get("BillingMode"),
        last_update_to_pay_per_request_date_time=item.get("LastUpdateToPayPerRequestDateTime"),
    )
