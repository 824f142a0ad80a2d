"""
Render request objects into DynamoDB API parameters.

One function per operation, each returning the keyword arguments for the
matching boto3 client method. Optional fields are omitted, never sent as None.
"""

from __future__ import annotations

from typing import Any

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
from src.table_reconciler.plan.actions import (
    CreateGlobalSecondaryIndex,
    CreateTableRequest,
    DeleteGlobalSecondaryIndex,
    DeleteTableRequest,
    IndexAction,
    TableChange,
    UpdateBillingMode,
    UpdateEncryption,
    UpdateGlobalSecondaryIndex,
    UpdateStream,
    UpdateTableRequest,
    UpdateThroughput,
)
from src.table_reconciler.state.ports import DescribeTableRequest


def render_describe_table(request: DescribeTableRequest) -> dict[str, Any]:
    return {"TableName": request.table_name}


def render_delete_table(request: DeleteTableRequest) -> dict[str, Any]:
    return {"TableName": request.table_name}


def render_update_table(request: UpdateTableRequest) -> dict[str, Any]:
    params: dict[str, Any] = {"TableName": request.table_name}
    if request.change is not None:
        params.update(_render_change(request.change))
    if request.index_actions:
        params["GlobalSecondaryIndexUpdates"] = [
            _render_index_action(action) for action in request.index_actions
        ]
    if request.attribute_definitions:
        params["AttributeDefinitions"] = [
            _render_attribute(attribute) for attribute in request.attribute_definitions
        ]
    return params


def render_create_table(request: CreateTableRequest) -> dict[str, Any]:
    params: dict[str, Any] = {
        "TableName": request.table_name,
        "AttributeDefinitions": [_render_attribute(a) for a in request.attribute_definitions],
        "KeySchema": _render_key_schema(request.key_schema),
    }
    if request.billing_mode is not None:
        params["BillingMode"] = request.billing_mode
    if request.provisioned_throughput is not None:
        params["ProvisionedThroughput"] = _render_throughput(request.provisioned_throughput)
    if request.global_secondary_indexes:
        params["GlobalSecondaryIndexes"] = [
            _render_global_index(index) for index in request.global_secondary_indexes
        ]
    if request.local_secondary_indexes:
        params["LocalSecondaryIndexes"] = [
            _render_local_index(index) for index in request.local_secondary_indexes
        ]
    if request.stream_specification is not None:
        params["StreamSpecification"] = _render_stream(request.stream_specification)
    if request.sse_specification is not None:
        params["SSESpecification"] = _render_sse(request.sse_specification)
    if request.tags:
        params["Tags"] = [_render_tag(tag) for tag in request.tags]
    return params


# ---------- changes ----------


def _render_change(change: TableChange) -> dict[str, Any]:
    if isinstance(change, UpdateThroughput):
        return {
            "ProvisionedThroughput": {
                "ReadCapacityUnits": change.read_capacity_units,
                "WriteCapacityUnits": change.write_capacity_units,
            }
        }
    if isinstance(change, UpdateStream):
        return {
            "StreamSpecification": _render_stream(
                StreamSpecification(change.stream_enabled, change.stream_view_type)
            )
        }
    if isinstance(change, UpdateEncryption):
        return {
            "SSESpecification": _render_sse(
                SSESpecification(change.enabled, change.sse_type, change.kms_master_key_id)
            )
        }
    if isinstance(change, UpdateBillingMode):
        params: dict[str, Any] = {"BillingMode": change.billing_mode}
        if change.provisioned_throughput is not None:
            params["ProvisionedThroughput"] = _render_throughput(change.provisioned_throughput)
        return params
    raise TypeError(f"Unsupported table change: {type(change).__name__}")


def _render_index_action(action: IndexAction) -> dict[str, Any]:
    if isinstance(action, CreateGlobalSecondaryIndex):
        create: dict[str, Any] = {
            "IndexName": action.index_name,
            "KeySchema": _render_key_schema(action.key_schema),
            "Projection": _render_projection(action.projection),
        }
        if action.provisioned_throughput is not None:
            create["ProvisionedThroughput"] = _render_throughput(action.provisioned_throughput)
        return {"Create": create}
    if isinstance(action, UpdateGlobalSecondaryIndex):
        return {
            "Update": {
                "IndexName": action.index_name,
                "ProvisionedThroughput": _render_throughput(action.provisioned_throughput),
            }
        }
    if isinstance(action, DeleteGlobalSecondaryIndex):
        return {"Delete": {"IndexName": action.index_name}}
    raise TypeError(f"Unsupported index action: {type(action).__name__}")


# ---------- value types ----------


def _render_attribute(attribute: AttributeDefinition) -> dict[str, Any]:
    return {"AttributeName": attribute.attribute_name, "AttributeType": attribute.attribute_type}


def _render_key_schema(key_schema: tuple[KeySchemaElement, ...]) -> list[dict[str, Any]]:
    return [{"AttributeName": k.attribute_name, "KeyType": k.key_type} for k in key_schema]


def _render_projection(projection: Projection) -> dict[str, Any]:
    params: dict[str, Any] = {}
    if projection.projection_type is not None:
        params["ProjectionType"] = projection.projection_type
    if projection.non_key_attributes:
        params["NonKeyAttributes"] = list(projection.non_key_attributes)
    return params


def _render_throughput(throughput: ProvisionedThroughput) -> dict[str, Any]:
    return {
        "ReadCapacityUnits": throughput.read_capacity_units,
        "WriteCapacityUnits": throughput.write_capacity_units,
    }


def _render_stream(stream: StreamSpecification) -> dict[str, Any]:
    params: dict[str, Any] = {"StreamEnabled": bool(stream.stream_enabled)}
    if stream.stream_enabled and stream.stream_view_type is not None:
        params["StreamViewType"] = stream.stream_view_type
    return params


def _render_sse(sse: SSESpecification) -> dict[str, Any]:
    params: dict[str, Any] = {}
    if sse.enabled is not None:
        params["Enabled"] = sse.enabled
    if sse.sse_type is not None:
        params["SSEType"] = sse.sse_type
    if sse.kms_master_key_id is not None:
        params["KMSMasterKeyId"] = sse.kms_master_key_id
    return params


def _render_global_index(index: GlobalSecondaryIndex) -> dict[str, Any]:
    params: dict[str, Any] = {
        "IndexName": index.index_name,
        "KeySchema": _render_key_schema(index.key_schema or ()),
        "Projection": _render_projection(index.projection or Projection()),
    }
    if index.provisioned_throughput is not None:
        params["ProvisionedThroughput"] = _render_throughput(index.provisioned_throughput)
    return params


def _render_local_index(index: LocalSecondaryIndex) -> dict[str, Any]:
    return {
        "IndexName": index.index_name,
        "KeySchema": _render_key_schema(index.key_schema or ()),
        "Projection": _render_projection(index.projection or Projection()),
    }


def _render_tag(tag: Tag) -> dict[str, str]:
    return {"Key": tag.key, "Value": tag.value}
