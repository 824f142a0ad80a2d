"""
Pass callbacks exposed to whatever schedules reconcile passes.

Each callback is pure given its inputs; all I/O is done by the caller
(see `orchestrator.py` for the default wiring).
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from src import constants
from src.enums import Condition
from src.table_reconciler.desired.models import Table
from src.table_reconciler.errors import IncompleteParametersError
from src.table_reconciler.plan import selector
from src.table_reconciler.plan.actions import (
    CreateTableRequest,
    DeleteTableRequest,
    UpdateTableRequest,
)
from src.table_reconciler.plan.up_to_date import is_up_to_date
from src.table_reconciler.state.ports import DescribeTableRequest
from src.table_reconciler.state.states import TableDescription
from src.table_reconciler.state.status import interpret_status


@dataclass(frozen=True)
class Observation:
    """What a successful read tells the caller."""

    observed: TableDescription
    condition: Condition
    connection_details: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))


def prepare_read_request(table: Table) -> DescribeTableRequest:
    return DescribeTableRequest(table_name=table.table_name)


def interpret_read_response(table: Table, observed: TableDescription) -> Observation:
    """Condition plus the identifiers downstream consumers need."""
    details = {
        constants.CONNECTION_DETAIL_TABLE_NAME: table.table_name,
        constants.CONNECTION_DETAIL_TABLE_ARN: observed.table_arn or "",
        constants.CONNECTION_DETAIL_LATEST_STREAM_ARN: observed.latest_stream_arn or "",
        constants.CONNECTION_DETAIL_LATEST_STREAM_LABEL: observed.latest_stream_label or "",
    }
    return Observation(
        observed=observed,
        condition=interpret_status(observed.table_status),
        connection_details=MappingProxyType(details),
    )


def decide_up_to_date(table: Table, observed: TableDescription) -> bool:
    return is_up_to_date(table.for_provider, observed)


def prepare_update_request(table: Table, observed: TableDescription) -> UpdateTableRequest:
    """`observed` must come from a fresh read made for this update."""
    return selector.prepare_update_request(table.table_name, table.for_provider, observed)


def prepare_create_request(table: Table) -> CreateTableRequest:
    """Full CreateTable request; key schema and attribute definitions are mandatory."""
    params = table.for_provider
    if not params.key_schema or not params.attribute_definitions:
        raise IncompleteParametersError(
            f"Table {table.name!r} needs key_schema and attribute_definitions to be created"
        )
    return CreateTableRequest(
        table_name=table.table_name,
        attribute_definitions=params.attribute_definitions,
        key_schema=params.key_schema,
        billing_mode=params.billing_mode,
        provisioned_throughput=params.provisioned_throughput,
        global_secondary_indexes=params.global_secondary_indexes or (),
        local_secondary_indexes=params.local_secondary_indexes or (),
        stream_specification=params.stream_specification,
        sse_specification=params.sse_specification,
        tags=params.tags or (),
    )


def prepare_delete_request(table: Table) -> DeleteTableRequest:
    return DeleteTableRequest(table_name=table.table_name)
