"""
Project an observed snapshot into the shape of the desired record.

The projection is "what the desired record would look like if the owner had
specified nothing and every field had been late-initialized". Both the late
initializer (fill source) and the patch computer (diff base) use it, so the two
can never disagree about how an observed field maps onto a desired one.
"""

from __future__ import annotations

from src.enums import BillingMode, SSEStatus
from src.table_reconciler.desired.models import TableParameters
from src.table_reconciler.models import (
    GlobalSecondaryIndex,
    LocalSecondaryIndex,
    ProvisionedThroughput,
    SSESpecification,
)
from src.table_reconciler.state.states import (
    GlobalSecondaryIndexDescription,
    LocalSecondaryIndexDescription,
    ProvisionedThroughputDescription,
    SSEDescription,
    TableDescription,
)


def project_observed(observed: TableDescription) -> TableParameters:
    """Build a TableParameters from an observed snapshot (empty values stay None)."""
    provisioned_throughput = _project_throughput(observed.provisioned_throughput)
    return TableParameters(
        attribute_definitions=observed.attribute_definitions or None,
        key_schema=observed.key_schema or None,
        global_secondary_indexes=tuple(
            _project_global_index(index) for index in observed.global_secondary_indexes
        )
        or None,
        local_secondary_indexes=tuple(
            _project_local_index(index) for index in observed.local_secondary_indexes
        )
        or None,
        provisioned_throughput=provisioned_throughput,
        stream_specification=observed.stream_specification,
        sse_specification=_project_sse(observed.sse_description),
        billing_mode=_project_billing_mode(observed, provisioned_throughput),
    )


# ---------- helpers ----------


def _project_throughput(
    description: ProvisionedThroughputDescription | None,
) -> ProvisionedThroughput | None:
    """Zero units (on-demand tables and indexes) count as no throughput."""
    if description is None:
        return None
    if description.read_capacity_units == 0 and description.write_capacity_units == 0:
        return None
    return ProvisionedThroughput(
        read_capacity_units=description.read_capacity_units,
        write_capacity_units=description.write_capacity_units,
    )


def _project_global_index(index: GlobalSecondaryIndexDescription) -> GlobalSecondaryIndex:
    return GlobalSecondaryIndex(
        index_name=index.index_name,
        key_schema=index.key_schema or None,
        projection=index.projection,
        provisioned_throughput=_project_throughput(index.provisioned_throughput),
    )


def _project_local_index(index: LocalSecondaryIndexDescription) -> LocalSecondaryIndex:
    return LocalSecondaryIndex(
        index_name=index.index_name,
        key_schema=index.key_schema or None,
        projection=index.projection,
    )


def _project_sse(description: SSEDescription | None) -> SSESpecification | None:
    if description is None:
        return None
    enabled = description.status == SSEStatus.ENABLED if description.status else None
    specification = SSESpecification(
        enabled=enabled,
        sse_type=description.sse_type,
        kms_master_key_id=description.kms_master_key_arn,
    )
    return None if specification == SSESpecification() else specification


def _project_billing_mode(
    observed: TableDescription, provisioned_throughput: ProvisionedThroughput | None
) -> str | None:
    """
    DescribeTable omits the billing summary for tables that were always provisioned,
    so non-zero throughput without a summary means PROVISIONED.
    """
    if observed.billing_mode is not None:
        return observed.billing_mode
    if provisioned_throughput is not None:
        return BillingMode.PROVISIONED.value
    return None
