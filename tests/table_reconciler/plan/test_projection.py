from src.table_reconciler.models import ProvisionedThroughput, SSESpecification
from src.table_reconciler.plan.projection import project_observed
from src.table_reconciler.state.states import (
    BillingModeSummary,
    GlobalSecondaryIndexDescription,
    ProvisionedThroughputDescription,
    SSEDescription,
    TableDescription,
)


def test_empty_snapshot_projects_to_all_unset():
    params = project_observed(TableDescription(table_name="t"))
    assert params.key_schema is None
    assert params.global_secondary_indexes is None
    assert params.provisioned_throughput is None
    assert params.sse_specification is None
    assert params.billing_mode is None


def test_zero_throughput_is_unset_and_on_demand_billing_kept():
    params = project_observed(
        TableDescription(
            table_name="t",
            provisioned_throughput=ProvisionedThroughputDescription(0, 0),
            billing_mode_summary=BillingModeSummary("PAY_PER_REQUEST"),
        )
    )
    assert params.provisioned_throughput is None
    assert params.billing_mode == "PAY_PER_REQUEST"


def test_missing_billing_summary_with_capacity_means_provisioned():
    params = project_observed(
        TableDescription(
            table_name="t", provisioned_throughput=ProvisionedThroughputDescription(5, 5)
        )
    )
    assert params.provisioned_throughput == ProvisionedThroughput(5, 5)
    assert params.billing_mode == "PROVISIONED"


def test_sse_description_becomes_specification():
    params = project_observed(
        TableDescription(
            table_name="t",
            sse_description=SSEDescription(status="ENABLED", sse_type="KMS", kms_master_key_arn="k"),
        )
    )
    assert params.sse_specification == SSESpecification(True, "KMS", "k")


def test_index_throughput_is_projected():
    params = project_observed(
        TableDescription(
            table_name="t",
            global_secondary_indexes=(
                GlobalSecondaryIndexDescription(
                    index_name="g",
                    provisioned_throughput=ProvisionedThroughputDescription(2, 3),
                ),
            ),
        )
    )
    (index,) = params.global_secondary_indexes
    assert index.provisioned_throughput == ProvisionedThroughput(2, 3)
