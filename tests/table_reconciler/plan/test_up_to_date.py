import pytest

from src.table_reconciler.desired.models import TableParameters
from src.table_reconciler.models import ProvisionedThroughput, StreamSpecification
from src.table_reconciler.plan.patch import compute_patch, is_empty_patch
from src.table_reconciler.plan.up_to_date import (
    UpToDateDecision,
    evaluate_up_to_date,
    is_transient,
    is_up_to_date,
)
from src.table_reconciler.state.states import (
    ProvisionedThroughputDescription,
    SSEDescription,
    TableDescription,
)


def _observed(status="ACTIVE", **overrides):
    return TableDescription(
        table_name="orders",
        table_status=status,
        provisioned_throughput=ProvisionedThroughputDescription(5, 5),
        **overrides,
    )


DIFFERENT = TableParameters(provisioned_throughput=ProvisionedThroughput(10, 10))
SAME = TableParameters(provisioned_throughput=ProvisionedThroughput(5, 5))


@pytest.mark.parametrize("status", ["UPDATING", "CREATING"])
def test_transitioning_table_counts_as_up_to_date(status):
    observed = _observed(status)
    assert is_transient(observed)
    assert evaluate_up_to_date(DIFFERENT, observed) is UpToDateDecision.TRANSIENT
    assert is_up_to_date(DIFFERENT, observed) is True


def test_encryption_update_in_progress_counts_as_up_to_date():
    observed = _observed(sse_description=SSEDescription(status="UPDATING", sse_type="KMS"))
    assert evaluate_up_to_date(DIFFERENT, observed) is UpToDateDecision.TRANSIENT


def test_active_table_with_differences_needs_update():
    assert evaluate_up_to_date(DIFFERENT, _observed()) is UpToDateDecision.NEEDS_UPDATE
    assert is_up_to_date(DIFFERENT, _observed()) is False


def test_active_matching_table_is_converged():
    assert evaluate_up_to_date(SAME, _observed()) is UpToDateDecision.CONVERGED


@pytest.mark.parametrize(
    "desired",
    [
        SAME,
        DIFFERENT,
        TableParameters(),
        TableParameters(stream_specification=StreamSpecification(True, "KEYS_ONLY")),
        TableParameters(billing_mode="PAY_PER_REQUEST"),
    ],
)
def test_stable_table_is_up_to_date_exactly_when_patch_is_empty(desired):
    observed = _observed()
    assert is_up_to_date(desired, observed) == is_empty_patch(compute_patch(observed, desired))
