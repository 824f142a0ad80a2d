import pytest

from src import constants
from src.enums import Condition
from src.table_reconciler import callbacks
from src.table_reconciler.desired.models import Table, TableParameters
from src.table_reconciler.errors import IncompleteParametersError
from src.table_reconciler.models import (
    AttributeDefinition,
    KeySchemaElement,
    ProvisionedThroughput,
    Tag,
)
from src.table_reconciler.plan.actions import UpdateThroughput
from src.table_reconciler.state.states import ProvisionedThroughputDescription, TableDescription

KEYS = (KeySchemaElement("pk", "HASH"),)
ATTRIBUTES = (AttributeDefinition("pk", "S"),)


def _table(**params):
    return Table(name="orders", external_name="prod-orders", for_provider=TableParameters(**params))


def test_read_request_uses_external_name():
    assert callbacks.prepare_read_request(_table()).table_name == "prod-orders"


def test_read_response_sets_condition_and_connection_details():
    observed = TableDescription(
        table_name="prod-orders",
        table_status="ACTIVE",
        table_arn="arn:table",
        latest_stream_arn="arn:stream",
    )
    observation = callbacks.interpret_read_response(_table(), observed)

    assert observation.observed is observed
    assert observation.condition is Condition.AVAILABLE
    assert observation.connection_details == {
        constants.CONNECTION_DETAIL_TABLE_NAME: "prod-orders",
        constants.CONNECTION_DETAIL_TABLE_ARN: "arn:table",
        constants.CONNECTION_DETAIL_LATEST_STREAM_ARN: "arn:stream",
        constants.CONNECTION_DETAIL_LATEST_STREAM_LABEL: "",
    }


def test_decide_and_prepare_update():
    observed = TableDescription(
        table_name="prod-orders",
        table_status="ACTIVE",
        provisioned_throughput=ProvisionedThroughputDescription(1, 1),
    )
    table = _table(provisioned_throughput=ProvisionedThroughput(2, 2))

    assert callbacks.decide_up_to_date(table, observed) is False
    request = callbacks.prepare_update_request(table, observed)
    assert request.table_name == "prod-orders"
    assert request.change == UpdateThroughput(2, 2)


def test_create_request_carries_full_desired_record():
    table = _table(
        key_schema=KEYS,
        attribute_definitions=ATTRIBUTES,
        billing_mode="PAY_PER_REQUEST",
        tags=(Tag("team", "data"),),
    )
    request = callbacks.prepare_create_request(table)

    assert request.table_name == "prod-orders"
    assert request.key_schema == KEYS
    assert request.attribute_definitions == ATTRIBUTES
    assert request.billing_mode == "PAY_PER_REQUEST"
    assert request.global_secondary_indexes == ()
    assert request.tags == (Tag("team", "data"),)


@pytest.mark.parametrize(
    "params", [dict(key_schema=KEYS), dict(attribute_definitions=ATTRIBUTES), dict()]
)
def test_create_request_requires_keys_and_attributes(params):
    with pytest.raises(IncompleteParametersError):
        callbacks.prepare_create_request(_table(**params))


def test_delete_request():
    assert callbacks.prepare_delete_request(_table()).table_name == "prod-orders"
