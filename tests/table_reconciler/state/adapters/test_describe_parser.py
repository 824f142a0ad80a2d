from src.table_reconciler.models import (
    AttributeDefinition,
    KeySchemaElement,
    Projection,
    StreamSpecification,
)
from src.table_reconciler.state.adapters.describe_parser import parse_table_description


def _payload():
    return {
        "TableName": "orders",
        "TableStatus": "ACTIVE",
        "TableArn": "arn:aws:dynamodb:eu-west-1:123456789012:table/orders",
        "AttributeDefinitions": [
            {"AttributeName": "pk", "AttributeType": "S"},
            {"AttributeName": "sk", "AttributeType": "N"},
        ],
        "KeySchema": [
            {"AttributeName": "pk", "KeyType": "HASH"},
            {"AttributeName": "sk", "KeyType": "RANGE"},
        ],
        "ProvisionedThroughput": {
            "ReadCapacityUnits": 5,
            "WriteCapacityUnits": 3,
            "NumberOfDecreasesToday": 1,
        },
        "GlobalSecondaryIndexes": [
            {
                "IndexName": "by_sk",
                "KeySchema": [{"AttributeName": "sk", "KeyType": "HASH"}],
                "Projection": {"ProjectionType": "INCLUDE", "NonKeyAttributes": ["a", "b"]},
                "ProvisionedThroughput": {"ReadCapacityUnits": 1, "WriteCapacityUnits": 1},
                "IndexStatus": "ACTIVE",
            }
        ],
        "LocalSecondaryIndexes": [
            {
                "IndexName": "local",
                "KeySchema": [{"AttributeName": "pk", "KeyType": "HASH"}],
                "Projection": {"ProjectionType": "KEYS_ONLY"},
            }
        ],
        "StreamSpecification": {"StreamEnabled": True, "StreamViewType": "NEW_IMAGE"},
        "LatestStreamArn": "arn:stream",
        "LatestStreamLabel": "2024-01-01T00:00:00.000",
        "SSEDescription": {"Status": "ENABLED", "SSEType": "KMS", "KMSMasterKeyArn": "arn:key"},
        "BillingModeSummary": {"BillingMode": "PROVISIONED"},
        "ItemCount": 42,
    }


def test_parse_full_payload():
    observed = parse_table_description(_payload())

    assert observed.table_name == "orders"
    assert observed.table_status == "ACTIVE"
    assert observed.attribute_definitions == (
        AttributeDefinition("pk", "S"),
        AttributeDefinition("sk", "N"),
    )
    assert observed.key_schema == (KeySchemaElement("pk", "HASH"), KeySchemaElement("sk", "RANGE"))
    assert observed.provisioned_throughput.read_capacity_units == 5
    assert observed.provisioned_throughput.write_capacity_units == 3
    assert observed.provisioned_throughput.number_of_decreases_today == 1

    (gsi,) = observed.global_secondary_indexes
    assert gsi.index_name == "by_sk"
    assert gsi.projection == Projection("INCLUDE", ("a", "b"))
    assert gsi.provisioned_throughput.read_capacity_units == 1
    assert gsi.index_status == "ACTIVE"

    (lsi,) = observed.local_secondary_indexes
    assert lsi.projection == Projection("KEYS_ONLY", None)

    assert observed.stream_specification == StreamSpecification(True, "NEW_IMAGE")
    assert observed.latest_stream_arn == "arn:stream"
    assert observed.sse_description.kms_master_key_arn == "arn:key"
    assert observed.billing_mode == "PROVISIONED"
    assert observed.item_count == 42


def test_parse_minimal_payload_leaves_optional_parts_empty():
    observed = parse_table_description({"TableName": "orders"})

    assert observed.table_status is None
    assert observed.key_schema == ()
    assert observed.global_secondary_indexes == ()
    assert observed.provisioned_throughput is None
    assert observed.stream_specification is None
    assert observed.sse_description is None
    assert observed.billing_mode_summary is None
