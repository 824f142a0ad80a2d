from dataclasses import FrozenInstanceError

import pytest

from src.table_reconciler.plan.actions import (
    DeleteGlobalSecondaryIndex,
    UpdateTableRequest,
    UpdateThroughput,
)


def test_update_request_emptiness():
    assert UpdateTableRequest(table_name="t").is_empty
    assert not UpdateTableRequest(table_name="t", change=UpdateThroughput(1, 1)).is_empty
    assert not UpdateTableRequest(
        table_name="t", index_actions=(DeleteGlobalSecondaryIndex("g"),)
    ).is_empty


def test_requests_are_frozen():
    request = UpdateTableRequest(table_name="t")
    with pytest.raises(FrozenInstanceError):
        request.table_name = "other"  # type: ignore[misc]
