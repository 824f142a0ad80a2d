from src.table_reconciler.desired.models import Table
from src.table_reconciler.initializers import (
    NameAsExternalName,
    default_initializers,
    run_initializers,
)
from src.table_reconciler.tagging import Tagger


class RecordingInitializer:
    def __init__(self, name, calls, result):
        self.name = name
        self.calls = calls
        self.result = result

    def initialize(self, table):
        self.calls.append(self.name)
        return self.result


def test_external_name_is_set_once(store):
    table = Table(name="orders")
    initializer = NameAsExternalName(store)

    assert initializer.initialize(table) is True
    assert table.external_name == "orders"
    assert initializer.initialize(table) is False
    assert len(store.updates) == 1


def test_existing_external_name_is_kept(store):
    table = Table(name="orders", external_name="prod-orders")
    assert NameAsExternalName(store).initialize(table) is False
    assert table.external_name == "prod-orders"
    assert store.updates == []


def test_default_initializers_run_external_name_then_tags(store):
    first, second = default_initializers(store)
    assert isinstance(first, NameAsExternalName)
    assert isinstance(second, Tagger)


def test_run_initializers_runs_all_in_order_and_reports_change():
    calls = []
    initializers = [
        RecordingInitializer("a", calls, False),
        RecordingInitializer("b", calls, True),
        RecordingInitializer("c", calls, False),
    ]
    assert run_initializers(Table(name="orders"), initializers) is True
    assert calls == ["a", "b", "c"]


def test_run_initializers_without_changes():
    assert run_initializers(Table(name="orders"), []) is False
