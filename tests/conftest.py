import pytest


class RecordingStore:
    """Stands in for the desired-record store; remembers what was persisted."""

    def __init__(self):
        self.updates = []

    def update(self, table):
        self.updates.append(
            (table.name, table.external_name, table.for_provider.tags, table.for_provider)
        )


@pytest.fixture
def store():
    return RecordingStore()
