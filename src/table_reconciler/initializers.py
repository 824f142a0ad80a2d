"""
Initializers run once before a table is reconciled for the first time.

Each initializer may adjust the desired record and persist it through the store.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from src.logger import LOGGER
from src.table_reconciler.desired.models import Table
from src.table_reconciler.desired.ports import TableStore
from src.table_reconciler.tagging import Tagger


class Initializer(Protocol):
    def initialize(self, table: Table) -> bool: ...


class NameAsExternalName:
    """Use the resource name as the table name when no external name is set."""

    def __init__(self, store: TableStore) -> None:
        self._store = store

    def initialize(self, table: Table) -> bool:
        if table.external_name:
            return False
        table.external_name = table.name
        LOGGER.info("Setting external name of table %s", table.name)
        self._store.update(table)
        return True


def default_initializers(store: TableStore) -> tuple[Initializer, ...]:
    """External name first, then tags."""
    return (NameAsExternalName(store), Tagger(store))


def run_initializers(table: Table, initializers: Sequence[Initializer]) -> bool:
    """Run `initializers` in order; True when any of them changed the table."""
    changed = False
    for initializer in initializers:
        changed = initializer.initialize(table) or changed
    return changed
