"""Ports for persisting changes to the desired table record."""

from __future__ import annotations

from typing import Protocol

from src.table_reconciler.desired.models import Table


class TableStore(Protocol):
    """Port for whatever stores desired table records."""

    def update(self, table: Table) -> None: ...
