"""
Execution ports and result types.

- TableWriter: protocol for anything that can create, update or delete a table
- TableClient: reader + writer in one (what the orchestrator needs)
- ExecutionPolicy: dry-run toggle
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from src.table_reconciler.plan.actions import (
    CreateTableRequest,
    DeleteTableRequest,
    UpdateTableRequest,
)
from src.table_reconciler.state.ports import TableReader
from src.table_reconciler.state.states import TableDescription


@dataclass(frozen=True)
class ExecutionPolicy:
    """Controls whether writes are sent."""

    dry_run: bool = False


class TableWriter(Protocol):
    """
    Port for implementations that can change tables.

    Failures are raised as `WriteFailure`; deleting a missing table raises
    `TableNotFoundError`.
    """

    def create(self, request: CreateTableRequest) -> TableDescription: ...

    def update(self, request: UpdateTableRequest) -> TableDescription: ...

    def delete(self, request: DeleteTableRequest) -> None: ...


class TableClient(TableReader, TableWriter, Protocol):
    """Read and write access to tables."""
