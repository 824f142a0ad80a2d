"""Ports and request types for reading observed table state."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from src.table_reconciler.state.states import TableDescription


@dataclass(frozen=True, slots=True)
class DescribeTableRequest:
    """Read the current state of one table."""

    table_name: str


class TableReader(Protocol):
    """
    Port for implementations that can read table state.

    `describe` returns a fresh snapshot, raises `TableNotFoundError` when the
    table does not exist and `ReadFailure` for anything else.
    """

    def describe(self, request: DescribeTableRequest) -> TableDescription: ...
