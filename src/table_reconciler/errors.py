"""
Error types raised by the reconciler.

Every `ReconcileError` says whether the scheduler may simply try the pass again
(`retryable`). Nothing in this package retries by itself.

Programming errors (for example asking for an update when nothing differs) are
not `ReconcileError`s: they derive from `RuntimeError` and should fail loudly.
"""

from __future__ import annotations


class ReconcileError(Exception):
    """Base class for failures surfaced to the caller of a pass."""

    retryable: bool = False

    def __init__(self, message: str, *, retryable: bool | None = None) -> None:
        super().__init__(message)
        if retryable is not None:
            self.retryable = retryable


class TableNotFoundError(ReconcileError):
    """The table does not exist; drives the create path."""

    def __init__(self, table_name: str) -> None:
        super().__init__(f"Table {table_name!r} does not exist")
        self.table_name = table_name


class PatchComputationError(ReconcileError):
    """The structural diff could not be produced from the given inputs."""


class IncompleteParametersError(ReconcileError):
    """The desired record lacks a value the request being built requires."""


class ReadFailure(ReconcileError):
    """Reading the table failed; no write was attempted."""

    retryable = True


class WriteFailure(ReconcileError):
    """A create, update or delete call failed."""

    retryable = True


class ReferenceResolutionError(ReconcileError):
    """A cross-resource reference could not be resolved (yet)."""

    retryable = True


class EmptyPatchError(RuntimeError):
    """An update was requested although there is nothing to change."""
