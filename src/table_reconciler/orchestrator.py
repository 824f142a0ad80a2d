"""
End-to-end orchestration of one reconcile pass for one table.

Flow (one pass):
  1) Resolve references into concrete parameter values (optional).
  2) Describe the table; if it does not exist, create it and stop.
  3) Interpret the status into a condition; publish connection details.
  4) Late-initialize unset desired fields; persist when anything changed.
  5) Decide whether the table is up to date (transient phases count as up to date).
  6) Otherwise describe again, select one change and send a single UpdateTable.

Design goals:
- No boto3 here: reads and writes go through the injected `TableClient`.
- No retries: every failure is raised to the caller, who schedules the next pass.
- No state between passes: the update is planned from a fresh read.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from enum import StrEnum
from types import MappingProxyType

from src.enums import Condition
from src.logger import table_logger
from src.table_reconciler import callbacks
from src.table_reconciler.callbacks import Observation
from src.table_reconciler.desired.models import Table
from src.table_reconciler.desired.ports import TableStore
from src.table_reconciler.desired.references import ReferenceResolver, resolve_references
from src.table_reconciler.errors import ReadFailure, TableNotFoundError
from src.table_reconciler.execute.ports import ExecutionPolicy, TableClient
from src.table_reconciler.initializers import (
    Initializer,
    default_initializers,
    run_initializers,
)
from src.table_reconciler.plan.actions import (
    CreateTableRequest,
    DeleteTableRequest,
    UpdateTableRequest,
)
from src.table_reconciler.plan.late_init import late_initialize
from src.table_reconciler.plan.up_to_date import UpToDateDecision, evaluate_up_to_date
from src.table_reconciler.state.states import TableDescription

# ---------- orchestration inputs/outputs ----------


class PassOutcome(StrEnum):
    CREATED = "created"
    UPDATED = "updated"
    UP_TO_DATE = "up_to_date"
    WAITING = "waiting"  # table is mid-transition
    DELETED = "deleted"
    SKIPPED = "skipped"  # dry run: request built but not sent


@dataclass(frozen=True)
class OrchestratorOptions:
    """Toggles for a single pass."""

    execution_policy: ExecutionPolicy = ExecutionPolicy()


@dataclass(frozen=True)
class PassReport:
    """Everything a caller would want to inspect or log from a single pass."""

    table_name: str
    outcome: PassOutcome
    observation: Observation | None = None
    request: CreateTableRequest | UpdateTableRequest | DeleteTableRequest | None = None
    late_initialized: bool = False

    @property
    def connection_details(self) -> Mapping[str, str]:
        if self.observation is None:
            return MappingProxyType({})
        return self.observation.connection_details


# ---------- orchestrator ----------


class Orchestrator:
    """
    Glue for observe → late-initialize → decide → (optional) update.

    This class does no API calls itself; it delegates to injected components.
    """

    def __init__(
        self,
        client: TableClient | None = None,
        store: TableStore | None = None,
        resolver: ReferenceResolver | None = None,
        initializers: Sequence[Initializer] | None = None,
        options: OrchestratorOptions | None = None,
    ) -> None:
        if client is None:
            from src.table_reconciler.execute.dynamodb_client import DynamoDBTableClient

            client = DynamoDBTableClient()
        self.client = client
        self.store = store
        self.resolver = resolver
        if initializers is None:
            initializers = default_initializers(store) if store is not None else ()
        self.initializers = tuple(initializers)
        self.options = options or OrchestratorOptions()

    # ----- public API -----

    def initialize(self, table: Table) -> bool:
        """Run the initializers once for a newly seen table."""
        return run_initializers(table, self.initializers)

    def reconcile(self, table: Table) -> PassReport:
        """Run one pass; returns what happened. Raises ReconcileError subclasses on failure."""
        log = table_logger(table.table_name)

        if self.resolver is not None and resolve_references(table, self.resolver):
            self._persist(table)

        try:
            observed = self._describe(table)
        except TableNotFoundError:
            log.info("Table does not exist")
            return self._create(table)

        observation = callbacks.interpret_read_response(table, observed)
        table.set_condition(observation.condition)
        table.status.at_provider = observed

        late_initialized = late_initialize(table.for_provider, observed)
        if late_initialized:
            log.info("Late-initialized desired parameters from observed state")
            self._persist(table)

        decision = evaluate_up_to_date(table.for_provider, observed)
        if decision is UpToDateDecision.TRANSIENT:
            log.info("Table is %s; waiting before updating", observed.table_status)
            return self._report(table, PassOutcome.WAITING, observation, late_initialized)
        if decision is UpToDateDecision.CONVERGED:
            log.debug("Table is up to date")
            return self._report(table, PassOutcome.UP_TO_DATE, observation, late_initialized)

        request = callbacks.prepare_update_request(table, self._describe_again(table))
        log.info(
            "Update planned: change=%s, index actions=%d",
            type(request.change).__name__ if request.change else "none",
            len(request.index_actions),
        )
        if self.options.execution_policy.dry_run:
            return self._report(
                table, PassOutcome.SKIPPED, observation, late_initialized, request
            )

        table.status.at_provider = self.client.update(request)
        return self._report(table, PassOutcome.UPDATED, observation, late_initialized, request)

    def delete(self, table: Table) -> PassReport:
        """Delete the table; a table that is already gone counts as deleted."""
        log = table_logger(table.table_name)
        request = callbacks.prepare_delete_request(table)
        if self.options.execution_policy.dry_run:
            return self._report(table, PassOutcome.SKIPPED, request=request)

        try:
            self.client.delete(request)
        except TableNotFoundError:
            log.info("Table already deleted")
        table.set_condition(Condition.DELETING)
        return self._report(table, PassOutcome.DELETED, request=request)

    # ----- steps -----

    def _describe(self, table: Table) -> TableDescription:
        return self.client.describe(callbacks.prepare_read_request(table))

    def _describe_again(self, table: Table) -> TableDescription:
        """Fresh read for planning the update; a vanished table aborts the pass."""
        try:
            return self._describe(table)
        except TableNotFoundError as exc:
            raise ReadFailure(
                f"Table {table.table_name!r} disappeared before it could be updated"
            ) from exc

    def _create(self, table: Table) -> PassReport:
        request = callbacks.prepare_create_request(table)
        if self.options.execution_policy.dry_run:
            return self._report(table, PassOutcome.SKIPPED, request=request)

        table.status.at_provider = self.client.create(request)
        table.set_condition(Condition.CREATING)
        return self._report(table, PassOutcome.CREATED, request=request)

    def _persist(self, table: Table) -> None:
        if self.store is not None:
            self.store.update(table)

    @staticmethod
    def _report(
        table: Table,
        outcome: PassOutcome,
        observation: Observation | None = None,
        late_initialized: bool = False,
        request: CreateTableRequest | UpdateTableRequest | DeleteTableRequest | None = None,
    ) -> PassReport:
        return PassReport(
            table_name=table.table_name,
            outcome=outcome,
            observation=observation,
            request=request,
            late_initialized=late_initialized,
        )
