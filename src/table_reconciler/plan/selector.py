"""
Single-action selection: turn a patch into one UpdateTable request.

UpdateTable accepts a single top-level change per call (capacity, stream,
encryption or billing mode). To converge anyway, each pass applies the first
pending change in `CATEGORY_PRIORITY`; the remaining ones stay in the patch and
are picked up on later passes, once the table is ACTIVE again.

Global secondary index actions are planned independently and ride along with
whichever top-level change was selected.

Workflow
--------
1. Recompute the patch against a freshly read snapshot.
2. Ask each category, in priority order, for its change; keep the first.
3. Classify every index in the patch as create / update / delete.
4. Assemble the request; a request with nothing in it is a programming error.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from enum import StrEnum
from types import MappingProxyType

from src.enums import BillingMode
from src.logger import LOGGER
from src.table_reconciler.desired.models import TableParameters
from src.table_reconciler.errors import EmptyPatchError, IncompleteParametersError
from src.table_reconciler.models import GlobalSecondaryIndex, ProvisionedThroughput
from src.table_reconciler.plan.actions import (
    CreateGlobalSecondaryIndex,
    DeleteGlobalSecondaryIndex,
    IndexAction,
    TableChange,
    UpdateBillingMode,
    UpdateEncryption,
    UpdateGlobalSecondaryIndex,
    UpdateStream,
    UpdateTableRequest,
    UpdateThroughput,
)
from src.table_reconciler.plan.patch import compute_patch, is_empty_patch, populated_fields
from src.table_reconciler.state.states import ProvisionedThroughputDescription, TableDescription


class ChangeCategory(StrEnum):
    CAPACITY = "capacity"
    STREAMING = "streaming"
    ENCRYPTION = "encryption"
    BILLING_MODE = "billing_mode"


CATEGORY_PRIORITY: tuple[ChangeCategory, ...] = (
    ChangeCategory.CAPACITY,
    ChangeCategory.STREAMING,
    ChangeCategory.ENCRYPTION,
    ChangeCategory.BILLING_MODE,
)

ChangeBuilder = Callable[[TableParameters, TableParameters, TableDescription], TableChange | None]


# ---------- public API ----------


def prepare_update_request(
    table_name: str, desired: TableParameters, observed: TableDescription
) -> UpdateTableRequest:
    """
    Build the UpdateTable request for this pass.

    `observed` must be a fresh read, not the snapshot that triggered the update.
    Raises EmptyPatchError when there is nothing to change.
    """
    patch = compute_patch(observed, desired)
    if is_empty_patch(patch):
        raise EmptyPatchError(f"Update requested for table {table_name!r} but nothing differs")

    selected = select_change(patch, desired, observed)
    index_actions = plan_index_actions(patch, desired, observed)
    creates_index = any(isinstance(a, CreateGlobalSecondaryIndex) for a in index_actions)

    request = UpdateTableRequest(
        table_name=table_name,
        change=selected[1] if selected else None,
        index_actions=index_actions,
        attribute_definitions=desired.attribute_definitions if creates_index else None,
    )
    if request.is_empty:
        raise EmptyPatchError(
            f"Patch for table {table_name!r} has no actionable change: "
            f"{', '.join(populated_fields(patch))}"
        )
    return request


def pending_changes(
    patch: TableParameters, desired: TableParameters, observed: TableDescription
) -> tuple[tuple[ChangeCategory, TableChange], ...]:
    """Every applicable top-level change, in priority order."""
    pending: list[tuple[ChangeCategory, TableChange]] = []
    for category in CATEGORY_PRIORITY:
        change = _CHANGE_BUILDERS[category](patch, desired, observed)
        if change is not None:
            pending.append((category, change))
    return tuple(pending)


def select_change(
    patch: TableParameters, desired: TableParameters, observed: TableDescription
) -> tuple[ChangeCategory, TableChange] | None:
    """The highest-priority pending change, or None."""
    pending = pending_changes(patch, desired, observed)
    if not pending:
        return None
    if len(pending) > 1:
        LOGGER.debug(
            "Selected %s change; deferred: %s",
            pending[0][0],
            ", ".join(category for category, _ in pending[1:]),
        )
    return pending[0]


def plan_index_actions(
    patch: TableParameters, desired: TableParameters, observed: TableDescription
) -> tuple[IndexAction, ...]:
    """
    One action per global secondary index in the patch, ordered by index name.

    - not observed                       → create
    - not desired                        → delete
    - key schema or projection changed   → delete (created again on a later pass)
    - otherwise                          → update throughput
    """
    desired_by_name = {index.index_name: index for index in desired.global_secondary_indexes or ()}
    observed_by_name = {index.index_name: index for index in observed.global_secondary_indexes}

    actions: list[IndexAction] = []
    for entry in patch.global_secondary_indexes or ():
        name = entry.index_name
        observed_index = observed_by_name.get(name)
        desired_index = desired_by_name.get(name)
        if observed_index is None:
            actions.append(_create_index_action(entry))
        elif desired_index is None:
            actions.append(DeleteGlobalSecondaryIndex(index_name=name))
        elif entry.key_schema is not None or entry.projection is not None:
            LOGGER.info("Index %s changed key schema or projection; deleting to recreate", name)
            actions.append(DeleteGlobalSecondaryIndex(index_name=name))
        else:
            throughput = _complete_throughput(
                desired_index.provisioned_throughput,
                observed_index.provisioned_throughput,
                what=f"index {name!r}",
            )
            actions.append(
                UpdateGlobalSecondaryIndex(index_name=name, provisioned_throughput=throughput)
            )
    return tuple(actions)


# ---------- per-category builders ----------


def _capacity_change(
    patch: TableParameters, desired: TableParameters, observed: TableDescription
) -> TableChange | None:
    if patch.provisioned_throughput is None:
        return None
    # On-demand tables reject capacity updates; the billing mode change carries it.
    if observed.billing_mode == BillingMode.PAY_PER_REQUEST:
        return None
    throughput = _complete_throughput(
        desired.provisioned_throughput, observed.provisioned_throughput, what="table"
    )
    return UpdateThroughput(
        read_capacity_units=throughput.read_capacity_units,
        write_capacity_units=throughput.write_capacity_units,
    )


def _streaming_change(
    patch: TableParameters, desired: TableParameters, observed: TableDescription
) -> TableChange | None:
    if patch.stream_specification is None or desired.stream_specification is None:
        return None
    wanted = desired.stream_specification
    current = observed.stream_specification
    currently_enabled = bool(current and current.stream_enabled)
    enabled = wanted.stream_enabled
    if enabled is None:
        # a view type on its own asks for a stream
        enabled = currently_enabled or wanted.stream_view_type is not None

    # The view type of an enabled stream cannot change in place: disable first.
    if enabled and currently_enabled:
        return UpdateStream(stream_enabled=False)
    return UpdateStream(
        stream_enabled=enabled,
        stream_view_type=wanted.stream_view_type if enabled else None,
    )


def _encryption_change(
    patch: TableParameters, desired: TableParameters, observed: TableDescription
) -> TableChange | None:
    if patch.sse_specification is None or desired.sse_specification is None:
        return None
    wanted = desired.sse_specification
    # Sending the current key again is rejected, so only send it when it changes.
    key_changed = patch.sse_specification.kms_master_key_id is not None
    return UpdateEncryption(
        enabled=wanted.enabled,
        sse_type=wanted.sse_type,
        kms_master_key_id=wanted.kms_master_key_id if key_changed else None,
    )


def _billing_mode_change(
    patch: TableParameters, desired: TableParameters, observed: TableDescription
) -> TableChange | None:
    if patch.billing_mode is None or desired.billing_mode is None:
        return None
    throughput: ProvisionedThroughput | None = None
    if desired.billing_mode == BillingMode.PROVISIONED:
        throughput = _complete_throughput(
            desired.provisioned_throughput, observed.provisioned_throughput, what="table"
        )
    return UpdateBillingMode(billing_mode=desired.billing_mode, provisioned_throughput=throughput)


_CHANGE_BUILDERS: Mapping[ChangeCategory, ChangeBuilder] = MappingProxyType(
    {
        ChangeCategory.CAPACITY: _capacity_change,
        ChangeCategory.STREAMING: _streaming_change,
        ChangeCategory.ENCRYPTION: _encryption_change,
        ChangeCategory.BILLING_MODE: _billing_mode_change,
    }
)


# ---------- helpers ----------


def _create_index_action(index: GlobalSecondaryIndex | None) -> CreateGlobalSecondaryIndex:
    if index is None or index.index_name is None:
        raise IncompleteParametersError("Cannot create a global secondary index without a name")
    if not index.key_schema or index.projection is None:
        raise IncompleteParametersError(
            f"Cannot create index {index.index_name!r} without key schema and projection"
        )
    return CreateGlobalSecondaryIndex(
        index_name=index.index_name,
        key_schema=index.key_schema,
        projection=index.projection,
        provisioned_throughput=index.provisioned_throughput,
    )


def _complete_throughput(
    desired: ProvisionedThroughput | None,
    observed: ProvisionedThroughputDescription | None,
    *,
    what: str,
) -> ProvisionedThroughput:
    """Desired units, with any unset unit taken from a non-zero observed value."""
    read = desired.read_capacity_units if desired else None
    write = desired.write_capacity_units if desired else None
    if observed is not None and (observed.read_capacity_units or observed.write_capacity_units):
        read = observed.read_capacity_units if read is None else read
        write = observed.write_capacity_units if write is None else write
    if read is None or write is None:
        raise IncompleteParametersError(f"Provisioned throughput for {what} is incomplete")
    return ProvisionedThroughput(read_capacity_units=read, write_capacity_units=write)
