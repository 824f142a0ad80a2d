"""
Cross-resource references for a desired table.

References and selectors point at other managed resources (for example a KMS
key). They are resolved into concrete values on `TableParameters` *before* the
reconciler runs, so the comparable desired shape never contains them.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Protocol

from src.table_reconciler.errors import ReferenceResolutionError
from src.table_reconciler.models import SSESpecification

if TYPE_CHECKING:
    from src.table_reconciler.desired.models import Table


@dataclass(frozen=True, slots=True)
class Reference:
    """Points at one resource by name."""

    name: str


@dataclass(frozen=True, slots=True)
class Selector:
    """Selects one resource by labels."""

    match_labels: Mapping[str, str] = field(default_factory=dict)


@dataclass(slots=True)
class TableReferences:
    """References that can supply values for a table's parameters."""

    kms_master_key_id_ref: Reference | None = None
    kms_master_key_id_selector: Selector | None = None

    @property
    def is_empty(self) -> bool:
        return self.kms_master_key_id_ref is None and self.kms_master_key_id_selector is None


class ReferenceResolver(Protocol):
    """Port for anything that can turn a reference or selector into a KMS key id."""

    def resolve(self, reference: Reference | None, selector: Selector | None) -> str | None: ...


def resolve_references(table: Table, resolver: ReferenceResolver) -> bool:
    """
    Fill `sse_specification.kms_master_key_id` from the table's references.

    An explicitly set key id always wins and the resolver is not consulted.
    Returns True when the parameters changed.
    """
    refs = table.references
    if refs.is_empty:
        return False

    current = table.for_provider.sse_specification or SSESpecification()
    if current.kms_master_key_id is not None:
        return False

    key_id = resolver.resolve(refs.kms_master_key_id_ref, refs.kms_master_key_id_selector)
    if not key_id:
        raise ReferenceResolutionError(
            f"Cannot resolve KMS master key id for table {table.name!r}"
        )

    table.for_provider.sse_specification = replace(current, kms_master_key_id=key_id)
    return True
