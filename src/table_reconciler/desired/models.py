"""
Desired table specification models.

`TableParameters` is the owner-authored target configuration. Unlike the rest of
the models it is mutable: late-initialization fills unset fields in place and the
tagger rewrites `tags`. Every attribute is optional:

- `None`          → unset (eligible for late-initialization, not compared)
- `()` / `0`      → explicitly set to empty / zero
- anything else   → explicitly set

`Table` wraps the parameters with identity, cross-resource references (resolved
before the core runs, never compared) and the status written back by each pass.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar

from src import settings
from src.enums import Condition
from src.table_reconciler.desired.references import TableReferences
from src.table_reconciler.models import (
    AttributeDefinition,
    GlobalSecondaryIndex,
    KeySchemaElement,
    LocalSecondaryIndex,
    ProvisionedThroughput,
    SSESpecification,
    StreamSpecification,
    Tag,
)
from src.table_reconciler.state.states import TableDescription


@dataclass(slots=True)
class TableParameters:
    """Desired state for a single table; also the shape of a patch."""

    # Fields that never take part in a diff: placement, tags (handled by the
    # tagger), and attributes fixed when the table is created.
    NON_COMPARABLE_FIELDS: ClassVar[frozenset[str]] = frozenset(
        {
            "region",
            "tags",
            "key_schema",
            "local_secondary_indexes",
            "attribute_definitions",
        }
    )

    region: str | None = None
    attribute_definitions: tuple[AttributeDefinition, ...] | None = None
    key_schema: tuple[KeySchemaElement, ...] | None = None
    global_secondary_indexes: tuple[GlobalSecondaryIndex, ...] | None = None
    local_secondary_indexes: tuple[LocalSecondaryIndex, ...] | None = None
    provisioned_throughput: ProvisionedThroughput | None = None
    stream_specification: StreamSpecification | None = None
    sse_specification: SSESpecification | None = None
    billing_mode: str | None = None
    tags: tuple[Tag, ...] | None = None


@dataclass(slots=True)
class TableStatusRecord:
    """What the last pass learned about the external table."""

    condition: Condition | None = None
    at_provider: TableDescription | None = None


@dataclass(slots=True)
class Table:
    """A managed DynamoDB table: identity, desired parameters and status."""

    name: str
    for_provider: TableParameters = field(default_factory=TableParameters)
    external_name: str | None = None
    provider_config_name: str = settings.DEFAULT_PROVIDER_CONFIG
    references: TableReferences = field(default_factory=TableReferences)
    status: TableStatusRecord = field(default_factory=TableStatusRecord)

    @property
    def table_name(self) -> str:
        """Name used in API calls: the external name, falling back to the resource name."""
        return self.external_name or self.name

    def set_condition(self, condition: Condition) -> None:
        """Record `condition`; UNKNOWN leaves the current condition untouched."""
        if condition is Condition.UNKNOWN:
            return
        self.status.condition = condition
