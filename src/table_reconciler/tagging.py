"""
Tag merging for desired tables.

Owner tags (from `for_provider.tags`) and system tags (identifying the managing
resource) are merged into one mapping and written back sorted by key, so the
stored list compares equal from one run to the next.

Collision rule
--------------
`TagPrecedence.SYSTEM` (default): owner tags are applied first and system tags
overwrite them, so the owner cannot shadow a system tag.
`TagPrecedence.OWNER`: system tags are applied first and owner tags overwrite them.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from src import constants, settings
from src.enums import TagPrecedence
from src.logger import LOGGER
from src.table_reconciler.desired.models import Table
from src.table_reconciler.desired.ports import TableStore
from src.table_reconciler.models import Tag


def external_tags(table: Table) -> dict[str, str]:
    """System tags identifying the resource that manages `table`."""
    return {
        constants.SYSTEM_TAG_KIND: constants.TABLE_KIND,
        constants.SYSTEM_TAG_NAME: table.name,
        constants.SYSTEM_TAG_PROVIDER_CONFIG: table.provider_config_name,
    }


def merge_tags(
    owner_tags: Iterable[Tag] | None,
    system_tags: Mapping[str, str],
    precedence: TagPrecedence = TagPrecedence.SYSTEM,
) -> tuple[Tag, ...]:
    """Merge both sources into one tag tuple sorted by key."""
    owner = {tag.key: tag.value for tag in owner_tags or ()}
    if precedence is TagPrecedence.SYSTEM:
        merged = {**owner, **system_tags}
    else:
        merged = {**system_tags, **owner}
    return tuple(Tag(key=key, value=merged[key]) for key in sorted(merged))


class Tagger:
    """
    Initializer that writes merged tags into the desired record.

    Runs once when a table is first seen, not on every pass. Skips the write when
    the merged tags already equal the stored ones.
    """

    def __init__(
        self,
        store: TableStore,
        precedence: TagPrecedence = settings.TAG_PRECEDENCE,
    ) -> None:
        self._store = store
        self._precedence = precedence

    def initialize(self, table: Table, system_tags: Mapping[str, str] | None = None) -> bool:
        """Merge and persist tags; returns True when a write happened."""
        system = external_tags(table) if system_tags is None else system_tags
        tags = merge_tags(table.for_provider.tags, system, self._precedence)
        if tags == table.for_provider.tags:
            return False

        table.for_provider.tags = tags
        LOGGER.info("Updating tags on table %s (%d tag(s))", table.name, len(tags))
        self._store.update(table)
        return True
