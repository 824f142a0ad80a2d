"""Shared constant values used across the table reconciler."""

from typing import Final

TABLE_KIND: Final[str] = "Table.dynamodb"

# Connection details published after a successful read
CONNECTION_DETAIL_TABLE_NAME: Final[str] = "tableName"
CONNECTION_DETAIL_TABLE_ARN: Final[str] = "tableArn"
CONNECTION_DETAIL_LATEST_STREAM_ARN: Final[str] = "latestStreamArn"
CONNECTION_DETAIL_LATEST_STREAM_LABEL: Final[str] = "latestStreamLabel"

# Tags injected by the reconciler to identify the managing resource
SYSTEM_TAG_KIND: Final[str] = "reconciler-kind"
SYSTEM_TAG_NAME: Final[str] = "reconciler-name"
SYSTEM_TAG_PROVIDER_CONFIG: Final[str] = "reconciler-providerconfig"

NOT_FOUND_ERROR_CODE: Final[str] = "ResourceNotFoundException"
