"""
Adapter: DynamoDB table client

Implements `TableClient` on top of a boto3 DynamoDB client.

- Requests are rendered by `execute/renderer.py`; responses are parsed by
  `state/adapters/describe_parser.py`.
- The boto3 client is built with connect/read timeouts from settings and a single
  attempt: retrying is the scheduler's job, not ours.
- botocore errors are translated here and nowhere else:
    ResourceNotFoundException      → TableNotFoundError
    other ClientError / BotoCoreError → ReadFailure (describe) or WriteFailure
  Timeouts and connection errors are marked retryable.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, TypeVar

import boto3
from botocore.client import BaseClient
from botocore.config import Config
from botocore.exceptions import (
    BotoCoreError,
    ClientError,
    ConnectionError,
    ConnectTimeoutError,
    ReadTimeoutError,
)

from src import constants, settings
from src.logger import LOGGER
from src.table_reconciler.errors import ReadFailure, TableNotFoundError, WriteFailure
from src.table_reconciler.execute import renderer
from src.table_reconciler.plan.actions import (
    CreateTableRequest,
    DeleteTableRequest,
    UpdateTableRequest,
)
from src.table_reconciler.state.adapters.describe_parser import parse_table_description
from src.table_reconciler.state.ports import DescribeTableRequest
from src.table_reconciler.state.states import TableDescription

_T = TypeVar("_T")


def default_client_config() -> Config:
    """botocore config: bounded waits, no SDK-level retries."""
    return Config(
        connect_timeout=settings.CONNECT_TIMEOUT_SECONDS,
        read_timeout=settings.READ_TIMEOUT_SECONDS,
        retries={"total_max_attempts": 1, "mode": "standard"},
    )


def is_not_found_error(error: BaseException) -> bool:
    """True when a botocore error says the table does not exist."""
    if isinstance(error, TableNotFoundError):
        return True
    return isinstance(error, ClientError) and _error_code(error) == constants.NOT_FOUND_ERROR_CODE


class DynamoDBTableClient:
    """`TableClient` backed by boto3."""

    def __init__(self, client: BaseClient | None = None, region_name: str | None = None) -> None:
        self.client = client or boto3.client(
            "dynamodb",
            region_name=region_name or settings.AWS_REGION,
            config=default_client_config(),
        )

    # ---------- reads ----------

    def describe(self, request: DescribeTableRequest) -> TableDescription:
        response = self._call(
            lambda: self.client.describe_table(**renderer.render_describe_table(request)),
            table_name=request.table_name,
            operation="DescribeTable",
            failure=ReadFailure,
        )
        return parse_table_description(response["Table"])

    # ---------- writes ----------

    def create(self, request: CreateTableRequest) -> TableDescription:
        LOGGER.info("Creating table %s", request.table_name)
        response = self._call(
            lambda: self.client.create_table(**renderer.render_create_table(request)),
            table_name=request.table_name,
            operation="CreateTable",
            failure=WriteFailure,
        )
        return parse_table_description(response["TableDescription"])

    def update(self, request: UpdateTableRequest) -> TableDescription:
        LOGGER.info("Updating table %s", request.table_name)
        response = self._call(
            lambda: self.client.update_table(**renderer.render_update_table(request)),
            table_name=request.table_name,
            operation="UpdateTable",
            failure=WriteFailure,
        )
        return parse_table_description(response["TableDescription"])

    def delete(self, request: DeleteTableRequest) -> None:
        LOGGER.info("Deleting table %s", request.table_name)
        self._call(
            lambda: self.client.delete_table(**renderer.render_delete_table(request)),
            table_name=request.table_name,
            operation="DeleteTable",
            failure=WriteFailure,
        )

    # ---------- helpers ----------

    @staticmethod
    def _call(
        send: Callable[[], _T],
        *,
        table_name: str,
        operation: str,
        failure: type[ReadFailure] | type[WriteFailure],
    ) -> _T:
        try:
            return send()
        except ClientError as exc:
            if is_not_found_error(exc):
                raise TableNotFoundError(table_name) from exc
            raise failure(
                f"{operation} failed for table {table_name!r}: "
                f"{_error_code(exc)}: {_error_message(exc)}"
            ) from exc
        except (ConnectTimeoutError, ReadTimeoutError, ConnectionError) as exc:
            raise failure(
                f"{operation} could not reach DynamoDB for table {table_name!r}: {exc}",
                retryable=True,
            ) from exc
        except BotoCoreError as exc:
            # e.g. parameter validation: sending the same request again will not help
            raise failure(
                f"{operation} failed for table {table_name!r}: {exc}", retryable=False
            ) from exc


def _error_code(error: ClientError) -> str:
    return error.response.get("Error", {}).get("Code", "ClientError")


def _error_message(error: ClientError) -> Any:
    return error.response.get("Error", {}).get("Message", "")
