"""
DynamoDB client and table management.

Wraps the low-level boto3 DynamoDB client with the few table and item
operations migrations need, translating service errors into
dynamo-migrate exceptions.
"""
from typing import Any, Dict, Optional

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from dynamo_migrate.core.config import settings
from dynamo_migrate.core.exceptions import (
    DynamoDBError,
    TableNotFoundError,
    map_client_error,
)
from dynamo_migrate.core.logging import get_logger

logger = get_logger(__name__)


def create_boto3_client(
    endpoint_url: Optional[str] = None,
    region_name: Optional[str] = None,
):
    """
    Build a low-level DynamoDB client from settings.

    Args:
        endpoint_url: Overrides DYNAMODB_ENDPOINT_URL (e.g. DynamoDB Local)
        region_name: Overrides AWS_REGION
    """
    # Configure boto3 with timeout settings
    config = Config(
        read_timeout=settings.dynamodb_timeout,
        connect_timeout=settings.dynamodb_timeout,
        retries={"max_attempts": settings.dynamodb_max_attempts, "mode": "standard"},
    )

    return boto3.client(
        "dynamodb",
        region_name=region_name or settings.aws_region,
        endpoint_url=endpoint_url or settings.dynamodb_endpoint_url,
        aws_access_key_id=settings.aws_access_key_id,
        aws_secret_access_key=settings.aws_secret_access_key,
        aws_session_token=settings.aws_session_token,
        config=config,
    )


class DynamoDBClient:
    """DynamoDB client for table and item operations."""

    def __init__(self, client=None, wait_for_tables: Optional[bool] = None):
        """Initialize DynamoDB client.

        Args:
            client: Low-level boto3 DynamoDB client; built from settings if omitted
            wait_for_tables: Block until create/delete completes,
                defaults to WAIT_FOR_TABLES
        """
        self.client = client if client is not None else create_boto3_client()
        self.wait_for_tables = (
            settings.wait_for_tables if wait_for_tables is None else wait_for_tables
        )

    def describe_table(self, table_name: str) -> Dict[str, Any]:
        """
        Describe a table.

        Raises:
            TableNotFoundError: Table does not exist
        """
        response = self._call("describe_table", TableName=table_name)
        return response["Table"]

    def table_exists(self, table_name: str) -> bool:
        """Check whether a table exists."""
        try:
            self.describe_table(table_name)
            return True
        except TableNotFoundError:
            return False

    def delete_table(self, table_name: str):
        """Delete a table and wait for it to disappear."""
        self._call("delete_table", TableName=table_name)
        logger.info(f"Deleted table: {table_name}")
        if self.wait_for_tables:
            self.wait_until_not_exists(table_name)

    def create_table(self, **request) -> Dict[str, Any]:
        """
        Create a table from CreateTable parameters.

        Args:
            **request: create_table keyword arguments

        Returns:
            Table description
        """
        response = self._call("create_table", **request)
        table_name = request["TableName"]
        logger.info(f"Created table: {table_name}")
        if self.wait_for_tables:
            self.wait_until_exists(table_name)
        return response["TableDescription"]

    def put_item(self, **request):
        """Write one item from PutItem parameters."""
        self._call("put_item", **request)

    def wait_until_exists(self, table_name: str):
        """Block until the table is ACTIVE."""
        logger.debug(f"Waiting for table to exist: {table_name}")
        self._wait("table_exists", table_name)

    def wait_until_not_exists(self, table_name: str):
        """Block until the table is gone."""
        logger.debug(f"Waiting for table to be deleted: {table_name}")
        self._wait("table_not_exists", table_name)

    def _wait(self, waiter_name: str, table_name: str):
        try:
            self.client.get_waiter(waiter_name).wait(TableName=table_name)
        except ClientError as e:
            raise self._map_client_error(e) from e
        except BotoCoreError as e:
            # WaiterError included
            raise DynamoDBError(type(e).__name__, str(e)) from e

    def _call(self, operation: str, **kwargs) -> Dict[str, Any]:
        try:
            return getattr(self.client, operation)(**kwargs)
        except ClientError as e:
            raise self._map_client_error(e) from e
        except BotoCoreError as e:
            # Connection, credential and parameter errors raised before a response
            raise DynamoDBError(type(e).__name__, str(e)) from e

    @staticmethod
    def _map_client_error(error: ClientError) -> DynamoDBError:
        error_code = error.response["Error"]["Code"]
        error_message = error.response["Error"].get("Message", "")
        return map_client_error(error_code, error_message)
