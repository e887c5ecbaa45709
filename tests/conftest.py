"""
Pytest configuration and fixtures.

Provides shared fixtures for testing.
"""
import json
import logging
from pathlib import Path
from unittest.mock import MagicMock

import pytest
from botocore.exceptions import ClientError

from dynamo_migrate.converters.attribute_value import AttributeValueEncoder
from dynamo_migrate.core.logging import StructuredFormatter
from dynamo_migrate.db.dynamodb import DynamoDBClient

FIXTURES_DIR = Path(__file__).parent / "fixtures"


def make_client_error(code: str, message: str = "error", operation: str = "Operation"):
    """Build a botocore ClientError as raised by the low-level client."""
    return ClientError({"Error": {"Code": code, "Message": message}}, operation)


@pytest.fixture
def fixtures_dir():
    """Directory holding JSON schema fixtures."""
    return FIXTURES_DIR


@pytest.fixture
def schema_path():
    """Path to the full sample schema."""
    return FIXTURES_DIR / "schema.json"


@pytest.fixture
def sample_schema_data():
    """Parsed sample schema."""
    with open(FIXTURES_DIR / "schema.json", "r", encoding="utf-8") as f:
        return json.load(f)


@pytest.fixture
def write_schema(tmp_path):
    """Write a schema dict to a temporary file and return its path."""
    def _write(data, name="schema.json"):
        path = tmp_path / name
        path.write_text(json.dumps(data), encoding="utf-8")
        return path
    return _write


@pytest.fixture
def boto3_client():
    """Mock low-level boto3 DynamoDB client; every table is missing by default."""
    client = MagicMock()
    client.describe_table.side_effect = make_client_error(
        "ResourceNotFoundException", "Requested resource not found", "DescribeTable"
    )
    client.create_table.return_value = {"TableDescription": {"TableStatus": "CREATING"}}
    client.put_item.return_value = {}
    client.delete_table.return_value = {"TableDescription": {"TableStatus": "DELETING"}}
    return client


@pytest.fixture
def dynamodb_client(boto3_client):
    """DynamoDBClient over the mock boto3 client, without waiters."""
    return DynamoDBClient(boto3_client, wait_for_tables=False)


@pytest.fixture
def encoder():
    """Encoder with DynamoDB's nesting limit."""
    return AttributeValueEncoder(max_depth=32)


@pytest.fixture(autouse=True)
def reset_logging():
    """Drop handlers installed by setup_logging so they don't outlive captured streams."""
    yield
    root = logging.getLogger()
    for handler in list(root.handlers):
        if isinstance(handler.formatter, StructuredFormatter):
            root.removeHandler(handler)
