"""
Unit tests for table definition conversion.

Tests conversion from migration schemas to CreateTable and PutItem parameters.
"""
import pytest

from dynamo_migrate.converters.attribute_value import AttributeValueEncoder
from dynamo_migrate.converters.table_definition import (
    build_create_table_request,
    build_put_item_request,
)
from dynamo_migrate.core.exceptions import UnsupportedTypeError
from dynamo_migrate.schemas.migration import TableSchema


class TestBuildCreateTableRequest:
    """Test CreateTable parameter construction."""

    def test_full_schema(self, sample_schema_data):
        schema = TableSchema.model_validate(sample_schema_data)

        request = build_create_table_request(schema)

        assert request == {
            "TableName": "users",
            "AttributeDefinitions": [
                {"AttributeName": "id", "AttributeType": "S"},
                {"AttributeName": "created_at", "AttributeType": "N"},
                {"AttributeName": "email", "AttributeType": "S"},
                {"AttributeName": "nickname", "AttributeType": "S"},
            ],
            "KeySchema": [
                {"AttributeName": "id", "KeyType": "HASH"},
                {"AttributeName": "created_at", "KeyType": "RANGE"},
            ],
            "ProvisionedThroughput": {"ReadCapacityUnits": 5, "WriteCapacityUnits": 5},
            "GlobalSecondaryIndexes": [
                {
                    "IndexName": "email-index",
                    "KeySchema": [{"AttributeName": "email", "KeyType": "HASH"}],
                    "Projection": {
                        "ProjectionType": "INCLUDE",
                        "NonKeyAttributes": ["nickname"],
                    },
                    "ProvisionedThroughput": {
                        "ReadCapacityUnits": 2,
                        "WriteCapacityUnits": 1,
                    },
                }
            ],
            "LocalSecondaryIndexes": [
                {
                    "IndexName": "nickname-index",
                    "KeySchema": [
                        {"AttributeName": "id", "KeyType": "HASH"},
                        {"AttributeName": "nickname", "KeyType": "RANGE"},
                    ],
                    "Projection": {"ProjectionType": "KEYS_ONLY"},
                }
            ],
        }

    def test_minimal_schema_has_no_indexes(self):
        schema = TableSchema.model_validate(
            {
                "table": "events",
                "columns": [{"name": "pk", "type": "S", "index": True, "hash": True}],
            }
        )

        request = build_create_table_request(schema)

        assert "GlobalSecondaryIndexes" not in request
        assert "LocalSecondaryIndexes" not in request
        assert request["ProvisionedThroughput"] == {
            "ReadCapacityUnits": 0,
            "WriteCapacityUnits": 0,
        }

    def test_range_key_listed_after_hash_key(self):
        schema = TableSchema.model_validate(
            {
                "table": "events",
                "columns": [
                    {"name": "sk", "type": "S", "index": True, "range": True},
                    {"name": "pk", "type": "S", "index": True, "hash": True},
                ],
            }
        )

        request = build_create_table_request(schema)

        assert request["KeySchema"] == [
            {"AttributeName": "pk", "KeyType": "HASH"},
            {"AttributeName": "sk", "KeyType": "RANGE"},
        ]

    def test_pay_per_request_omits_throughput(self):
        schema = TableSchema.model_validate(
            {
                "table": "events",
                "billingMode": "PAY_PER_REQUEST",
                "columns": [
                    {"name": "pk", "type": "S", "index": True, "hash": True},
                    {"name": "owner", "type": "S", "index": True},
                ],
                "globalIndexes": [
                    {
                        "name": "owner-index",
                        "projection": {"type": "ALL"},
                        "keys": [{"name": "owner", "hash": True}],
                    }
                ],
            }
        )

        request = build_create_table_request(schema)

        assert request["BillingMode"] == "PAY_PER_REQUEST"
        assert "ProvisionedThroughput" not in request
        assert "ProvisionedThroughput" not in request["GlobalSecondaryIndexes"][0]

    def test_local_indexes_come_from_local_definitions(self):
        schema = TableSchema.model_validate(
            {
                "table": "events",
                "columns": [
                    {"name": "pk", "type": "S", "index": True, "hash": True},
                    {"name": "a", "type": "S", "index": True},
                    {"name": "b", "type": "N", "index": True},
                ],
                "globalIndexes": [
                    {"name": "gsi", "projection": {"type": "ALL"},
                     "keys": [{"name": "a", "hash": True}]}
                ],
                "localIndexes": [
                    {"name": "lsi", "projection": {"type": "ALL"},
                     "keys": [{"name": "pk", "hash": True}, {"name": "b", "range": True}]}
                ],
            }
        )

        request = build_create_table_request(schema)

        assert [i["IndexName"] for i in request["GlobalSecondaryIndexes"]] == ["gsi"]
        assert [i["IndexName"] for i in request["LocalSecondaryIndexes"]] == ["lsi"]


class TestBuildPutItemRequest:
    """Test PutItem parameter construction."""

    def setup_method(self):
        """Setup test fixtures."""
        self.encoder = AttributeValueEncoder()

    def test_put_item(self):
        request = build_put_item_request(
            "users", {"id": "u-1", "tags": ["a"], "bio": ""}, self.encoder
        )

        assert request == {
            "TableName": "users",
            "Item": {
                "id": {"S": "u-1"},
                "tags": {"L": [{"S": "a"}]},
                "bio": {"NULL": True},
            },
        }

    def test_put_item_encode_failure_propagates(self):
        with pytest.raises(UnsupportedTypeError):
            build_put_item_request("users", {"id": b"bytes"}, self.encoder)
