"""
Converter from migration schemas to DynamoDB request parameters.

Builds keyword arguments for the low-level client's ``create_table``
and ``put_item`` calls.
"""
from typing import Any, Dict, List

from dynamo_migrate.converters.attribute_value import AttributeValueEncoder
from dynamo_migrate.schemas.migration import (
    Column,
    GlobalIndex,
    LocalIndex,
    Projection,
    ProvisionedThroughput,
    TableSchema,
)


def build_create_table_request(schema: TableSchema) -> Dict[str, Any]:
    """
    Convert a TableSchema to CreateTable parameters.

    Args:
        schema: Parsed migration schema

    Returns:
        Dictionary of create_table keyword arguments
    """
    provisioned = schema.billing_mode == "PROVISIONED"

    request = {
        "TableName": schema.table,
        "AttributeDefinitions": [
            _attribute_definition(column) for column in schema.columns if column.index
        ],
        "KeySchema": _key_schema(schema.columns),
    }

    if provisioned:
        request["ProvisionedThroughput"] = _throughput(schema.provisioned_throughput)
    else:
        request["BillingMode"] = schema.billing_mode

    if schema.global_indexes:
        request["GlobalSecondaryIndexes"] = [
            _global_index(index, provisioned) for index in schema.global_indexes
        ]

    if schema.local_indexes:
        request["LocalSecondaryIndexes"] = [
            _local_index(index) for index in schema.local_indexes
        ]

    return request


def build_put_item_request(
    table: str, item: Dict[str, Any], encoder: AttributeValueEncoder
) -> Dict[str, Any]:
    """
    Convert a seed item to PutItem parameters.

    Raises:
        EncodeError: Item contains a value with no attribute value encoding
    """
    return {"TableName": table, "Item": encoder.encode_item(item)}


def _attribute_definition(column: Column) -> Dict[str, str]:
    return {"AttributeName": column.name, "AttributeType": column.type}


def _key_schema(columns: List[Column]) -> List[Dict[str, str]]:
    """HASH key first, then RANGE, as DynamoDB requires."""
    keys = [
        {"AttributeName": column.name, "KeyType": "HASH"}
        for column in columns
        if column.hash
    ]
    keys.extend(
        {"AttributeName": column.name, "KeyType": "RANGE"}
        for column in columns
        if column.range
    )
    return keys


def _throughput(throughput: ProvisionedThroughput) -> Dict[str, int]:
    return {
        "ReadCapacityUnits": throughput.read_capacity_units,
        "WriteCapacityUnits": throughput.write_capacity_units,
    }


def _projection(projection: Projection) -> Dict[str, Any]:
    result = {"ProjectionType": projection.type}
    if projection.non_keys is not None:
        result["NonKeyAttributes"] = projection.non_keys
    return result


def _local_index(index: LocalIndex) -> Dict[str, Any]:
    return {
        "IndexName": index.name,
        "KeySchema": _key_schema(index.keys),
        "Projection": _projection(index.projection),
    }


def _global_index(index: GlobalIndex, provisioned: bool) -> Dict[str, Any]:
    result = _local_index(index)
    if provisioned:
        result["ProvisionedThroughput"] = _throughput(index.provisioned_throughput)
    return result
