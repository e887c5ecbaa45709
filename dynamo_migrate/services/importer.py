"""
Schema file importer.

Applies one migration schema against DynamoDB: drop the existing table
when requested, create the table with its indexes, then write the seed
items. Each step runs only if the previous one succeeded.
"""
import json
from pathlib import Path
from typing import Optional, Union

from pydantic import ValidationError as PydanticValidationError

from dynamo_migrate.converters.attribute_value import (
    AttributeValueEncoder,
    get_default_encoder,
)
from dynamo_migrate.converters.table_definition import (
    build_create_table_request,
    build_put_item_request,
)
from dynamo_migrate.core.exceptions import (
    DynamoDBError,
    EncodeError,
    SchemaLoadError,
    SchemaValidationError,
    SeedItemError,
)
from dynamo_migrate.core.logging import get_logger_with_context
from dynamo_migrate.db.dynamodb import DynamoDBClient
from dynamo_migrate.schemas.migration import ImportResult, TableSchema


def load_schema(path: Union[str, Path]) -> TableSchema:
    """
    Read and validate a schema file.

    Args:
        path: Path to a JSON schema file

    Returns:
        Parsed TableSchema

    Raises:
        SchemaLoadError: File is missing, unreadable or not valid JSON
        SchemaValidationError: JSON does not describe a valid table
    """
    path = str(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except OSError as e:
        raise SchemaLoadError(path, f"open {path}: {e.strerror or e}") from e
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise SchemaLoadError(path, str(e)) from e

    if not isinstance(data, dict):
        raise SchemaValidationError(
            f"{path}: top-level JSON must be an object, got {type(data).__name__}"
        )

    try:
        return TableSchema.model_validate(data)
    except PydanticValidationError as e:
        raise SchemaValidationError(f"{path}: {e}") from e


class Importer:
    """Imports migration schema files into DynamoDB."""

    def __init__(
        self,
        client: DynamoDBClient,
        encoder: Optional[AttributeValueEncoder] = None,
    ):
        """Initialize importer.

        Args:
            client: DynamoDB client used for all table and item calls
            encoder: Seed item encoder, defaults to the configured encoder
        """
        self.client = client
        self.encoder = encoder or get_default_encoder()

    def import_file(self, path: Union[str, Path]) -> ImportResult:
        """
        Load a schema file and apply it.

        Args:
            path: Path to a JSON schema file

        Returns:
            ImportResult for the table
        """
        schema = load_schema(path)
        return self.import_schema(schema, path=str(path))

    def import_schema(self, schema: TableSchema, path: Optional[str] = None) -> ImportResult:
        """
        Apply an already parsed schema.

        Args:
            schema: Table schema
            path: Source file, used for logging only

        Returns:
            ImportResult for the table
        """
        logger = get_logger_with_context(__name__, path=path, table=schema.table)
        result = ImportResult(table=schema.table, path=path)

        actions = [
            self.delete_table_if_exists,
            self.create_table,
            self.seed_table,
        ]
        for action in actions:
            logger.debug(f"Running {action.__name__}")
            action(schema, result)

        logger.info(
            f"Imported table {schema.table}: dropped={result.dropped} "
            f"items={result.items_written}"
        )
        return result

    def delete_table_if_exists(self, schema: TableSchema, result: ImportResult):
        """Drop the table when dropIfExists is set and the table exists."""
        if not schema.drop_if_exists:
            return
        if not self.client.table_exists(schema.table):
            return
        self.client.delete_table(schema.table)
        result.dropped = True

    def create_table(self, schema: TableSchema, result: ImportResult):
        """Create the table and its secondary indexes."""
        request = build_create_table_request(schema)
        self.client.create_table(**request)
        result.created = True

    def seed_table(self, schema: TableSchema, result: ImportResult):
        """
        Write seed items in order.

        Stops at the first item that fails to encode or write; later
        items are not sent.

        Raises:
            SeedItemError: Wraps the first encode or DynamoDB failure
        """
        for index, item in enumerate(schema.items):
            logger = get_logger_with_context(
                __name__, path=result.path, table=schema.table, item_index=index
            )
            try:
                request = build_put_item_request(schema.table, item, self.encoder)
                self.client.put_item(**request)
            except (EncodeError, DynamoDBError) as e:
                logger.warning(f"Seed item rejected: {e}")
                raise SeedItemError(schema.table, index, e) from e
            logger.debug("Wrote seed item")
            result.items_written += 1
