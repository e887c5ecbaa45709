"""
Migration runner.

Imports a sequence of schema files in order and stops at the first
file that fails.
"""
from pathlib import Path
from typing import List, Optional, Sequence, Union

from dynamo_migrate.converters.attribute_value import AttributeValueEncoder
from dynamo_migrate.core.exceptions import MigrationError, MigrationToolError
from dynamo_migrate.core.logging import get_logger
from dynamo_migrate.db.dynamodb import DynamoDBClient
from dynamo_migrate.schemas.migration import ImportResult
from dynamo_migrate.services.importer import Importer

logger = get_logger(__name__)


class Migrator:
    """Runs schema file imports against one DynamoDB client."""

    def __init__(
        self,
        client: DynamoDBClient,
        paths: Sequence[Union[str, Path]],
        encoder: Optional[AttributeValueEncoder] = None,
    ):
        self.client = client
        self.paths = list(paths)
        self.importer = Importer(client, encoder)

    def migrate(self) -> List[ImportResult]:
        """
        Import every path in order.

        Returns:
            One ImportResult per path

        Raises:
            MigrationError: First failing path; later paths are not applied
        """
        results = []
        for path in self.paths:
            logger.info(f"Applying migration: {path}")
            try:
                results.append(self.importer.import_file(path))
            except MigrationToolError as e:
                logger.error(f"Migration failed: {path}: {e}")
                raise MigrationError(str(path), e) from e
        return results
