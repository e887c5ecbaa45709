"""
dynamo-migrate: schema-driven DynamoDB table migrations.

Reads JSON schema files describing a table (keys, indexes, throughput,
seed items) and applies them: drop, create, then seed.
"""
from dynamo_migrate.converters.attribute_value import AttributeValueEncoder, encode_value
from dynamo_migrate.services.importer import Importer, load_schema
from dynamo_migrate.services.migrator import Migrator

__version__ = "1.0.0"

__all__ = [
    "AttributeValueEncoder",
    "encode_value",
    "Importer",
    "load_schema",
    "Migrator",
]
