"""
Command line interface for dynamo-migrate.

Usage:
    # Apply schema files in order
    dynamo-migrate migrate migrations/users.json migrations/orders.json

    # Against DynamoDB Local
    dynamo-migrate migrate --endpoint-url http://localhost:8000 migrations/users.json

    # Print the encoded seed items of a schema file without calling DynamoDB
    dynamo-migrate encode migrations/users.json
"""
import argparse
import json
import sys

from dynamo_migrate.converters.attribute_value import get_default_encoder
from dynamo_migrate.core.config import settings
from dynamo_migrate.core.exceptions import MigrationToolError, SeedItemError
from dynamo_migrate.core.logging import setup_logging
from dynamo_migrate.db.dynamodb import DynamoDBClient, create_boto3_client
from dynamo_migrate.services.importer import load_schema
from dynamo_migrate.services.migrator import Migrator


def run_migrate(args) -> None:
    """Apply schema files against DynamoDB."""
    paths = args.paths or settings.migration_paths
    if not paths:
        raise MigrationToolError("no schema files given (pass paths or set MIGRATION_PATHS)")

    boto3_client = create_boto3_client(
        endpoint_url=args.endpoint_url, region_name=args.region
    )
    client = DynamoDBClient(boto3_client, wait_for_tables=not args.no_wait)

    results = Migrator(client, paths).migrate()

    for result in results:
        print(f"✓ {result.path}: table {result.table} "
              f"({result.items_written} items written)")


def run_encode(args) -> None:
    """Print the PutItem payloads of a schema file as DynamoDB JSON."""
    schema = load_schema(args.path)
    encoder = get_default_encoder()

    items = []
    for index, item in enumerate(schema.items):
        try:
            items.append(encoder.encode_item(item))
        except MigrationToolError as e:
            raise SeedItemError(schema.table, index, e) from e

    print(json.dumps(items, indent=args.indent))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dynamo-migrate",
        description="Create DynamoDB tables and seed items from JSON schema files",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Log level (defaults to LOG_LEVEL)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to execute")
    subparsers.required = True

    # Migrate command
    migrate_parser = subparsers.add_parser("migrate", help="Apply schema files")
    migrate_parser.add_argument(
        "paths",
        nargs="*",
        help="Schema files, applied in order (defaults to MIGRATION_PATHS)",
    )
    migrate_parser.add_argument(
        "--endpoint-url",
        default=None,
        help="DynamoDB endpoint URL (e.g., http://localhost:8000)",
    )
    migrate_parser.add_argument("--region", default=None, help="AWS region")
    migrate_parser.add_argument(
        "--no-wait",
        action="store_true",
        help="Don't wait for tables to become active or deleted",
    )
    migrate_parser.set_defaults(handler=run_migrate)

    # Encode command
    encode_parser = subparsers.add_parser(
        "encode", help="Print encoded seed items without calling DynamoDB"
    )
    encode_parser.add_argument("path", help="Schema file")
    encode_parser.add_argument("--indent", type=int, default=2, help="JSON indent")
    encode_parser.set_defaults(handler=run_encode)

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(args.log_level)

    try:
        args.handler(args)
    except MigrationToolError as e:
        print(f"\n❌ Error: {e}\n", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
