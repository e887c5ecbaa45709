"""
Custom exceptions for dynamo-migrate.

Encoder errors describe structural problems in seed data and are never
retried. Service errors carry the DynamoDB error code so callers can
decide how to report them.
"""
from typing import Optional


class MigrationToolError(Exception):
    """Base exception for all dynamo-migrate errors."""
    pass


# Attribute value encoding

class EncodeError(MigrationToolError):
    """
    Base exception for attribute value encoding failures.

    ``path`` points at the failing value inside the encoded structure,
    e.g. ``$.tags[2]``.
    """

    def __init__(self, message: str, path: str = "$"):
        self.path = path
        self.reason = message
        super().__init__(f"{message} (at {path})")


class UnsupportedTypeError(EncodeError):
    """The value's runtime type has no attribute value encoding."""

    def __init__(self, type_name: str, path: str = "$", detail: Optional[str] = None):
        self.type_name = type_name
        message = f"({type_name}) is not a supported type"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message, path)


class TypeMismatchError(EncodeError):
    """A container value does not have the shape its type implies."""
    pass


class NestingDepthError(EncodeError):
    """Value is nested deeper than the configured maximum."""

    def __init__(self, max_depth: int, path: str = "$"):
        self.max_depth = max_depth
        super().__init__(f"nesting depth exceeds maximum of {max_depth}", path)


# Schema loading

class SchemaError(MigrationToolError):
    """Schema file could not be used."""
    pass


class SchemaLoadError(SchemaError):
    """Schema file could not be read or parsed."""

    def __init__(self, path: str, message: str):
        self.path = path
        super().__init__(message)


class SchemaValidationError(SchemaError):
    """Schema file was parsed but its content is invalid."""
    pass


# DynamoDB service

class DynamoDBError(MigrationToolError):
    """
    Base exception for DynamoDB API errors.

    Carries error code and message returned by the service.
    """

    def __init__(self, error_code: str, error_message: str):
        self.error_code = error_code
        self.error_message = error_message
        super().__init__(f"[{error_code}] {error_message}")


class TableNotFoundError(DynamoDBError):
    """Table does not exist."""

    def __init__(self, error_message: str):
        super().__init__("ResourceNotFoundException", error_message)


class TableInUseError(DynamoDBError):
    """Table already exists or is being created/deleted."""

    def __init__(self, error_message: str):
        super().__init__("ResourceInUseException", error_message)


class ThrottlingError(DynamoDBError):
    """Request rate or throughput exceeded."""

    def __init__(self, error_message: str, error_code: str = "ThrottlingException"):
        super().__init__(error_code, error_message)


class ValidationError(DynamoDBError):
    """Request rejected by service-side validation."""

    def __init__(self, error_message: str):
        super().__init__("ValidationException", error_message)


class AccessDeniedError(DynamoDBError):
    """Credentials lack permission for the operation."""

    def __init__(self, error_message: str):
        super().__init__("AccessDeniedException", error_message)


def map_client_error(error_code: str, error_message: str) -> DynamoDBError:
    """
    Map a DynamoDB error code to the appropriate exception.

    Args:
        error_code: DynamoDB error code (e.g., 'ResourceNotFoundException')
        error_message: Error message from DynamoDB

    Returns:
        Appropriate DynamoDBError subclass
    """
    if error_code in (
        "ThrottlingException",
        "ProvisionedThroughputExceededException",
        "RequestLimitExceeded",
    ):
        return ThrottlingError(error_message, error_code)

    error_mapping = {
        "ResourceNotFoundException": TableNotFoundError,
        "ResourceInUseException": TableInUseError,
        "ValidationException": ValidationError,
        "AccessDeniedException": AccessDeniedError,
    }

    exception_class = error_mapping.get(error_code)
    if exception_class:
        return exception_class(error_message)

    # Default to generic DynamoDBError
    return DynamoDBError(error_code=error_code, error_message=error_message)


# Migration driver

class SeedItemError(MigrationToolError):
    """A seed item could not be written; seeding stopped at this item."""

    def __init__(self, table: str, item_index: int, error: Exception):
        self.table = table
        self.item_index = item_index
        self.error = error
        super().__init__(f"Seeding '{table}' failed at item {item_index}: {error}")


class MigrationError(MigrationToolError):
    """A schema file failed to import; remaining files were not applied."""

    def __init__(self, path: str, error: Exception):
        self.path = path
        self.error = error
        super().__init__(f"Migration '{path}' failed: {error}")
