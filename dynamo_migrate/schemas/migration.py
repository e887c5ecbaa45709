"""
Pydantic models for migration schema files.

A schema file describes one DynamoDB table: its columns and keys,
secondary indexes, throughput and optional seed items. Keys are
camelCase, e.g.::

    {
        "table": "users",
        "dropIfExists": true,
        "provisionedThroughput": {"readCapacityUnits": 5, "writeCapacityUnits": 5},
        "columns": [{"name": "id", "type": "S", "index": true, "hash": true}],
        "items": [{"id": "u-1", "name": "Ada"}]
    }
"""
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class SchemaModel(BaseModel):
    """Base model accepting camelCase keys and ignoring unknown ones."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class ProvisionedThroughput(SchemaModel):
    """Read/write capacity units."""
    read_capacity_units: int = Field(default=0, ge=0, alias="readCapacityUnits")
    write_capacity_units: int = Field(default=0, ge=0, alias="writeCapacityUnits")


class Column(SchemaModel):
    """Table attribute; indexed columns become attribute definitions."""
    name: str
    type: Optional[Literal["S", "N", "B"]] = None
    index: bool = False
    hash: bool = False
    range: bool = False

    @model_validator(mode="after")
    def check_key_flags(self):
        if self.hash and self.range:
            raise ValueError(f"column '{self.name}' cannot be both hash and range key")
        return self


class Projection(SchemaModel):
    """Attributes copied into a secondary index."""
    type: Literal["ALL", "KEYS_ONLY", "INCLUDE"]
    non_keys: Optional[List[str]] = Field(default=None, alias="nonKeys")


class LocalIndex(SchemaModel):
    """Local secondary index definition."""
    name: str
    projection: Projection
    keys: List[Column] = Field(default_factory=list)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        if not v:
            raise ValueError("name of index must be specified")
        return v


class GlobalIndex(LocalIndex):
    """Global secondary index definition."""
    provisioned_throughput: ProvisionedThroughput = Field(
        default_factory=ProvisionedThroughput, alias="provisionedThroughput"
    )


class TableSchema(SchemaModel):
    """Full description of one table migration."""
    table: str
    drop_if_exists: bool = Field(default=False, alias="dropIfExists")
    billing_mode: Literal["PROVISIONED", "PAY_PER_REQUEST"] = Field(
        default="PROVISIONED", alias="billingMode"
    )
    provisioned_throughput: ProvisionedThroughput = Field(
        default_factory=ProvisionedThroughput, alias="provisionedThroughput"
    )
    columns: List[Column] = Field(default_factory=list)
    global_indexes: List[GlobalIndex] = Field(default_factory=list, alias="globalIndexes")
    local_indexes: List[LocalIndex] = Field(default_factory=list, alias="localIndexes")
    # Seed items stay untyped; they are encoded at seeding time
    items: List[Dict[str, Any]] = Field(default_factory=list)

    @field_validator("table")
    @classmethod
    def validate_table(cls, v):
        """Table name is required."""
        if not v:
            raise ValueError("table must be specified")
        return v

    @model_validator(mode="after")
    def check_indexed_columns(self):
        for column in self.columns:
            if column.index and column.type is None:
                raise ValueError(f"indexed column '{column.name}' must declare a type")
        return self


class ImportResult(BaseModel):
    """Outcome of importing one schema file."""
    table: str
    path: Optional[str] = None
    dropped: bool = False
    created: bool = False
    items_written: int = 0
