"""
Application configuration management using Pydantic Settings.

Loads configuration from environment variables with validation and type safety.
"""
from functools import lru_cache
from typing import Any, List, Optional, Union

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        env_parse_none_str="null",  # Don't parse empty strings as None
    )

    # Application Settings
    app_name: str = Field(default="dynamo-migrate", alias="APP_NAME")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # AWS Settings
    aws_region: str = Field(default="us-east-1", alias="AWS_REGION")
    aws_access_key_id: Optional[str] = Field(default=None, alias="AWS_ACCESS_KEY_ID")
    aws_secret_access_key: Optional[str] = Field(
        default=None, alias="AWS_SECRET_ACCESS_KEY"
    )
    aws_session_token: Optional[str] = Field(default=None, alias="AWS_SESSION_TOKEN")

    # DynamoDB Settings
    dynamodb_endpoint_url: Optional[str] = Field(
        default=None, alias="DYNAMODB_ENDPOINT_URL"
    )
    dynamodb_timeout: int = Field(default=10, alias="DYNAMODB_TIMEOUT")  # seconds
    dynamodb_max_attempts: int = Field(default=3, alias="DYNAMODB_MAX_ATTEMPTS")
    wait_for_tables: bool = Field(default=True, alias="WAIT_FOR_TABLES")

    # Migration Settings
    max_nesting_depth: Optional[int] = Field(default=32, alias="MAX_NESTING_DEPTH")
    migration_paths: Union[str, List[str]] = Field(
        default=[], alias="MIGRATION_PATHS"
    )

    @field_validator("migration_paths", mode="before")
    @classmethod
    def parse_list_fields(cls, v: Any) -> List[str]:
        """Parse list fields from comma-separated string or return as-is."""
        if isinstance(v, str):
            # Handle comma-separated values
            return [item.strip() for item in v.split(",") if item.strip()]
        if isinstance(v, list):
            return v
        return [str(v)]

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v):
        """Validate log level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v = v.upper()
        if v not in valid_levels:
            raise ValueError(f"Log level must be one of {valid_levels}")
        return v

    @field_validator("max_nesting_depth")
    @classmethod
    def validate_max_nesting_depth(cls, v):
        """Zero or negative disables the guard."""
        if v is not None and v <= 0:
            return None
        return v


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Using lru_cache ensures settings are loaded only once.
    """
    return Settings()


# Export settings instance
settings = get_settings()
