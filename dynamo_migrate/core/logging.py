"""
Structured logging configuration.

Provides key=value structured logging with per-migration context
(schema path, table name) attached through logger adapters.
"""
import logging
import sys
from typing import Any, Dict, Optional

from dynamo_migrate.core.config import settings


class StructuredFormatter(logging.Formatter):
    """Custom formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        """
        Format log record with structured information.

        Args:
            record: Log record

        Returns:
            Formatted log string
        """
        # Base log data
        log_data = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        # Add exception info if present
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        # Migration context set through LoggerAdapter
        for key in ("path", "table", "item_index"):
            if hasattr(record, key):
                log_data[key] = getattr(record, key)

        # Format as key=value pairs
        formatted_parts = []
        for key, value in log_data.items():
            if isinstance(value, str) and " " in value:
                formatted_parts.append(f'{key}="{value}"')
            else:
                formatted_parts.append(f"{key}={value}")

        return " ".join(formatted_parts)


def setup_logging(level: Optional[str] = None):
    """
    Configure application logging.

    Args:
        level: Log level name; defaults to the LOG_LEVEL setting
    """
    level_name = (level or settings.log_level).upper()
    log_level = getattr(logging, level_name)

    # Create handler
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(log_level)

    # Set formatter
    formatter = StructuredFormatter(
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    handler.setFormatter(formatter)

    # Configure root logger
    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    # Replace a handler left by an earlier call
    for existing in list(root_logger.handlers):
        if isinstance(existing.formatter, StructuredFormatter):
            root_logger.removeHandler(existing)
    root_logger.addHandler(handler)

    # Configure specific loggers
    logging.getLogger("boto3").setLevel(logging.WARNING)
    logging.getLogger("botocore").setLevel(logging.WARNING)
    logging.getLogger("urllib3").setLevel(logging.WARNING)

    logger = logging.getLogger(__name__)
    logger.debug(f"Logging configured: level={level_name}")


def get_logger(name: str) -> logging.Logger:
    """
    Get logger instance with name.

    Args:
        name: Logger name (usually __name__)

    Returns:
        Logger instance
    """
    return logging.getLogger(name)


class LoggerAdapter(logging.LoggerAdapter):
    """Logger adapter for adding context to log messages."""

    def process(self, msg: str, kwargs: Dict[str, Any]) -> tuple:
        """
        Process log message and add context.

        Args:
            msg: Log message
            kwargs: Keyword arguments

        Returns:
            Tuple of (message, kwargs)
        """
        # Add extra context from adapter
        if "extra" not in kwargs:
            kwargs["extra"] = {}

        kwargs["extra"].update(self.extra)

        return msg, kwargs


def get_logger_with_context(name: str, **context) -> LoggerAdapter:
    """
    Get logger with context.

    Args:
        name: Logger name
        **context: Context to add to all log messages

    Returns:
        LoggerAdapter instance
    """
    logger = get_logger(name)
    return LoggerAdapter(logger, context)
