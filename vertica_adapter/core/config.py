"""vertica_adapter configuration management.

This module centralizes all configuration loading from environment variables
and provides sensible defaults. All modules should import configuration
values from here rather than reading environment variables directly.

Environment Variables:
    VERTICA_ADAPTER_LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
                               Default: INFO

    VERTICA_ADAPTER_LOG_FORMAT: Log output format (text, json)
                                Default: text

    VERTICA_ADAPTER_CONNECTION_TIMEOUT: Driver connection timeout in seconds
                                        Default: 30

    VERTICA_ADAPTER_POOL_SIZE: Connections kept open by the pool
                               Default: 5

    VERTICA_ADAPTER_MAX_OVERFLOW: Extra connections allowed above pool size
                                  Default: 10

    VERTICA_ADAPTER_POOL_TIMEOUT: Seconds to wait for a free connection
                                  Default: 30

    VERTICA_ADAPTER_COPY_BUFFER_SIZE: Bytes handed to the driver per COPY read
                                      Default: 131072

    VERTICA_ADAPTER_COPY_ENCODING: Encoding used for COPY records
                                   Default: utf-8
"""

from __future__ import annotations

import codecs
import json
import logging
import os
from dataclasses import dataclass, field


def _get_int(key: str, default: int) -> int:
    """Get integer from environment variable."""
    value = os.environ.get(key, "")
    if not value:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _get_str(key: str, default: str) -> str:
    """Get string from environment variable."""
    return os.environ.get(key, default)


@dataclass
class AdapterConfig:
    """Adapter configuration container.

    All configuration values are loaded from environment variables
    with sensible defaults.

    Usage:
        from vertica_adapter.core.config import config

        pool_size = config.pool_size
        timeout = config.connection_timeout
    """

    # Logging Configuration
    log_level: str = field(default_factory=lambda: _get_str("VERTICA_ADAPTER_LOG_LEVEL", "INFO").upper())
    log_format: str = field(default_factory=lambda: _get_str("VERTICA_ADAPTER_LOG_FORMAT", "text"))

    # Connection/Pool Configuration
    connection_timeout: int = field(default_factory=lambda: _get_int("VERTICA_ADAPTER_CONNECTION_TIMEOUT", 30))
    pool_size: int = field(default_factory=lambda: _get_int("VERTICA_ADAPTER_POOL_SIZE", 5))
    max_overflow: int = field(default_factory=lambda: _get_int("VERTICA_ADAPTER_MAX_OVERFLOW", 10))
    pool_timeout: int = field(default_factory=lambda: _get_int("VERTICA_ADAPTER_POOL_TIMEOUT", 30))

    # Bulk Load Configuration
    copy_buffer_size: int = field(default_factory=lambda: _get_int("VERTICA_ADAPTER_COPY_BUFFER_SIZE", 131072))
    copy_encoding: str = field(default_factory=lambda: _get_str("VERTICA_ADAPTER_COPY_ENCODING", "utf-8"))

    def __post_init__(self):
        """Validate configuration after initialization."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if self.log_level not in valid_levels:
            raise ValueError(
                f"Invalid VERTICA_ADAPTER_LOG_LEVEL: {self.log_level}. "
                f"Must be one of: {valid_levels}"
            )

        valid_formats = {"text", "json"}
        if self.log_format not in valid_formats:
            raise ValueError(
                f"Invalid VERTICA_ADAPTER_LOG_FORMAT: {self.log_format}. "
                f"Must be one of: {valid_formats}"
            )

        if self.connection_timeout < 1:
            raise ValueError(
                f"VERTICA_ADAPTER_CONNECTION_TIMEOUT must be >= 1, got {self.connection_timeout}"
            )

        if self.pool_size < 1:
            raise ValueError(f"VERTICA_ADAPTER_POOL_SIZE must be >= 1, got {self.pool_size}")

        if self.max_overflow < 0:
            raise ValueError(f"VERTICA_ADAPTER_MAX_OVERFLOW must be >= 0, got {self.max_overflow}")

        if self.pool_timeout < 1:
            raise ValueError(f"VERTICA_ADAPTER_POOL_TIMEOUT must be >= 1, got {self.pool_timeout}")

        if self.copy_buffer_size < 1:
            raise ValueError(
                f"VERTICA_ADAPTER_COPY_BUFFER_SIZE must be >= 1, got {self.copy_buffer_size}"
            )

        try:
            codecs.lookup(self.copy_encoding)
        except LookupError:
            raise ValueError(f"Unknown VERTICA_ADAPTER_COPY_ENCODING: {self.copy_encoding}")

    def as_dict(self) -> dict:
        """Export configuration as dictionary.

        Returns:
            Dictionary of all configuration values
        """
        return {
            "log_level": self.log_level,
            "log_format": self.log_format,
            "connection_timeout": self.connection_timeout,
            "pool_size": self.pool_size,
            "max_overflow": self.max_overflow,
            "pool_timeout": self.pool_timeout,
            "copy_buffer_size": self.copy_buffer_size,
            "copy_encoding": self.copy_encoding,
        }


class JSONFormatter(logging.Formatter):
    """Render log records as one JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload)


def configure_logging(cfg: AdapterConfig | None = None) -> logging.Logger:
    """Attach a handler to the package logger using the configured level and format.

    Calling it again replaces the handler rather than stacking a new one.

    Args:
        cfg: Configuration to apply (defaults to the module-level config)

    Returns:
        The package logger
    """
    cfg = cfg or config
    logger = logging.getLogger("vertica_adapter")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    handler = logging.StreamHandler()
    if cfg.log_format == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )
    logger.addHandler(handler)
    logger.setLevel(cfg.log_level)
    return logger


def load_config() -> AdapterConfig:
    """Load configuration from environment.

    Returns:
        New AdapterConfig instance
    """
    return AdapterConfig()


# Global configuration instance - loaded once at import time
# Use load_config() to refresh if needed
config = load_config()
