"""
Logging for the Elasticsearch client.

Example:
    >>> from elastic_client import SyncClient, ClientConfig, LoggingConfig
    >>>
    >>> config = ClientConfig.create(
    ...     logging=LoggingConfig.create(level="DEBUG", format="json")
    ... )
    >>> client = SyncClient(config=config)
"""

from .config import LoggingConfig, LogLevel, LogFormat
from .logger import ClientLogger, ROOT_LOGGER_NAME
from .formatters import JSONFormatter, TextFormatter, get_formatter
from .filters import (
    CorrelationIdFilter,
    ExtraFieldsFilter,
    set_correlation_id,
    get_correlation_id,
    reset_correlation_id,
)
from .handlers import build_handlers

__all__ = [
    # Config
    "LoggingConfig",
    "LogLevel",
    "LogFormat",
    # Logger
    "ClientLogger",
    "ROOT_LOGGER_NAME",
    # Formatters
    "JSONFormatter",
    "TextFormatter",
    "get_formatter",
    # Filters
    "CorrelationIdFilter",
    "ExtraFieldsFilter",
    "set_correlation_id",
    "get_correlation_id",
    "reset_correlation_id",
    # Handlers
    "build_handlers",
]
