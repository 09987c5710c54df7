"""
Logging configuration for the Elasticsearch client.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Dict, Any


class LogLevel(str, Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"

    @property
    def numeric(self) -> int:
        """Matching ``logging`` level number."""
        return logging.getLevelName(self.value)


class LogFormat(str, Enum):
    JSON = "json"
    TEXT = "text"


@dataclass(frozen=True)
class LoggingConfig:
    """
    Request logging of one client.

    Every sent request produces ``Request started`` and then either
    ``Request completed`` or ``Request failed``. Records go to a logger
    owned by the client (``elastic_client.client.N``), so two clients can
    log with different settings.

    Attributes:
        level: Minimum level written
        format: ``json`` (one object per line) or ``text``
        enable_console: Write to stderr
        enable_file: Write to a rotating file at ``file_path``
        max_bytes / backup_count: Rotation of the log file
        enable_correlation_id: Send ``X-Opaque-Id`` with every request and
            add it to every record as ``correlation_id``
        log_headers: Add the request headers (credentials masked) to
            ``Request started``
        extra_fields: Static fields added to every record, e.g. the service name

    Example:
        >>> config = LoggingConfig.create(level="DEBUG", format="json",
        ...                               extra_fields={"service": "indexer"})
    """

    level: LogLevel = LogLevel.INFO
    format: LogFormat = LogFormat.TEXT
    enable_console: bool = True
    enable_file: bool = False
    file_path: Optional[str] = None
    max_bytes: int = 10 * 1024 * 1024  # 10MB
    backup_count: int = 5
    enable_correlation_id: bool = True
    log_headers: bool = False
    extra_fields: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        if self.enable_file and not self.file_path:
            raise ValueError("file_path is required when enable_file=True")
        if self.max_bytes < 0 or self.backup_count < 0:
            raise ValueError("max_bytes and backup_count must be non-negative")

    @classmethod
    def create(cls, level: str = "INFO", format: str = "text", **options: Any) -> "LoggingConfig":
        """
        Build a config from plain strings, case-insensitive.

        ``options`` are the remaining fields.

        Raises:
            ValueError: Unknown level or format
        """
        return cls(
            level=LogLevel(level.upper()),
            format=LogFormat(format.lower()),
            **options,
        )
