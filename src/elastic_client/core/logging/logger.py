"""
Client logger.

Every client owns its own ``ClientLogger``. Two clients with different
logging configs don't overwrite each other's handlers: each one gets a
distinct child of the ``elastic_client`` logger.
"""

import itertools
import logging
from typing import Optional, Any

from .config import LoggingConfig
from .filters import CorrelationIdFilter, ExtraFieldsFilter
from .handlers import build_handlers
from ...utils.sanitizer import mask_sensitive_data

ROOT_LOGGER_NAME = "elastic_client"

_instance_counter = itertools.count(1)


class ClientLogger:
    """
    Structured logger for one client.

    Keyword arguments of the log methods become fields on the record, after
    credentials are masked.

    Example:
        >>> config = LoggingConfig.create(level="DEBUG", format="json")
        >>> logger = ClientLogger(config)
        >>> logger.info("Request started", method="GET", url="http://localhost:9200/_search")
        >>> logger.close()
    """

    def __init__(self, config: Optional[LoggingConfig] = None, name: Optional[str] = None):
        """
        Args:
            config: Logging configuration (uses defaults if None)
            name: Logger name. Defaults to a unique child of ``elastic_client``
        """
        self.config = config or LoggingConfig()
        self.name = name or f"{ROOT_LOGGER_NAME}.client.{next(_instance_counter)}"
        self._closed = False

        self._logger = logging.getLogger(self.name)
        self._logger.setLevel(self.config.level.numeric)
        self._logger.propagate = False
        self._logger.handlers.clear()

        filters = []
        if self.config.enable_correlation_id:
            filters.append(CorrelationIdFilter())
        if self.config.extra_fields:
            filters.append(ExtraFieldsFilter(self.config.extra_fields))

        for handler in build_handlers(self.config, filters):
            self._logger.addHandler(handler)

    @property
    def logger(self) -> logging.Logger:
        """Underlying ``logging.Logger``."""
        return self._logger

    @property
    def closed(self) -> bool:
        return self._closed

    def _log(self, level: int, message: str, fields: dict, exc_info: bool = False) -> None:
        self._logger.log(level, message, extra=mask_sensitive_data(fields), exc_info=exc_info)

    def debug(self, message: str, **kwargs: Any) -> None:
        self._log(logging.DEBUG, message, kwargs)

    def info(self, message: str, **kwargs: Any) -> None:
        """
        Log info message.

        Example:
            >>> logger.info("Request completed", status=200, duration_ms=15.2)
        """
        self._log(logging.INFO, message, kwargs)

    def warning(self, message: str, **kwargs: Any) -> None:
        self._log(logging.WARNING, message, kwargs)

    def error(self, message: str, **kwargs: Any) -> None:
        """
        Log error message.

        Example:
            >>> logger.error("Request failed", error_type="ConnectionError")
        """
        self._log(logging.ERROR, message, kwargs)

    def exception(self, message: str, **kwargs: Any) -> None:
        """Log error message with the current exception's traceback."""
        self._log(logging.ERROR, message, kwargs, exc_info=True)

    def close(self) -> None:
        """
        Flush and close all handlers. Safe to call more than once.
        """
        if self._closed:
            return

        for handler in list(self._logger.handlers):
            handler.flush()
            handler.close()
            self._logger.removeHandler(handler)

        self._closed = True

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False
