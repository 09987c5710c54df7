"""
Log filters that add request context to records.

The correlation id lives in a ``ContextVar`` so it follows asyncio tasks as
well as threads: concurrent requests on one event loop keep their own ids.
"""

import logging
from contextvars import ContextVar, Token
from typing import Dict, Any, Optional


_correlation_id: ContextVar[Optional[str]] = ContextVar("elastic_client_correlation_id", default=None)


def set_correlation_id(correlation_id: str) -> Token:
    """
    Set correlation ID for the current context.

    Returns:
        Token to pass to :func:`reset_correlation_id`
    """
    return _correlation_id.set(correlation_id)


def get_correlation_id() -> Optional[str]:
    """Correlation ID of the current context, or None."""
    return _correlation_id.get()


def reset_correlation_id(token: Token) -> None:
    """Restore the correlation ID that was current before ``set_correlation_id``."""
    _correlation_id.reset(token)


class CorrelationIdFilter(logging.Filter):
    """
    Adds ``correlation_id`` to records logged while a request is in flight.

    Example:
        >>> handler.addFilter(CorrelationIdFilter())
        >>> token = set_correlation_id("req-12345")
        >>> logger.info("Request started")  # correlation_id=req-12345
        >>> reset_correlation_id(token)
    """

    def filter(self, record: logging.LogRecord) -> bool:
        correlation_id = get_correlation_id()
        if correlation_id:
            record.correlation_id = correlation_id
        return True


class ExtraFieldsFilter(logging.Filter):
    """
    Adds static fields (service, environment, ...) to every record.

    Fields already set on a record are not overwritten.
    """

    def __init__(self, extra_fields: Dict[str, Any]):
        super().__init__()
        self.extra_fields = extra_fields

    def filter(self, record: logging.LogRecord) -> bool:
        for key, value in self.extra_fields.items():
            if not hasattr(record, key):
                setattr(record, key, value)
        return True
