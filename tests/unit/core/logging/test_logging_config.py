"""
Tests for LoggingConfig.
"""

import logging
from logging.handlers import RotatingFileHandler

import pytest

from elastic_client.core.logging.config import LoggingConfig, LogLevel, LogFormat
from elastic_client.core.logging.filters import CorrelationIdFilter
from elastic_client.core.logging.formatters import JSONFormatter
from elastic_client.core.logging.handlers import build_handlers


class TestLoggingConfig:

    def test_defaults(self):
        config = LoggingConfig()
        assert config.level == LogLevel.INFO
        assert config.format == LogFormat.TEXT
        assert config.enable_console
        assert config.enable_correlation_id

    def test_create_normalizes_case(self):
        config = LoggingConfig.create(level="debug", format="JSON")
        assert config.level == LogLevel.DEBUG
        assert config.format == LogFormat.JSON

    def test_unknown_format(self):
        with pytest.raises(ValueError):
            LoggingConfig.create(format="colored")

    def test_file_requires_path(self):
        with pytest.raises(ValueError, match="file_path"):
            LoggingConfig(enable_file=True)

    def test_create_passes_options(self):
        config = LoggingConfig.create(log_headers=True, extra_fields={"service": "indexer"})
        assert config.log_headers
        assert config.extra_fields == {"service": "indexer"}

    def test_negative_rotation(self, tmp_path):
        with pytest.raises(ValueError):
            LoggingConfig(enable_file=True, file_path=str(tmp_path / "a.log"), backup_count=-1)

    def test_numeric_level(self):
        assert LogLevel.DEBUG.numeric == logging.DEBUG
        assert LogLevel.CRITICAL.numeric == logging.CRITICAL


class TestBuildHandlers:

    def test_console_only(self):
        handlers = build_handlers(LoggingConfig())
        assert len(handlers) == 1
        assert isinstance(handlers[0], logging.StreamHandler)
        assert handlers[0].level == logging.INFO

    def test_file_creates_directory(self, tmp_path):
        path = tmp_path / "nested" / "dir" / "client.log"
        config = LoggingConfig.create(
            level="error", format="json", enable_console=False,
            enable_file=True, file_path=str(path), max_bytes=1024,
        )

        handlers = build_handlers(config, [CorrelationIdFilter()])
        try:
            assert path.parent.is_dir()
            (handler,) = handlers
            assert isinstance(handler, RotatingFileHandler)
            assert handler.maxBytes == 1024
            assert handler.level == logging.ERROR
            assert isinstance(handler.formatter, JSONFormatter)
            assert isinstance(handler.filters[0], CorrelationIdFilter)
        finally:
            for handler in handlers:
                handler.close()
