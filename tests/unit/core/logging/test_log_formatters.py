"""
Tests for log formatters.
"""

import json
import logging
import sys

import pytest

from elastic_client.core.logging.formatters import JSONFormatter, TextFormatter, get_formatter


def _record(**extra):
    record = logging.LogRecord("elastic_client.test", logging.INFO, __file__, 10, "Request completed", None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestJSONFormatter:

    def test_fields(self):
        data = json.loads(JSONFormatter().format(_record(status=200, method="GET")))
        assert data["message"] == "Request completed"
        assert data["level"] == "INFO"
        assert data["logger"] == "elastic_client.test"
        assert data["status"] == 200
        assert data["method"] == "GET"
        assert "timestamp" in data

    def test_exception(self):
        try:
            raise ValueError("boom")
        except ValueError:
            record = logging.LogRecord("x", logging.ERROR, __file__, 1, "failed", None, sys.exc_info())
        data = json.loads(JSONFormatter().format(record))
        assert "ValueError: boom" in data["exception"]

    def test_non_serializable_extra(self):
        data = json.loads(JSONFormatter().format(_record(payload=object())))
        assert data["payload"].startswith("<object")


class TestTextFormatter:

    def test_extra_appended(self):
        line = TextFormatter().format(_record(status=404))
        assert "[INFO] [elastic_client.test] Request completed" in line
        assert line.endswith("status=404")


class TestGetFormatter:

    @pytest.mark.parametrize("name,cls", [("json", JSONFormatter), ("TEXT", TextFormatter)])
    def test_known(self, name, cls):
        assert isinstance(get_formatter(name), cls)

    def test_unknown(self):
        with pytest.raises(ValueError, match="Unknown format type"):
            get_formatter("xml")
