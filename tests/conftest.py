"""
Pytest configuration and fixtures for elastic-client-core tests.
"""

import pytest
import responses as responses_lib

from elastic_client import SyncClient, RequestParams, ClientConfig
from elastic_client.core.logging.config import LoggingConfig


@pytest.fixture
def base_url():
    """Base URL for testing."""
    return "http://localhost:9200"


@pytest.fixture
def params(base_url):
    """Client-wide connection parameters."""
    return RequestParams(base_url)


@pytest.fixture
def mock_responses():
    """Mock HTTP responses using responses library."""
    with responses_lib.RequestsMock() as rsps:
        yield rsps


@pytest.fixture
def client(params):
    """Blocking client instance for testing."""
    client = SyncClient(params, ClientConfig.create(timeout=10))
    yield client
    client.close()


@pytest.fixture
def logging_config():
    """LoggingConfig with console output at DEBUG level."""
    return LoggingConfig.create(
        level="DEBUG",
        enable_console=True,
        enable_file=False
    )


@pytest.fixture
def logging_config_with_file(tmp_path):
    """
    LoggingConfig with file logging enabled.

    Uses temporary directory for log files to avoid cleanup issues.
    """
    log_file = tmp_path / "test.log"
    return LoggingConfig.create(
        level="DEBUG",
        format="json",
        enable_console=False,
        enable_file=True,
        file_path=str(log_file)
    )


# Response bodies shared by the client tests

@pytest.fixture
def found_body():
    return {
        "_index": "bank",
        "_type": "_doc",
        "_id": "1",
        "_version": 3,
        "found": True,
        "_source": {"account_number": 1, "firstname": "Amber", "city": "Brogan"},
    }


@pytest.fixture
def index_not_found_body():
    return {
        "error": {
            "root_cause": [{"type": "index_not_found_exception", "reason": "no such index", "index": "missing"}],
            "type": "index_not_found_exception",
            "reason": "no such index",
            "index": "missing",
        },
        "status": 404,
    }


@pytest.fixture
def search_body():
    return {
        "took": 3,
        "timed_out": False,
        "_shards": {"total": 1, "successful": 1, "skipped": 0, "failed": 0},
        "hits": {
            "total": {"value": 2, "relation": "eq"},
            "max_score": 1.0,
            "hits": [
                {"_index": "bank", "_id": "1", "_score": 1.0, "_source": {"firstname": "Amber"}},
                {"_index": "bank", "_id": "6", "_score": 0.5, "_source": {"firstname": "Hattie"}},
            ],
        },
    }
