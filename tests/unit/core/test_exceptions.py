"""
Tests for the exception hierarchy and transport exception conversion.
"""

import httpx
import pytest
import requests

from elastic_client.core.exceptions import (
    AlreadyConsumedError,
    ApiError,
    BuildError,
    ClientError,
    ConnectionError,
    ElasticClientException,
    IndexNotFoundError,
    OtherApiError,
    RequestError,
    ResponseError,
    ResponseTooLargeError,
    TimeoutError,
    classify_httpx_exception,
    classify_requests_exception,
)


class TestHierarchy:
    """Test the two branches of the hierarchy."""

    def test_api_error_branch(self):
        exc = IndexNotFoundError("bank", "no such index", 404)
        assert isinstance(exc, ApiError)
        assert isinstance(exc, ElasticClientException)
        assert not isinstance(exc, ClientError)

    @pytest.mark.parametrize("exc", [
        BuildError(),
        RequestError(),
        TimeoutError(),
        ConnectionError(),
        ResponseError(500),
        ResponseTooLargeError(200, 10, 5),
    ])
    def test_client_error_branch(self, exc):
        assert isinstance(exc, ClientError)
        assert not isinstance(exc, ApiError)

    def test_timeout_is_request_error(self):
        assert issubclass(TimeoutError, RequestError)
        assert issubclass(ConnectionError, RequestError)

    def test_already_consumed(self):
        assert issubclass(AlreadyConsumedError, ElasticClientException)
        assert AlreadyConsumedError.fatal

    def test_retryable_flags(self):
        assert TimeoutError.retryable
        assert ConnectionError.retryable
        assert not ApiError.retryable
        assert not ResponseError.retryable


class TestMessages:
    """Test exception messages and attributes."""

    def test_api_error_message(self):
        exc = OtherApiError("search_phase_execution_exception", "all shards failed", 500, {"error": {}})
        assert str(exc) == "API error returned from Elasticsearch: search_phase_execution_exception: all shards failed (status: 500)"
        assert exc.body == {"error": {}}

    def test_client_error_keeps_cause(self):
        cause = ValueError("bad")
        exc = BuildError(cause=cause)
        assert exc.cause is cause
        assert str(exc) == "error attempting to build a client. Caused by: bad"

    def test_request_error_url(self):
        exc = RequestError("error sending a request", url="http://es:9200/_search")
        assert "http://es:9200/_search" in str(exc)
        assert exc.url == "http://es:9200/_search"

    def test_timeout_type(self):
        exc = TimeoutError("request timed out", "http://es:9200/", timeout_type="connect")
        assert exc.timeout_type == "connect"
        assert "connect timeout" in str(exc)

    def test_response_error_status(self):
        exc = ResponseError(503)
        assert exc.status == 503
        assert str(exc) == "error receiving a response. Status code: 503"

    def test_response_too_large(self):
        exc = ResponseTooLargeError(200, 2048, 1024)
        assert isinstance(exc, ResponseError)
        assert (exc.size, exc.max_size, exc.status) == (2048, 1024, 200)


class TestClassifyRequestsException:
    """Test conversion of requests exceptions."""

    URL = "http://localhost:9200/_search"

    def test_connect_timeout(self):
        exc = classify_requests_exception(requests.exceptions.ConnectTimeout(), self.URL)
        assert isinstance(exc, TimeoutError)
        assert exc.timeout_type == "connect"

    def test_read_timeout(self):
        exc = classify_requests_exception(requests.exceptions.ReadTimeout(), self.URL)
        assert isinstance(exc, TimeoutError)
        assert exc.timeout_type == "read"

    def test_connection_error(self):
        original = requests.exceptions.ConnectionError("refused")
        exc = classify_requests_exception(original, self.URL)
        assert isinstance(exc, ConnectionError)
        assert exc.cause is original
        assert exc.url == self.URL

    def test_invalid_url(self):
        exc = classify_requests_exception(requests.exceptions.InvalidURL("bad"), self.URL)
        assert type(exc) is RequestError

    def test_other(self):
        exc = classify_requests_exception(requests.exceptions.RequestException("?"), self.URL)
        assert type(exc) is RequestError


class TestClassifyHttpxException:
    """Test conversion of httpx exceptions."""

    URL = "http://localhost:9200/_search"

    def test_connect_timeout(self):
        exc = classify_httpx_exception(httpx.ConnectTimeout("slow"), self.URL)
        assert isinstance(exc, TimeoutError)
        assert exc.timeout_type == "connect"

    def test_read_timeout(self):
        exc = classify_httpx_exception(httpx.ReadTimeout("slow"), self.URL)
        assert exc.timeout_type == "read"

    def test_connect_error(self):
        exc = classify_httpx_exception(httpx.ConnectError("refused"), self.URL)
        assert isinstance(exc, ConnectionError)

    def test_unsupported_protocol(self):
        exc = classify_httpx_exception(httpx.UnsupportedProtocol("ftp"), self.URL)
        assert type(exc) is RequestError
