"""
Tests for response classification.
"""

import json

import pytest

from elastic_client.core.classifier import decode_body, parse_api_error, parse_response
from elastic_client.core.exceptions import (
    ActionRequestValidationError,
    ApiError,
    DocumentMissingError,
    IndexAlreadyExistsError,
    IndexNotFoundError,
    MapperParsingError,
    OtherApiError,
    ParsingError,
    ResponseError,
)
from elastic_client.responses import GetResponse, JsonResponse, SearchResponse


def _body(data) -> bytes:
    return json.dumps(data).encode("utf-8")


def _error(error_type, **fields):
    return {"error": dict(type=error_type, reason="something went wrong", **fields), "status": 400}


class TestDecodeBody:
    """A body that is not JSON is always a ResponseError."""

    def test_valid(self):
        assert decode_body(200, b'{"a": 1}') == {"a": 1}

    @pytest.mark.parametrize("body", [b"", b"Service Unavailable", b"\xff\xfe\x00", b"{not json"])
    def test_invalid(self, body):
        with pytest.raises(ResponseError) as exc_info:
            decode_body(503, body)
        assert exc_info.value.status == 503
        assert exc_info.value.cause is not None


class TestParseApiError:
    """Test error type dispatch."""

    def test_index_not_found(self):
        error = parse_api_error(404, _error("index_not_found_exception", index="missing"))
        assert isinstance(error, IndexNotFoundError)
        assert error.index == "missing"
        assert error.status == 404
        assert error.reason == "something went wrong"

    def test_index_not_found_resource_id(self):
        error = parse_api_error(404, _error("index_not_found_exception", **{"resource.id": "logs"}))
        assert error.index == "logs"

    @pytest.mark.parametrize("error_type", ["index_already_exists_exception", "resource_already_exists_exception"])
    def test_index_already_exists(self, error_type):
        error = parse_api_error(400, _error(error_type, index="bank"))
        assert isinstance(error, IndexAlreadyExistsError)
        assert error.index == "bank"
        assert error.error_type == error_type

    def test_document_missing(self):
        error = parse_api_error(404, _error("document_missing_exception", index="bank"))
        assert isinstance(error, DocumentMissingError)
        assert error.index == "bank"

    def test_parsing(self):
        error = parse_api_error(400, _error("parsing_exception", line=1, col=12))
        assert isinstance(error, ParsingError)
        assert (error.line, error.col) == (1, 12)

    def test_mapper_parsing(self):
        assert isinstance(parse_api_error(400, _error("mapper_parsing_exception")), MapperParsingError)

    def test_action_request_validation(self):
        error = parse_api_error(400, _error("action_request_validation_exception"))
        assert isinstance(error, ActionRequestValidationError)

    def test_unknown_type(self):
        body = _error("search_phase_execution_exception")
        error = parse_api_error(500, body)
        assert isinstance(error, OtherApiError)
        assert error.error_type == "search_phase_execution_exception"
        assert error.body == body

    def test_string_error(self):
        error = parse_api_error(400, {"error": "IndexMissingException[[bank] missing]", "status": 404})
        assert isinstance(error, OtherApiError)
        assert error.reason == "IndexMissingException[[bank] missing]"

    def test_missing_type(self):
        error = parse_api_error(500, {"error": {"reason": "boom"}})
        assert isinstance(error, OtherApiError)
        assert error.error_type == "unknown"

    @pytest.mark.parametrize("body", [{"status": 500}, [1, 2], "text", {"error": 42}])
    def test_not_an_error(self, body):
        with pytest.raises(ResponseError):
            parse_api_error(500, body)


class TestParseResponse:
    """The payload decides, not the status code."""

    def test_success(self):
        assert parse_response(200, b'{"a": 1}', JsonResponse) == {"a": 1}

    def test_success_equals_direct_decoding(self, search_body):
        result = parse_response(200, _body(search_body), SearchResponse)
        assert result == SearchResponse.from_body(search_body)

    def test_error_payload_with_2xx_raises(self):
        with pytest.raises(IndexNotFoundError):
            parse_response(200, _body(_error("index_not_found_exception", index="x")), JsonResponse)

    def test_non_2xx_success_payload_returned(self):
        result = parse_response(404, _body({"_index": "bank", "_id": "9", "found": False}), GetResponse)
        assert result.found is False

    def test_api_error_is_raised_for_any_status(self):
        for status in (200, 400, 404, 500):
            with pytest.raises(ApiError):
                parse_response(status, _body(_error("parsing_exception")), JsonResponse)

    def test_non_json_never_api_error(self):
        with pytest.raises(ResponseError) as exc_info:
            parse_response(503, b"<html>Service Unavailable</html>", JsonResponse)
        assert not isinstance(exc_info.value, ApiError)
        assert exc_info.value.status == 503

    def test_shape_mismatch_is_response_error(self):
        with pytest.raises(ResponseError) as exc_info:
            parse_response(200, b'{"acknowledged": true}', SearchResponse)
        assert isinstance(exc_info.value.__cause__, KeyError)
        assert "SearchResponse" in str(exc_info.value)

    def test_failure_without_error_key(self):
        class StrictResponse(JsonResponse):
            @classmethod
            def is_ok(cls, status, body):
                return 200 <= status < 300

        with pytest.raises(ResponseError):
            parse_response(502, b'{"message": "bad gateway"}', StrictResponse)
