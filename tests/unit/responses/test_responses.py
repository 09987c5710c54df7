"""
Tests for typed response models.
"""

import pytest

from elastic_client.responses import (
    CommandResponse,
    GetResponse,
    Hit,
    IndexResponse,
    JsonResponse,
    PingResponse,
    SearchResponse,
)
from elastic_client.responses.base import Response


class TestPredicates:

    def test_default_predicate(self):
        assert JsonResponse.is_ok(500, {"acknowledged": True})
        assert JsonResponse.is_ok(200, [1, 2])
        assert not JsonResponse.is_ok(200, {"error": "boom"})

    def test_get_response_found_key_wins(self):
        assert GetResponse.is_ok(404, {"found": False})
        assert not GetResponse.is_ok(404, {"error": {"type": "index_not_found_exception"}})

    def test_base_from_body_not_implemented(self):
        with pytest.raises(NotImplementedError):
            Response.from_body({})


class TestGetResponse:

    def test_found(self, found_body):
        res = GetResponse.from_body(found_body)
        assert (res.index, res.id, res.ty, res.version) == ("bank", "1", "_doc", 3)
        assert res.into_document() == found_body["_source"]

    def test_not_found_minimal(self):
        res = GetResponse.from_body({"found": False})
        assert res.index is None
        assert res.into_document() is None

    def test_numeric_id_stringified(self):
        assert GetResponse.from_body({"_index": "bank", "_id": 5, "found": False}).id == "5"


class TestIndexResponse:

    def test_result_created(self):
        res = IndexResponse.from_body({"_index": "bank", "_id": "1", "result": "created", "_version": 1})
        assert res.created is True

    def test_result_updated(self):
        res = IndexResponse.from_body({"_index": "bank", "_id": "1", "result": "updated", "_version": 2})
        assert res.created is False

    def test_legacy_created_flag(self):
        res = IndexResponse.from_body({"_index": "bank", "_type": "account", "_id": "1", "created": True})
        assert res.created is True
        assert res.ty == "account"


class TestSearchResponse:

    def test_total_object(self, search_body):
        res = SearchResponse.from_body(search_body)
        assert res.total == 2
        assert res.max_score == 1.0
        assert res.hits[1] == Hit("bank", "6", 0.5, None, {"firstname": "Hattie"})
        assert len(res) == 2

    def test_total_number(self):
        res = SearchResponse.from_body({"took": 1, "timed_out": False, "hits": {"total": 7, "hits": []}})
        assert res.total == 7
        assert list(res.documents()) == []

    def test_aggregations(self):
        body = {"took": 1, "timed_out": False, "hits": {"total": 0, "hits": []},
                "aggregations": {"by_state": {"buckets": []}}}
        assert SearchResponse.from_body(body).aggregations == {"by_state": {"buckets": []}}

    def test_missing_hits(self):
        with pytest.raises(KeyError):
            SearchResponse.from_body({"took": 1, "timed_out": False})


class TestCommandResponses:

    def test_command(self):
        assert CommandResponse.from_body({"acknowledged": False}).acknowledged is False

    def test_ping(self):
        res = PingResponse.from_body({"name": "n", "cluster_name": "c", "version": {"number": "5.6.16"}})
        assert res.version == "5.6.16"
        assert res.tagline is None
