"""
Tests for AsyncClient with respx mocks.
"""

import asyncio
import threading

import httpx
import pytest
import respx

from elastic_client import (
    AlreadyConsumedError,
    AsyncClient,
    ClientConfig,
    GetResponse,
    IndexNotFoundError,
    RequestParams,
    ResponseError,
    SearchResponse,
    get_request,
    search_request,
)
from elastic_client.core.response import AsyncResponseBuilder
from elastic_client.core.sender import AsyncSender
from elastic_client.responses.base import Response

DOC_URL = "http://localhost:9200/bank/_doc/1"


class TestAsyncClientLifecycle:

    @pytest.mark.asyncio
    async def test_context_manager(self):
        async with AsyncClient() as client:
            assert isinstance(client.sender, AsyncSender)

    @pytest.mark.asyncio
    async def test_manual_close(self):
        client = AsyncClient()
        await client.close()

    @pytest.mark.asyncio
    async def test_sync_context_manager_rejected(self):
        client = AsyncClient()
        with pytest.raises(TypeError):
            with client:
                pass
        await client.aclose()


class TestAsyncScenarios:
    """Same scenarios as the blocking client, over httpx."""

    @respx.mock
    @pytest.mark.asyncio
    async def test_found_document(self, found_body):
        respx.get(DOC_URL).mock(return_value=httpx.Response(200, json=found_body))

        async with AsyncClient() as client:
            res = await client.request(get_request("bank", 1)).send()
            assert isinstance(res, AsyncResponseBuilder)
            doc = (await res.into_response(GetResponse)).into_document()

        assert doc == found_body["_source"]

    @respx.mock
    @pytest.mark.asyncio
    async def test_missing_document(self):
        respx.get(DOC_URL).mock(return_value=httpx.Response(200, json={"found": False}))

        async with AsyncClient() as client:
            res = await client.request(get_request("bank", 1)).send()
            assert (await res.into_response(GetResponse)).into_document() is None

    @respx.mock
    @pytest.mark.asyncio
    async def test_index_not_found(self, index_not_found_body):
        respx.get("http://localhost:9200/missing/_doc/1").mock(
            return_value=httpx.Response(404, json=index_not_found_body)
        )

        async with AsyncClient() as client:
            res = await client.request(get_request("missing", 1)).send()
            with pytest.raises(IndexNotFoundError):
                await res.into_response(GetResponse)

    @respx.mock
    @pytest.mark.asyncio
    async def test_plain_text_503(self):
        respx.get(DOC_URL).mock(return_value=httpx.Response(503, text="Service Unavailable"))

        async with AsyncClient() as client:
            res = await client.request(get_request("bank", 1)).send()
            assert res.status == 503
            with pytest.raises(ResponseError) as exc_info:
                await res.into_response(GetResponse)

        assert exc_info.value.status == 503

    @respx.mock
    @pytest.mark.asyncio
    async def test_local_override_appears_once(self):
        route = respx.route(method="GET", path="/_all/_search").mock(
            return_value=httpx.Response(200, json={"took": 1, "timed_out": False, "hits": {"total": 0, "hits": []}})
        )
        params = RequestParams().url_param("size", 10)

        async with AsyncClient(params) as client:
            await (client.request(search_request())
                   .params(lambda p: p.url_param("size", 1))
                   .send_into(SearchResponse))

        query = route.calls.last.request.url.params
        assert query.get_list("size") == ["1"]


class TestAsyncClientRequests:

    @respx.mock
    @pytest.mark.asyncio
    async def test_send_twice(self):
        respx.get(DOC_URL).mock(return_value=httpx.Response(200, json={"found": False}))

        async with AsyncClient() as client:
            builder = client.request(get_request("bank", 1))
            await builder.send()
            with pytest.raises(AlreadyConsumedError):
                builder.send()

    @respx.mock
    @pytest.mark.asyncio
    async def test_concurrent_requests(self, found_body):
        respx.get(url__regex=r"http://localhost:9200/bank/_doc/\d+").mock(
            return_value=httpx.Response(200, json=found_body)
        )

        async with AsyncClient() as client:
            results = await asyncio.gather(*[
                client.get_document("bank", i).send() for i in range(5)
            ])

        assert all(r.found for r in results)
        assert len(respx.calls) == 5

    @respx.mock
    @pytest.mark.asyncio
    async def test_decoding_runs_on_worker_pool(self, found_body):
        respx.get(DOC_URL).mock(return_value=httpx.Response(200, json=found_body))
        seen = []

        class ThreadRecordingResponse(Response):
            @classmethod
            def from_body(cls, body):
                seen.append(threading.current_thread().name)
                return body

        config = ClientConfig.create(worker_pool_size=1)
        async with AsyncClient(config=config) as client:
            body = await client.request(get_request("bank", 1)).send_into(ThreadRecordingResponse)

        assert body == found_body
        assert seen[0].startswith("elastic-client-decode")

    @respx.mock
    @pytest.mark.asyncio
    async def test_decoding_inline_without_pool(self, found_body):
        respx.get(DOC_URL).mock(return_value=httpx.Response(200, json=found_body))
        seen = []

        class ThreadRecordingResponse(Response):
            @classmethod
            def from_body(cls, body):
                seen.append(threading.current_thread())
                return body

        async with AsyncClient() as client:
            await client.request(get_request("bank", 1)).send_into(ThreadRecordingResponse)

        assert seen == [threading.main_thread()]
