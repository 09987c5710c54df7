"""
Response builders.

A response builder wraps a streamed transport response. ``status`` can be
read any number of times; the body is consumed exactly once, either as a raw
readable response (``into_raw``) or as a classified, typed value
(``into_response``).

``ResponseBuilder`` wraps a ``requests.Response`` and blocks.
``AsyncResponseBuilder`` wraps an ``httpx.Response`` and returns awaitables;
when given an executor it decodes bodies there instead of on the event loop.
"""

import asyncio
from concurrent.futures import Executor
from typing import Any, AsyncIterator, Awaitable, Coroutine, Generator, Iterator, Mapping, Optional, Type, TypeVar

import httpx
import requests

from .classifier import parse_response
from .exceptions import (
    AlreadyConsumedError,
    ClientClosedError,
    ResponseError,
    ResponseTooLargeError,
    TimeoutError,
)
from ..responses.base import JsonResponse

T = TypeVar("T")

CHUNK_SIZE = 8192


class _BaseResponseBuilder:
    """Status access and single consumption shared by both builders."""

    def __init__(self, response: Any, max_response_size: int):
        self._response = response
        self._max_response_size = max_response_size
        self._consumed = False

    @property
    def status(self) -> int:
        """HTTP status code. Doesn't touch the body."""
        return self._response.status_code

    @property
    def headers(self) -> Mapping[str, str]:
        return self._response.headers

    @property
    def consumed(self) -> bool:
        return self._consumed

    def _take(self) -> Any:
        if self._consumed:
            raise AlreadyConsumedError("response body has already been consumed")
        self._consumed = True
        return self._response

    def _check_content_length(self) -> None:
        content_length = self._response.headers.get('Content-Length')
        if content_length and content_length.isdigit():
            size = int(content_length)
            if size > self._max_response_size:
                raise ResponseTooLargeError(self.status, size, self._max_response_size)

    def _check_size(self, size: int) -> None:
        if size > self._max_response_size:
            raise ResponseTooLargeError(self.status, size, self._max_response_size)

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} [{self.status}]>"


# ==================== Blocking ====================

class SyncHttpResponse:
    """
    Raw blocking response. The body is read once, fully or in chunks.

    Example:
        >>> with client.request(req).send().into_raw() as raw:
        ...     for chunk in raw.iter_bytes():
        ...         out.write(chunk)
    """

    def __init__(self, response: requests.Response):
        self._response = response

    @property
    def status(self) -> int:
        return self._response.status_code

    @property
    def headers(self) -> Mapping[str, str]:
        return self._response.headers

    def read(self) -> bytes:
        """Read the whole body and release the connection."""
        try:
            return self._response.content
        finally:
            self._response.close()

    def text(self) -> str:
        body = self.read()
        return body.decode(self._response.encoding or 'utf-8', errors='replace')

    def iter_bytes(self, chunk_size: int = CHUNK_SIZE) -> Iterator[bytes]:
        """Stream the body in chunks."""
        return self._response.iter_content(chunk_size=chunk_size)

    def close(self) -> None:
        self._response.close()

    def __enter__(self) -> 'SyncHttpResponse':
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False


class ResponseBuilder(_BaseResponseBuilder):
    """
    Blocking response builder.

    Example:
        >>> res = client.request(get_request("bank", 1)).send()
        >>> res.status
        200
        >>> doc = res.into_response(GetResponse)
    """

    def into_raw(self) -> SyncHttpResponse:
        """Hand over the body without classifying it."""
        return SyncHttpResponse(self._take())

    def into_response(self, response_type: Type[T] = JsonResponse) -> T:
        """
        Read the body and classify it as ``response_type`` or an error.

        Raises:
            ApiError: Elasticsearch returned a structured error
            ResponseError: The body could not be classified
            AlreadyConsumedError: The body was already consumed
        """
        response = self._take()
        body = self._read_body(response)
        return parse_response(self.status, body, response_type)

    def _read_body(self, response: requests.Response) -> bytes:
        try:
            self._check_content_length()

            chunks = []
            size = 0
            for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
                size += len(chunk)
                self._check_size(size)
                chunks.append(chunk)
            return b"".join(chunks)

        except requests.exceptions.Timeout as e:
            raise TimeoutError("timed out reading the response body", response.url, e, timeout_type="read") from e
        except requests.exceptions.RequestException as e:
            raise ResponseError(self.status, "error reading the response body", cause=e) from e
        finally:
            response.close()


# ==================== Non-blocking ====================

class AsyncHttpResponse:
    """
    Raw non-blocking response. The body is read once, fully or in chunks.

    Example:
        >>> raw = (await client.request(req).send()).into_raw()
        >>> async with raw:
        ...     async for chunk in raw.aiter_bytes():
        ...         out.write(chunk)
    """

    def __init__(self, response: httpx.Response):
        self._response = response

    @property
    def status(self) -> int:
        return self._response.status_code

    @property
    def headers(self) -> Mapping[str, str]:
        return self._response.headers

    async def read(self) -> bytes:
        """Read the whole body and release the connection."""
        try:
            return await self._response.aread()
        finally:
            await self._response.aclose()

    async def text(self) -> str:
        body = await self.read()
        return body.decode(self._response.encoding or 'utf-8', errors='replace')

    def aiter_bytes(self, chunk_size: int = CHUNK_SIZE) -> AsyncIterator[bytes]:
        """Stream the body in chunks."""
        return self._response.aiter_bytes(chunk_size)

    async def aclose(self) -> None:
        await self._response.aclose()

    async def __aenter__(self) -> 'AsyncHttpResponse':
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()


class _PendingRead(Awaitable[T]):
    """
    Awaitable returned by ``AsyncResponseBuilder.into_response``.

    Dropped without being awaited, it schedules ``aclose()`` of the
    streamed response on its event loop so the connection goes back to
    the pool.
    """

    def __init__(self, coro: Coroutine[Any, Any, T], response: httpx.Response):
        self._coro = coro
        self._response = response
        self._started = False
        try:
            self._loop: Optional[asyncio.AbstractEventLoop] = asyncio.get_running_loop()
        except RuntimeError:
            self._loop = None

    def __await__(self) -> Generator[Any, None, T]:
        self._started = True
        return self._coro.__await__()

    def __del__(self):
        if self._started:
            return
        self._coro.close()
        if self._loop is not None and not self._loop.is_closed():
            self._loop.call_soon_threadsafe(self._loop.create_task, self._response.aclose())


class AsyncResponseBuilder(_BaseResponseBuilder):
    """
    Non-blocking response builder.

    ``into_response`` returns an awaitable. The body is read on the event
    loop; JSON decoding and classification run on ``executor`` when one is
    configured, inline otherwise.

    Example:
        >>> res = await client.request(get_request("bank", 1)).send()
        >>> doc = await res.into_response(GetResponse)
    """

    def __init__(self, response: httpx.Response, max_response_size: int, executor: Optional[Executor] = None):
        super().__init__(response, max_response_size)
        self._executor = executor

    def into_raw(self) -> AsyncHttpResponse:
        """Hand over the body without classifying it."""
        return AsyncHttpResponse(self._take())

    def into_response(self, response_type: Type[T] = JsonResponse) -> Awaitable[T]:
        """
        Read the body and classify it as ``response_type`` or an error.

        The body is marked consumed immediately, so a second call fails even
        if the first awaitable was never awaited. An awaitable dropped
        without being awaited releases the connection on the event loop.

        Raises:
            AlreadyConsumedError: The body was already consumed
        """
        response = self._take()
        return _PendingRead(self._into_response(response, response_type), response)

    async def _into_response(self, response: httpx.Response, response_type: Type[T]) -> T:
        body = await self._read_body(response)

        if self._executor is None:
            return parse_response(self.status, body, response_type)

        loop = asyncio.get_running_loop()
        try:
            future = loop.run_in_executor(self._executor, parse_response, self.status, body, response_type)
        except RuntimeError as e:
            # executor was shut down by AsyncSender.close()
            raise ClientClosedError("decode pool is shut down", cause=e) from e
        return await future

    async def _read_body(self, response: httpx.Response) -> bytes:
        try:
            self._check_content_length()

            chunks = []
            size = 0
            async for chunk in response.aiter_bytes(CHUNK_SIZE):
                size += len(chunk)
                self._check_size(size)
                chunks.append(chunk)
            return b"".join(chunks)

        except httpx.TimeoutException as e:
            raise TimeoutError("timed out reading the response body", str(response.url), e, timeout_type="read") from e
        except httpx.HTTPError as e:
            raise ResponseError(self.status, "error reading the response body", cause=e) from e
        finally:
            await response.aclose()
