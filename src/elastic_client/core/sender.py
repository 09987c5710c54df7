"""
Senders perform the network round-trip.

``Sender`` is the capability both clients are built on. ``SyncSender``
blocks on ``requests``; ``AsyncSender`` suspends on ``httpx``. Builders and
the response classifier are shared, only the I/O differs.
"""

import os
import ssl
import time
import uuid
from abc import ABC, abstractmethod
from concurrent.futures import ThreadPoolExecutor
from contextvars import Token
from typing import Optional, Tuple, Type, TypeVar

import httpx
import requests
from requests.adapters import HTTPAdapter

from .config import ClientConfig, SecurityConfig
from .exceptions import (
    BuildError,
    ClientClosedError,
    ElasticClientException,
    classify_httpx_exception,
    classify_requests_exception,
)
from .logging import ClientLogger, reset_correlation_id, set_correlation_id
from .request_builder import PreparedRequest
from .response import AsyncResponseBuilder, ResponseBuilder
from .session_manager import ThreadSafeSessionManager
from ..responses.base import JsonResponse
from ..utils.sanitizer import mask_headers, sanitize_url

T = TypeVar("T")

# Elasticsearch echoes this header in its task and slow logs
CORRELATION_HEADER = "X-Opaque-Id"


class Sender(ABC):
    """
    Base class for senders.

    A sender is shared by every request of a client and keeps no
    per-request state.

    Args:
        config: Transport configuration (defaults if None)
    """

    def __init__(self, config: Optional[ClientConfig] = None):
        self.config = config or ClientConfig()
        self._logger: Optional[ClientLogger] = None
        if self.config.logging is not None:
            self._logger = ClientLogger(self.config.logging)

    @property
    def logger(self) -> Optional[ClientLogger]:
        return self._logger

    @abstractmethod
    def send(self, prepared: PreparedRequest):
        """Send a prepared request and return a response builder (or an awaitable of one)."""

    @abstractmethod
    def send_into(self, prepared: PreparedRequest, response_type: Type[T] = JsonResponse):
        """Send a prepared request and classify its response."""

    @abstractmethod
    def close(self):
        """Release the transport."""

    # ==================== Logging ====================

    def _begin(self, prepared: PreparedRequest) -> Tuple[PreparedRequest, Optional[Token], float]:
        """Attach the correlation id and log the start of a request."""
        token = None
        if self._logger is not None:
            correlation_id = None
            if self.config.logging.enable_correlation_id:
                correlation_id = prepared.get_header(CORRELATION_HEADER) or str(uuid.uuid4())
                prepared = prepared.with_header(CORRELATION_HEADER, correlation_id)
                token = set_correlation_id(correlation_id)

            fields = {"method": prepared.method, "url": sanitize_url(prepared.url)}
            if self.config.logging.log_headers:
                fields["headers"] = mask_headers(prepared.headers)
            self._logger.info("Request started", **fields)
        return prepared, token, time.monotonic()

    def _completed(self, prepared: PreparedRequest, status: int, start: float) -> None:
        if self._logger is not None:
            self._logger.info(
                "Request completed",
                method=prepared.method,
                url=sanitize_url(prepared.url),
                status=status,
                duration_ms=round((time.monotonic() - start) * 1000, 2),
            )

    def _failed(self, prepared: PreparedRequest, error: ElasticClientException, start: float) -> None:
        if self._logger is not None:
            self._logger.error(
                "Request failed",
                method=prepared.method,
                url=sanitize_url(prepared.url),
                error=str(error),
                error_type=type(error).__name__,
                duration_ms=round((time.monotonic() - start) * 1000, 2),
            )

    @staticmethod
    def _end(token: Optional[Token]) -> None:
        if token is not None:
            reset_correlation_id(token)

    def _close_logger(self) -> None:
        if self._logger is not None:
            self._logger.close()


def _check_tls_files(config: ClientConfig) -> None:
    security = config.security
    for label, path in (
        ("ca_bundle", security.ca_bundle),
        ("client_cert", security.client_cert),
        ("client_key", security.client_key),
    ):
        if path and not os.path.exists(path):
            raise BuildError(f"{label} not found: {path}")


def _ssl_context(security: SecurityConfig) -> Optional[ssl.SSLContext]:
    """
    Context with the configured CA and client certificate loaded.

    None when neither is set. Unreadable material raises ``ssl.SSLError``
    (an ``OSError``) here rather than on the first request.
    """
    if not (security.ca_bundle or security.client_cert):
        return None

    if security.verify_ssl and security.ca_bundle:
        if os.path.isdir(security.ca_bundle):
            context = ssl.create_default_context(capath=security.ca_bundle)
        else:
            context = ssl.create_default_context(cafile=security.ca_bundle)
    else:
        context = ssl.create_default_context()
        if not security.verify_ssl:
            context.check_hostname = False
            context.verify_mode = ssl.CERT_NONE

    if security.client_cert:
        context.load_cert_chain(security.client_cert, security.client_key)
    return context


# ==================== Blocking ====================

class SyncSender(Sender):
    """
    Blocking sender on top of ``requests``.

    Each thread sends through its own ``requests.Session``. Bodies are
    streamed (``stream=True``) and read by the ``ResponseBuilder``.

    Raises:
        BuildError: If TLS files are missing or the session can't be created
    """

    def __init__(self, config: Optional[ClientConfig] = None):
        super().__init__(config)
        _check_tls_files(self.config)

        self._sessions = ThreadSafeSessionManager(session_factory=self._create_session)
        try:
            # requests reads the TLS files per connection; load them once up front
            _ssl_context(self.config.security)
            self._sessions.get_session()
        except (OSError, ValueError, TypeError) as e:
            raise BuildError(cause=e) from e

    def _create_session(self) -> requests.Session:
        session = requests.Session()

        pool = self.config.pool
        adapter = HTTPAdapter(
            pool_connections=pool.pool_connections,
            pool_maxsize=pool.pool_maxsize,
            pool_block=pool.pool_block,
            max_retries=0,
        )
        session.mount('http://', adapter)
        session.mount('https://', adapter)
        session.max_redirects = pool.max_redirects

        return session

    def send(self, prepared: PreparedRequest) -> ResponseBuilder:
        """
        Raises:
            RequestError: Connection failure, timeout or invalid request
        """
        if self._sessions.closed:
            raise ClientClosedError(url=sanitize_url(prepared.url))
        prepared, token, start = self._begin(prepared)
        security = self.config.security
        try:
            try:
                response = self._sessions.get_session().request(
                    method=prepared.method,
                    url=prepared.url,
                    headers=prepared.header_dict(),
                    data=prepared.body,
                    timeout=self.config.timeout.as_tuple(),
                    verify=security.requests_verify(),
                    cert=security.requests_cert(),
                    allow_redirects=security.allow_redirects,
                    stream=True,
                )
            except requests.exceptions.RequestException as e:
                error = classify_requests_exception(e, sanitize_url(prepared.url))
                self._failed(prepared, error, start)
                raise error from e

            self._completed(prepared, response.status_code, start)
            return ResponseBuilder(response, security.max_response_size)
        finally:
            self._end(token)

    def send_into(self, prepared: PreparedRequest, response_type: Type[T] = JsonResponse) -> T:
        return self.send(prepared).into_response(response_type)

    def close(self) -> None:
        """Close the sessions of all threads."""
        self._sessions.close_all()
        self._close_logger()


# ==================== Non-blocking ====================

class AsyncSender(Sender):
    """
    Non-blocking sender on top of ``httpx.AsyncClient``.

    With ``config.worker_pool.max_workers`` set, response bodies are decoded
    on a dedicated ``ThreadPoolExecutor`` so large payloads don't block the
    event loop. Tasks queue when every worker is busy.

    Raises:
        BuildError: If the TLS configuration or the transport is invalid
    """

    def __init__(self, config: Optional[ClientConfig] = None):
        super().__init__(config)
        _check_tls_files(self.config)

        timeout = self.config.timeout
        pool = self.config.pool
        security = self.config.security
        try:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(timeout.read, connect=timeout.connect),
                limits=httpx.Limits(
                    max_connections=pool.pool_maxsize,
                    max_keepalive_connections=pool.pool_connections,
                ),
                verify=self._ssl_verify(),
                follow_redirects=security.allow_redirects,
                max_redirects=pool.max_redirects,
            )
        except (OSError, ValueError, TypeError) as e:
            raise BuildError(cause=e) from e

        self._closed = False
        self._executor: Optional[ThreadPoolExecutor] = None
        if self.config.worker_pool.enabled:
            self._executor = ThreadPoolExecutor(
                max_workers=self.config.worker_pool.max_workers,
                thread_name_prefix="elastic-client-decode",
            )

    def _ssl_verify(self):
        context = _ssl_context(self.config.security)
        if context is not None:
            return context
        return self.config.security.verify_ssl

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def executor(self) -> Optional[ThreadPoolExecutor]:
        return self._executor

    async def send(self, prepared: PreparedRequest) -> AsyncResponseBuilder:
        """
        Raises:
            RequestError: Connection failure, timeout or invalid request
        """
        if self._closed:
            raise ClientClosedError(url=sanitize_url(prepared.url))
        prepared, token, start = self._begin(prepared)
        try:
            try:
                request = self._client.build_request(
                    prepared.method,
                    prepared.url,
                    headers=list(prepared.headers),
                    content=prepared.body,
                )
                response = await self._client.send(request, stream=True)
            except (httpx.HTTPError, httpx.InvalidURL) as e:
                error = classify_httpx_exception(e, sanitize_url(prepared.url))
                self._failed(prepared, error, start)
                raise error from e

            self._completed(prepared, response.status_code, start)
            return AsyncResponseBuilder(response, self.config.security.max_response_size, self._executor)
        finally:
            self._end(token)

    async def send_into(self, prepared: PreparedRequest, response_type: Type[T] = JsonResponse) -> T:
        builder = await self.send(prepared)
        return await builder.into_response(response_type)

    async def close(self) -> None:
        """Close the transport and shut the worker pool down."""
        self._closed = True
        await self._client.aclose()
        if self._executor is not None:
            self._executor.shutdown(wait=False)
        self._close_logger()

    aclose = close
