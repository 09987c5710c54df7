"""Core модули: параметры, builders, senders, классификация ответов."""

from .config import (
    TimeoutConfig,
    ConnectionPoolConfig,
    SecurityConfig,
    WorkerPoolConfig,
    ClientConfig,
)
from .params import RequestParams, DEFAULT_BASE_URL
from .descriptor import RequestDescriptor
from .exceptions import (
    ElasticClientException,
    AlreadyConsumedError,
    ApiError,
    IndexNotFoundError,
    IndexAlreadyExistsError,
    DocumentMissingError,
    ParsingError,
    MapperParsingError,
    ActionRequestValidationError,
    OtherApiError,
    ClientError,
    BuildError,
    RequestError,
    TimeoutError,
    ConnectionError,
    ClientClosedError,
    ResponseError,
    ResponseTooLargeError,
    classify_requests_exception,
    classify_httpx_exception,
)
from .classifier import parse_response, parse_api_error
from .request_builder import RequestBuilder, PreparedRequest
from .response import ResponseBuilder, AsyncResponseBuilder, SyncHttpResponse, AsyncHttpResponse
from .sender import Sender, SyncSender, AsyncSender

__all__ = [
    # Config
    "TimeoutConfig",
    "ConnectionPoolConfig",
    "SecurityConfig",
    "WorkerPoolConfig",
    "ClientConfig",
    # Request
    "RequestParams",
    "DEFAULT_BASE_URL",
    "RequestDescriptor",
    "RequestBuilder",
    "PreparedRequest",
    # Response
    "ResponseBuilder",
    "AsyncResponseBuilder",
    "SyncHttpResponse",
    "AsyncHttpResponse",
    "parse_response",
    "parse_api_error",
    # Senders
    "Sender",
    "SyncSender",
    "AsyncSender",
    # Exceptions
    "ElasticClientException",
    "AlreadyConsumedError",
    "ApiError",
    "IndexNotFoundError",
    "IndexAlreadyExistsError",
    "DocumentMissingError",
    "ParsingError",
    "MapperParsingError",
    "ActionRequestValidationError",
    "OtherApiError",
    "ClientError",
    "BuildError",
    "RequestError",
    "TimeoutError",
    "ConnectionError",
    "ClientClosedError",
    "ResponseError",
    "ResponseTooLargeError",
    "classify_requests_exception",
    "classify_httpx_exception",
]
