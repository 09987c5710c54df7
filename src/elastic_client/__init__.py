"""Elasticsearch client core - typed request/response pipeline over requests and httpx."""

import logging
from importlib.metadata import version, PackageNotFoundError

from .client import Client, SyncClient, AsyncClient
from .core.config import (
    ClientConfig,
    TimeoutConfig,
    ConnectionPoolConfig,
    SecurityConfig,
    WorkerPoolConfig,
)
from .core.params import RequestParams
from .core.descriptor import RequestDescriptor
from .core.request_builder import RequestBuilder, PreparedRequest
from .core.response import ResponseBuilder, AsyncResponseBuilder
from .core.sender import Sender, SyncSender, AsyncSender
from .core.logging import LoggingConfig
from .core.env_config import load_from_env
from .core.exceptions import (
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
)
from .endpoints import (
    search_request,
    get_request,
    index_request,
    ping_request,
    indices_create_request,
    indices_delete_request,
    indices_exists_request,
    indices_put_mapping_request,
)
from .responses import (
    JsonResponse,
    GetResponse,
    IndexResponse,
    SearchResponse,
    CommandResponse,
    PingResponse,
)

# Users can configure logging themselves using logging.getLogger('elastic_client')
logging.getLogger('elastic_client').addHandler(logging.NullHandler())

try:
    __version__ = version("elastic-client-core")
except PackageNotFoundError:
    # Package is not installed (development mode)
    __version__ = "0.0.0-dev"

__all__ = [
    # Clients
    "Client",
    "SyncClient",
    "AsyncClient",

    # Config
    "ClientConfig",
    "TimeoutConfig",
    "ConnectionPoolConfig",
    "SecurityConfig",
    "WorkerPoolConfig",
    "LoggingConfig",
    "load_from_env",

    # Requests
    "RequestParams",
    "RequestDescriptor",
    "RequestBuilder",
    "PreparedRequest",
    "search_request",
    "get_request",
    "index_request",
    "ping_request",
    "indices_create_request",
    "indices_delete_request",
    "indices_exists_request",
    "indices_put_mapping_request",

    # Responses
    "ResponseBuilder",
    "AsyncResponseBuilder",
    "JsonResponse",
    "GetResponse",
    "IndexResponse",
    "SearchResponse",
    "CommandResponse",
    "PingResponse",

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

    # Version
    "__version__",
]
