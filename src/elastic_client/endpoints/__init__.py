"""Endpoint descriptors and high-level request builders."""

from .descriptors import (
    DEFAULT_INDEX,
    DEFAULT_TYPE,
    search_request,
    get_request,
    index_request,
    ping_request,
    indices_create_request,
    indices_delete_request,
    indices_exists_request,
    indices_put_mapping_request,
)
from .builders import (
    EndpointBuilder,
    SearchRequestBuilder,
    GetRequestBuilder,
    IndexRequestBuilder,
    CreateIndexRequestBuilder,
    PutMappingRequestBuilder,
    PingRequestBuilder,
)

__all__ = [
    'DEFAULT_INDEX',
    'DEFAULT_TYPE',
    'search_request',
    'get_request',
    'index_request',
    'ping_request',
    'indices_create_request',
    'indices_delete_request',
    'indices_exists_request',
    'indices_put_mapping_request',
    'EndpointBuilder',
    'SearchRequestBuilder',
    'GetRequestBuilder',
    'IndexRequestBuilder',
    'CreateIndexRequestBuilder',
    'PutMappingRequestBuilder',
    'PingRequestBuilder',
]
