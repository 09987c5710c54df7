"""
High-level request builders returned by the client's endpoint methods.

Builders are immutable: every setter returns a new builder. ``send()``
builds the descriptor, applies the collected ``params`` callbacks and
classifies the response as the endpoint's response type. With an async
client ``send()`` returns an awaitable.

Example:
    >>> res = (client.search("bank")
    ...        .body({"query": {"match": {"city": "Brogan"}}})
    ...        .params(lambda p: p.url_param("size", 5))
    ...        .send())
    >>> res.total
"""

import copy
from typing import TYPE_CHECKING, Any, Callable, Optional, Tuple

from .descriptors import (
    get_request,
    index_request,
    indices_create_request,
    indices_put_mapping_request,
    ping_request,
    search_request,
)
from ..core.descriptor import RequestDescriptor
from ..core.params import RequestParams
from ..core.request_builder import RequestBuilder
from ..responses import (
    CommandResponse,
    GetResponse,
    IndexResponse,
    JsonResponse,
    PingResponse,
    SearchResponse,
)

if TYPE_CHECKING:
    from ..client import Client

ParamsFn = Callable[[RequestParams], RequestParams]


class EndpointBuilder:
    """Common part of the endpoint builders."""

    response_type: type = JsonResponse

    def __init__(self, client: 'Client'):
        self._client = client
        self._param_fns: Tuple[ParamsFn, ...] = ()

    def _with(self, **changes: Any):
        clone = copy.copy(self)
        for name, value in changes.items():
            setattr(clone, f"_{name}", value)
        return clone

    def params(self, fn: ParamsFn):
        """Return a builder that also applies ``fn`` to the request parameters."""
        return self._with(param_fns=self._param_fns + (fn,))

    def descriptor(self) -> RequestDescriptor:
        raise NotImplementedError

    def request(self) -> RequestBuilder:
        """Low-level builder with the descriptor and params applied."""
        builder = self._client.request(self.descriptor())
        for fn in self._param_fns:
            builder = builder.params(fn)
        return builder

    def send(self):
        """Send the request and return the typed response."""
        return self.request().send_into(self.response_type)


class SearchRequestBuilder(EndpointBuilder):
    """Search across ``_all`` unless an index is set."""

    response_type = SearchResponse

    def __init__(self, client: 'Client', index: Optional[str] = None):
        super().__init__(client)
        self._index = index
        self._ty: Optional[str] = None
        self._body: Any = None

    def index(self, index: str) -> 'SearchRequestBuilder':
        return self._with(index=index)

    def ty(self, ty: Optional[str]) -> 'SearchRequestBuilder':
        return self._with(ty=ty)

    def body(self, body: Any) -> 'SearchRequestBuilder':
        return self._with(body=body)

    def descriptor(self) -> RequestDescriptor:
        return search_request(self._index, self._ty, self._body)


class GetRequestBuilder(EndpointBuilder):
    """Get a document by id. ``send()`` returns a ``GetResponse``."""

    response_type = GetResponse

    def __init__(self, client: 'Client', index: str, id: Any):
        super().__init__(client)
        self._index = index
        self._id = id
        self._ty: Optional[str] = None

    def ty(self, ty: Optional[str]) -> 'GetRequestBuilder':
        return self._with(ty=ty)

    def descriptor(self) -> RequestDescriptor:
        return get_request(self._index, self._id, self._ty)


class IndexRequestBuilder(EndpointBuilder):
    """Index (create or replace) a document."""

    response_type = IndexResponse

    def __init__(self, client: 'Client', index: str, id: Any, doc: Any):
        super().__init__(client)
        self._index = index
        self._id = id
        self._doc = doc
        self._ty: Optional[str] = None

    def ty(self, ty: Optional[str]) -> 'IndexRequestBuilder':
        return self._with(ty=ty)

    def descriptor(self) -> RequestDescriptor:
        return index_request(self._index, self._id, self._doc, self._ty)


class CreateIndexRequestBuilder(EndpointBuilder):
    """Create an index, optionally with settings and mappings."""

    response_type = CommandResponse

    def __init__(self, client: 'Client', index: str):
        super().__init__(client)
        self._index = index
        self._body: Any = None

    def body(self, body: Any) -> 'CreateIndexRequestBuilder':
        return self._with(body=body)

    def descriptor(self) -> RequestDescriptor:
        return indices_create_request(self._index, self._body)


class PutMappingRequestBuilder(EndpointBuilder):
    """Put a type mapping on an existing index."""

    response_type = CommandResponse

    def __init__(self, client: 'Client', index: str, ty: str, mapping: Any):
        super().__init__(client)
        self._index = index
        self._ty = ty
        self._mapping = mapping

    def descriptor(self) -> RequestDescriptor:
        return indices_put_mapping_request(self._index, self._ty, self._mapping)


class PingRequestBuilder(EndpointBuilder):
    """Node name, cluster name and version."""

    response_type = PingResponse

    def descriptor(self) -> RequestDescriptor:
        return ping_request()
