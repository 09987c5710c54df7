"""
Request builder.

``client.request(descriptor)`` returns a ``RequestBuilder``. The builder
holds the request-local connection parameters; ``params`` derives a new
builder and never touches the client-wide ones. ``prepare`` resolves the
final method, url, headers and body without any I/O, and ``send`` hands
the prepared request to the client's sender exactly once.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, Dict, Optional, Tuple, Type, TypeVar

from .descriptor import RequestDescriptor
from .exceptions import AlreadyConsumedError
from .params import HeaderPairs, RequestParams
from ..responses.base import JsonResponse

if TYPE_CHECKING:
    from .sender import Sender

T = TypeVar("T")

JSON_CONTENT_TYPE = "application/json"


@dataclass(frozen=True)
class PreparedRequest:
    """
    Fully resolved request, ready for the transport.

    Attributes:
        method: HTTP method
        url: Absolute url including the query string
        headers: Ordered ``(name, value)`` pairs, duplicates allowed
        body: Encoded body or None
    """

    method: str
    url: str
    headers: HeaderPairs = ()
    body: Optional[bytes] = None

    def header_dict(self) -> Dict[str, str]:
        """Headers as a dict; values of repeated names are joined with ``", "``."""
        result: Dict[str, str] = {}
        lowered: Dict[str, str] = {}
        for name, value in self.headers:
            key = lowered.setdefault(name.lower(), name)
            if key in result:
                result[key] = f"{result[key]}, {value}"
            else:
                result[key] = value
        return result

    def get_header(self, name: str) -> Optional[str]:
        lowered = name.lower()
        for n, v in self.headers:
            if n.lower() == lowered:
                return v
        return None

    def with_header(self, name: str, value: str) -> 'PreparedRequest':
        """Copy with ``name`` set, replacing existing values."""
        lowered = name.lower()
        headers = tuple((n, v) for n, v in self.headers if n.lower() != lowered)
        return PreparedRequest(self.method, self.url, headers + ((name, value),), self.body)


class RequestBuilder:
    """
    Builder for a single request.

    Example:
        >>> res = (client.request(search_request("bank"))
        ...        .params(lambda p: p.url_param("size", 10))
        ...        .send())

    With a ``SyncSender`` ``send()`` returns a ``ResponseBuilder``; with an
    ``AsyncSender`` it returns an awaitable of ``AsyncResponseBuilder``.
    """

    def __init__(
        self,
        sender: 'Sender',
        client_params: RequestParams,
        descriptor: RequestDescriptor,
        local_params: Optional[RequestParams] = None,
    ):
        self._sender = sender
        self._descriptor = descriptor
        self._params = client_params if local_params is None else client_params.merge(local_params)
        self._sent = False

    @property
    def descriptor(self) -> RequestDescriptor:
        return self._descriptor

    @property
    def request_params(self) -> RequestParams:
        """Connection parameters this request will be sent with."""
        return self._params

    @property
    def sent(self) -> bool:
        return self._sent

    def _derive(self, params: RequestParams) -> 'RequestBuilder':
        builder = RequestBuilder.__new__(RequestBuilder)
        builder._sender = self._sender
        builder._descriptor = self._descriptor
        builder._params = params
        # a sent builder only derives sent builders
        builder._sent = self._sent
        return builder

    # ==================== Overrides ====================

    def params(self, fn: Callable[[RequestParams], RequestParams]) -> 'RequestBuilder':
        """
        Return a new builder with ``fn`` applied to the request parameters.

        ``fn`` gets this builder's parameters and must return a
        ``RequestParams``. Neither this builder nor the client change.
        A builder derived from a sent one is sent too.

        Raises:
            TypeError: If ``fn`` doesn't return ``RequestParams``
        """
        params = fn(self._params)
        if not isinstance(params, RequestParams):
            raise TypeError(f"params() callback must return RequestParams, got {type(params).__name__}")
        return self._derive(params)

    def url_param(self, key: str, value: Any) -> 'RequestBuilder':
        """Shortcut for ``params(lambda p: p.url_param(key, value))``."""
        return self._derive(self._params.url_param(key, value))

    def header(self, name: str, value: Any) -> 'RequestBuilder':
        """Shortcut for ``params(lambda p: p.header(name, value))``."""
        return self._derive(self._params.header(name, value))

    # ==================== Execution ====================

    def prepare(self) -> PreparedRequest:
        """
        Resolve the request without sending it.

        Pure: calling it again returns an equal value. A body without an
        explicit ``Content-Type`` is sent as JSON.
        """
        headers: Tuple[Tuple[str, str], ...] = self._params.headers
        body = self._descriptor.body
        if body is not None and self._params.get_header("Content-Type") is None:
            headers = headers + (("Content-Type", JSON_CONTENT_TYPE),)

        return PreparedRequest(
            method=self._descriptor.method,
            url=self._params.url(self._descriptor.url),
            headers=headers,
            body=body,
        )

    def _take(self) -> PreparedRequest:
        if self._sent:
            raise AlreadyConsumedError("request has already been sent")
        prepared = self.prepare()
        self._sent = True
        return prepared

    def send(self):
        """
        Send the request.

        Returns:
            ``ResponseBuilder`` or an awaitable of ``AsyncResponseBuilder``,
            depending on the sender

        Raises:
            AlreadyConsumedError: If the request was already sent
            RequestError: If the request could not be sent
        """
        return self._sender.send(self._take())

    def send_into(self, response_type: Type[T] = JsonResponse):
        """
        Send the request and classify the response as ``response_type``.

        Same as ``send().into_response(response_type)``, or its awaited
        equivalent for a non-blocking sender.
        """
        return self._sender.send_into(self._take(), response_type)

    def __repr__(self) -> str:
        return f"<RequestBuilder {self._descriptor.method} {self._descriptor.url}>"
