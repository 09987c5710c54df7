"""Immutable description of a single Elasticsearch API call."""

import json
from dataclasses import dataclass
from typing import Any, Optional

from .exceptions import RequestError

METHODS = frozenset({"GET", "POST", "PUT", "DELETE", "HEAD"})


def encode_body(body: Any) -> Optional[bytes]:
    """
    Convert a request body to bytes.

    ``str`` is utf-8 encoded, ``dict``/``list`` are serialized as JSON,
    ``bytes`` pass through. ``None`` means no body.

    Raises:
        RequestError: If the body cannot be encoded
    """
    if body is None or isinstance(body, bytes):
        return body
    if isinstance(body, (bytearray, memoryview)):
        return bytes(body)
    if isinstance(body, str):
        return body.encode("utf-8")
    if isinstance(body, (dict, list)):
        try:
            return json.dumps(body).encode("utf-8")
        except (TypeError, ValueError) as e:
            raise RequestError("request body is not JSON serializable", cause=e) from e
    raise RequestError(f"unsupported request body type: {type(body).__name__}")


@dataclass(frozen=True)
class RequestDescriptor:
    """
    HTTP method, url path and optional body of a request.

    Descriptors are produced by the endpoint constructors in
    :mod:`elastic_client.endpoints` and handed to ``Client.request``.
    A malformed descriptor is rejected here, before any network call.

    Example:
        >>> RequestDescriptor("POST", "/bank/_search", {"query": {"match_all": {}}})

    Raises:
        RequestError: Unknown method, empty url or unencodable body
    """

    method: str
    url: str
    body: Optional[bytes] = None

    def __post_init__(self):
        method = str(self.method).upper()
        if method not in METHODS:
            raise RequestError(f"unsupported HTTP method: {self.method!r}")
        if not isinstance(self.url, str) or not self.url.strip():
            raise RequestError("request url must be a non-empty string")
        if method == "HEAD" and self.body is not None:
            raise RequestError("HEAD requests cannot have a body", url=self.url)

        object.__setattr__(self, 'method', method)
        object.__setattr__(self, 'body', encode_body(self.body))
