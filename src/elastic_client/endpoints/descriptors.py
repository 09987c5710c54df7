"""
Request descriptor constructors for the endpoints the client knows about.

Every function validates its arguments and returns a ``RequestDescriptor``;
a missing index or id is rejected here, before any network call.

Example:
    >>> search_request()
    RequestDescriptor(method='GET', url='/_all/_search', body=None)
    >>> search_request("bank", body={"query": {"match_all": {}}}).method
    'POST'
"""

from typing import Any, Optional
from urllib.parse import quote

from ..core.descriptor import RequestDescriptor
from ..core.exceptions import RequestError

DEFAULT_INDEX = "_all"
DEFAULT_TYPE = "_doc"


def _segment(name: str, value: Any) -> str:
    """Url-quote one path segment. Comma separated lists and wildcards stay readable."""
    if value is None or str(value) == "":
        raise RequestError(f"{name} must not be empty")
    return quote(str(value), safe=",*")


def search_request(index: Optional[str] = None, ty: Optional[str] = None, body: Any = None) -> RequestDescriptor:
    """
    Search request: ``/{index}/_search`` or ``/{index}/{ty}/_search``.

    ``index`` defaults to ``_all``. Without a body the request is a GET,
    with one it is a POST.
    """
    path = "/" + _segment("index", index or DEFAULT_INDEX)
    if ty is not None:
        path += "/" + _segment("type", ty)
    path += "/_search"

    return RequestDescriptor("GET" if body is None else "POST", path, body)


def get_request(index: str, id: Any, ty: Optional[str] = None) -> RequestDescriptor:
    """Get document request: ``GET /{index}/{ty}/{id}``, ``ty`` defaults to ``_doc``."""
    path = "/".join(("", _segment("index", index), _segment("type", ty or DEFAULT_TYPE), _segment("id", id)))
    return RequestDescriptor("GET", path)


def index_request(index: str, id: Any, body: Any, ty: Optional[str] = None) -> RequestDescriptor:
    """Index document request: ``PUT /{index}/{ty}/{id}`` with the document as body."""
    if body is None:
        raise RequestError("index request requires a document body")
    path = "/".join(("", _segment("index", index), _segment("type", ty or DEFAULT_TYPE), _segment("id", id)))
    return RequestDescriptor("PUT", path, body)


def ping_request() -> RequestDescriptor:
    """Root endpoint of the node: ``GET /``."""
    return RequestDescriptor("GET", "/")


def indices_create_request(index: str, body: Any = None) -> RequestDescriptor:
    """Create index request: ``PUT /{index}`` with optional settings and mappings."""
    return RequestDescriptor("PUT", "/" + _segment("index", index), body)


def indices_delete_request(index: str) -> RequestDescriptor:
    """Delete index request: ``DELETE /{index}``."""
    return RequestDescriptor("DELETE", "/" + _segment("index", index))


def indices_exists_request(index: str) -> RequestDescriptor:
    """Index exists request: ``HEAD /{index}``. Only the status is meaningful."""
    return RequestDescriptor("HEAD", "/" + _segment("index", index))


def indices_put_mapping_request(index: str, ty: str, body: Any) -> RequestDescriptor:
    """Put mapping request: ``PUT /{index}/_mapping/{ty}``."""
    if body is None:
        raise RequestError("put mapping request requires a mapping body")
    path = "/".join(("", _segment("index", index), "_mapping", _segment("type", ty)))
    return RequestDescriptor("PUT", path, body)
