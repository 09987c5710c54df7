"""
Connection parameters shared by every request a client makes.

``RequestParams`` is immutable: every modifier returns a new instance, so a
request-local override never leaks into the client-wide defaults.

Example:
    >>> params = RequestParams("http://es-node:9200").url_param("pretty", True)
    >>> local = params.url_param("refresh", "wait_for")
    >>> params.url("/_search")
    'http://es-node:9200/_search?pretty=true'
    >>> local.url("/_search")
    'http://es-node:9200/_search?pretty=true&refresh=wait_for'
"""

from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any, Iterable, Mapping, Optional, Tuple, Union
from urllib.parse import parse_qsl, urlencode, urlsplit

DEFAULT_BASE_URL = "http://localhost:9200"

HeaderPairs = Tuple[Tuple[str, str], ...]


def _param_value(value: Any) -> str:
    """Render a url parameter value the way Elasticsearch expects it."""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _freeze_headers(headers: Union[Mapping[str, Any], Iterable[Tuple[str, Any]], None]) -> HeaderPairs:
    if headers is None:
        return ()
    items = headers.items() if isinstance(headers, Mapping) else headers
    return tuple((str(name), str(value)) for name, value in items)


def _freeze_params(url_params: Optional[Mapping[str, Any]]) -> Mapping[str, str]:
    if not url_params:
        return MappingProxyType({})
    return MappingProxyType({str(k): _param_value(v) for k, v in url_params.items()})


@dataclass(frozen=True)
class RequestParams:
    """
    Base url, default headers and default url query parameters.

    Attributes:
        base_url: Absolute ``http``/``https`` url of the node
        headers: Ordered ``(name, value)`` pairs. Duplicate names are allowed.
        url_params: Read-only mapping of query parameters

    Raises:
        ValueError: If ``base_url`` is not an absolute http(s) url
    """

    base_url: Optional[str] = None
    headers: HeaderPairs = ()
    url_params: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    # None: derive from base_url (True when one was given)
    base_url_explicit: Optional[bool] = field(default=None, repr=False, compare=False)

    def __post_init__(self):
        if self.base_url_explicit is None:
            object.__setattr__(self, 'base_url_explicit', self.base_url is not None)
        if self.base_url is None:
            object.__setattr__(self, 'base_url', DEFAULT_BASE_URL)

        parsed = urlsplit(self.base_url)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ValueError(f"base_url must be an absolute http(s) url, got {self.base_url!r}")

        object.__setattr__(self, 'base_url', self.base_url.rstrip('/'))
        object.__setattr__(self, 'headers', _freeze_headers(self.headers))
        object.__setattr__(self, 'url_params', _freeze_params(self.url_params))

    # ==================== Modifiers ====================

    def with_base_url(self, base_url: str) -> 'RequestParams':
        """Return a copy pointing at another node."""
        return replace(self, base_url=base_url, base_url_explicit=True)

    def url_param(self, key: str, value: Any) -> 'RequestParams':
        """
        Return a copy with ``key`` set to ``value``.

        An existing value for ``key`` is replaced; ``None`` removes the key.
        """
        params = dict(self.url_params)
        if value is None:
            params.pop(key, None)
        else:
            params[key] = _param_value(value)
        return replace(self, url_params=params)

    def header(self, name: str, value: Any) -> 'RequestParams':
        """Return a copy with every ``name`` header replaced by a single value."""
        lowered = name.lower()
        kept = [(n, v) for n, v in self.headers if n.lower() != lowered]
        kept.append((name, str(value)))
        return replace(self, headers=tuple(kept))

    def append_header(self, name: str, value: Any) -> 'RequestParams':
        """Return a copy with another ``name`` header added after existing ones."""
        return replace(self, headers=self.headers + ((name, str(value)),))

    def merge(self, local: 'RequestParams') -> 'RequestParams':
        """
        Overlay request-local parameters on top of these ones.

        Entries of ``self`` are kept unless ``local`` has an entry with the
        same key (header names compare case-insensitively), in which case all
        of ``local``'s values for that key win. ``local.base_url`` wins when
        it was set explicitly, even to the default url.
        """
        local_names = {name.lower() for name, _ in local.headers}
        headers = tuple(
            (n, v) for n, v in self.headers if n.lower() not in local_names
        ) + local.headers

        url_params = dict(self.url_params)
        url_params.update(local.url_params)

        base_url = local.base_url if local.base_url_explicit else self.base_url

        return RequestParams(
            base_url=base_url,
            headers=headers,
            url_params=url_params,
            base_url_explicit=self.base_url_explicit or local.base_url_explicit,
        )

    # ==================== Accessors ====================

    def get_header(self, name: str) -> Optional[str]:
        """First value of header ``name`` or None."""
        lowered = name.lower()
        for n, v in self.headers:
            if n.lower() == lowered:
                return v
        return None

    def query_string(self) -> str:
        """Url-encoded query string, without the leading ``?``."""
        return urlencode(list(self.url_params.items()))

    def url(self, path: str) -> str:
        """
        Resolve a request path against ``base_url`` and attach url parameters.

        Query parameters already present in ``path`` are kept unless the same
        key is set on these params; every key appears once in the result.

        Args:
            path: Path relative to ``base_url`` (absolute urls are used as is)

        Returns:
            Full url
        """
        if path.startswith(("http://", "https://")):
            url = path
        else:
            url = f"{self.base_url}/{path.lstrip('/')}"

        url, _, existing = url.partition('?')

        query = {}
        for key, value in parse_qsl(existing, keep_blank_values=True):
            query.setdefault(key, value)
        query.update(self.url_params)

        if not query:
            return url
        return f"{url}?{urlencode(list(query.items()))}"
