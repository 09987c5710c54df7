"""Base classes for typed Elasticsearch responses."""

from typing import Any


class Response:
    """
    Base class for response types accepted by ``into_response``.

    Subclasses decide from the decoded body whether it is a success for them
    (``is_ok``) and build themselves from it (``from_body``). When ``is_ok``
    returns False the body is turned into an ``ApiError`` instead.

    The default predicate treats any body without a top-level ``error``
    entry as a success, whatever the status code.
    """

    @classmethod
    def is_ok(cls, status: int, body: Any) -> bool:
        return not (isinstance(body, dict) and "error" in body)

    @classmethod
    def from_body(cls, body: Any) -> Any:
        raise NotImplementedError(f"{cls.__name__} must implement from_body()")


class JsonResponse(Response):
    """
    Accept any successful body and return the decoded JSON value itself.

    Example:
        >>> tree = client.request(ping_request()).send().into_response(JsonResponse)
        >>> tree["version"]["number"]
    """

    @classmethod
    def from_body(cls, body: Any) -> Any:
        return body
