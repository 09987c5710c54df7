"""
Response classification.

Turns an already buffered response body into either a typed value, an
``ApiError`` or a ``ResponseError``. Both the blocking and the non-blocking
response builders call :func:`parse_response`; only the way they obtain the
body differs.

Classification steps:
    1. Decode the body as JSON. A body that is not valid JSON is a
       ``ResponseError`` and never an ``ApiError``, whatever the status.
    2. Ask ``response_type.is_ok(status, body)``.
    3. Success: ``response_type.from_body(body)``. Failure to build the value
       is a ``ResponseError``.
    4. Failure: build an ``ApiError`` from the ``error`` object. A body without
       one is a ``ResponseError``.

The payload decides, not the status code: a 2xx response carrying an error
object raises, and a non-2xx response the type accepts is returned.
"""

import json
from typing import Any, Callable, Dict, Type, TypeVar

from .exceptions import (
    ActionRequestValidationError,
    ApiError,
    DocumentMissingError,
    IndexAlreadyExistsError,
    IndexNotFoundError,
    MapperParsingError,
    OtherApiError,
    ParsingError,
    ResponseError,
)

T = TypeVar("T")


def decode_body(status: int, body: bytes) -> Any:
    """
    Decode a response body into a loosely typed JSON tree.

    Raises:
        ResponseError: If the body is not valid JSON
    """
    try:
        return json.loads(body)
    except (UnicodeDecodeError, ValueError) as e:
        raise ResponseError(status, "response body is not valid JSON", cause=e) from e


def _index_of(error: Dict[str, Any]) -> Any:
    return error.get("index", error.get("resource.id"))


def _index_not_found(error, status, body):
    return IndexNotFoundError(_index_of(error), error.get("reason"), status, body)


def _index_already_exists(error, status, body):
    return IndexAlreadyExistsError(
        _index_of(error), error.get("reason"), status, body, error_type=error["type"]
    )


def _document_missing(error, status, body):
    return DocumentMissingError(_index_of(error), error.get("reason"), status, body)


def _parsing(error, status, body):
    return ParsingError(error.get("line"), error.get("col"), error.get("reason"), status, body)


def _mapper_parsing(error, status, body):
    return MapperParsingError(error.get("reason"), status, body)


def _action_request_validation(error, status, body):
    return ActionRequestValidationError(error.get("reason"), status, body)


_API_ERRORS: Dict[str, Callable[[Dict[str, Any], int, Any], ApiError]] = {
    "index_not_found_exception": _index_not_found,
    "index_already_exists_exception": _index_already_exists,
    "resource_already_exists_exception": _index_already_exists,
    "document_missing_exception": _document_missing,
    "parsing_exception": _parsing,
    "mapper_parsing_exception": _mapper_parsing,
    "action_request_validation_exception": _action_request_validation,
}


def parse_api_error(status: int, body: Any) -> ApiError:
    """
    Build an ``ApiError`` from a decoded error body.

    Understands the ``{"error": {"type": ..., "reason": ...}, "status": ...}``
    shape and the plain string ``{"error": "..."}`` shape of older nodes.

    Raises:
        ResponseError: If ``body`` has no usable ``error`` entry
    """
    error = body.get("error") if isinstance(body, dict) else None

    if isinstance(error, str):
        return OtherApiError("error", error, status, body)

    if not isinstance(error, dict):
        raise ResponseError(status, "response body is neither a success nor an API error")

    error_type = error.get("type")
    if not isinstance(error_type, str):
        return OtherApiError("unknown", error.get("reason"), status, body)

    factory = _API_ERRORS.get(error_type)
    if factory is None:
        return OtherApiError(error_type, error.get("reason"), status, body)
    return factory(error, status, body)


def parse_response(status: int, body: bytes, response_type: Type[T]) -> T:
    """
    Classify a buffered response body.

    Args:
        status: HTTP status code
        body: Raw response body
        response_type: Class providing ``is_ok(status, body)`` and
            ``from_body(body)`` classmethods

    Returns:
        Value built by ``response_type.from_body``

    Raises:
        ApiError: Structured failure reported by Elasticsearch
        ResponseError: Undecodable body, or a body that is neither a success
            for ``response_type`` nor an API error
    """
    tree = decode_body(status, body)

    if response_type.is_ok(status, tree):
        try:
            return response_type.from_body(tree)
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise ResponseError(
                status,
                f"response body does not match {response_type.__name__}",
                cause=e,
            ) from e

    raise parse_api_error(status, tree)
