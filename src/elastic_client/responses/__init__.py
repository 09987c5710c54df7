"""Typed Elasticsearch responses."""

from .base import Response, JsonResponse
from .command import CommandResponse, PingResponse
from .document import GetResponse, IndexResponse
from .search import Hit, SearchResponse

__all__ = [
    "Response",
    "JsonResponse",
    "GetResponse",
    "IndexResponse",
    "SearchResponse",
    "Hit",
    "CommandResponse",
    "PingResponse",
]
