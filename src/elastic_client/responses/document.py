"""Responses for single document endpoints: get and index."""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from .base import Response


@dataclass(frozen=True)
class GetResponse(Response):
    """
    Response of the get document API.

    A body with a top-level ``found`` field is a success even with a 404
    status: ``found: false`` means the index exists but the document
    doesn't. An index that doesn't exist comes back as an ``ApiError``.

    Example:
        >>> res = client.get_document("bank", 1).send()
        >>> res.into_document()
        {'account_number': 1, ...}
    """

    found: bool
    index: Optional[str] = None
    id: Optional[str] = None
    ty: Optional[str] = None
    version: Optional[int] = None
    source: Optional[Dict[str, Any]] = None

    @classmethod
    def is_ok(cls, status: int, body: Any) -> bool:
        if isinstance(body, dict) and "found" in body:
            return True
        return super().is_ok(status, body)

    @classmethod
    def from_body(cls, body: Dict[str, Any]) -> 'GetResponse':
        doc_id = body.get("_id")
        return cls(
            found=bool(body["found"]),
            index=body.get("_index"),
            id=None if doc_id is None else str(doc_id),
            ty=body.get("_type"),
            version=body.get("_version"),
            source=body.get("_source"),
        )

    def into_document(self) -> Optional[Dict[str, Any]]:
        """The document source, or None if it wasn't found."""
        if not self.found:
            return None
        return self.source


@dataclass(frozen=True)
class IndexResponse(Response):
    """Response of the index document API."""

    index: str
    id: str
    created: bool
    ty: Optional[str] = None
    version: Optional[int] = None
    result: Optional[str] = None
    shards: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_body(cls, body: Dict[str, Any]) -> 'IndexResponse':
        result = body.get("result")
        # 5.x reports "created", later versions report "result"
        created = body.get("created", result == "created")
        return cls(
            index=body["_index"],
            id=str(body["_id"]),
            created=bool(created),
            ty=body.get("_type"),
            version=body.get("_version"),
            result=result,
            shards=body.get("_shards", {}),
        )
