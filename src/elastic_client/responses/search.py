"""Response of the search API."""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional

from .base import Response


@dataclass(frozen=True)
class Hit:
    """A single search hit."""

    index: str
    id: str
    score: Optional[float] = None
    ty: Optional[str] = None
    source: Optional[Dict[str, Any]] = None

    @classmethod
    def from_body(cls, body: Dict[str, Any]) -> 'Hit':
        return cls(
            index=body["_index"],
            id=str(body["_id"]),
            score=body.get("_score"),
            ty=body.get("_type"),
            source=body.get("_source"),
        )


@dataclass(frozen=True)
class SearchResponse(Response):
    """
    Response of the search API.

    Example:
        >>> res = client.search("bank").body({"query": {"match_all": {}}}).send()
        >>> for doc in res.documents():
        ...     print(doc)
    """

    took: int
    timed_out: bool
    total: int
    hits: List[Hit] = field(default_factory=list)
    max_score: Optional[float] = None
    shards: Dict[str, Any] = field(default_factory=dict)
    aggregations: Optional[Dict[str, Any]] = None

    @classmethod
    def from_body(cls, body: Dict[str, Any]) -> 'SearchResponse':
        hits = body["hits"]

        total = hits.get("total", 0)
        # 7.x reports {"value": n, "relation": "eq"}
        if isinstance(total, dict):
            total = total["value"]

        return cls(
            took=body["took"],
            timed_out=bool(body["timed_out"]),
            total=int(total),
            hits=[Hit.from_body(hit) for hit in hits.get("hits", [])],
            max_score=hits.get("max_score"),
            shards=body.get("_shards", {}),
            aggregations=body.get("aggregations"),
        )

    def documents(self) -> Iterator[Optional[Dict[str, Any]]]:
        """Iterate over the ``_source`` of every hit."""
        return (hit.source for hit in self.hits)

    def __len__(self) -> int:
        return len(self.hits)
