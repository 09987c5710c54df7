"""Responses for commands and the ping endpoint."""

from dataclasses import dataclass
from typing import Any, Dict, Optional

from .base import Response


@dataclass(frozen=True)
class CommandResponse(Response):
    """Response of index administration commands (create index, put mapping)."""

    acknowledged: bool

    @classmethod
    def from_body(cls, body: Dict[str, Any]) -> 'CommandResponse':
        return cls(acknowledged=bool(body["acknowledged"]))


@dataclass(frozen=True)
class PingResponse(Response):
    """Response of the root endpoint of a node."""

    name: str
    cluster_name: str
    version: str
    tagline: Optional[str] = None

    @classmethod
    def from_body(cls, body: Dict[str, Any]) -> 'PingResponse':
        return cls(
            name=body["name"],
            cluster_name=body["cluster_name"],
            version=body["version"]["number"],
            tagline=body.get("tagline"),
        )
