"""Port describing the transport used to read from a Consul agent."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional, Protocol

from src.domain.entities.health import QueryMeta
from src.domain.entities.query import QueryParams


@dataclass(frozen=True, slots=True)
class ConsulResponse:
    """Decoded JSON body of a successful read plus its query metadata."""

    body: Any
    meta: QueryMeta


class IConsulClient(Protocol):
    """Interface of the HTTP client issuing requests against a Consul agent."""

    address: str

    async def get(
        self,
        path: str,
        *,
        params: Optional[QueryParams] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> ConsulResponse:
        """Issue a GET request and return the decoded body and metadata."""
        ...


class IClientProvider(Protocol):
    """Interface of the shared holder of the active Consul client."""

    async def current(self) -> Optional[IConsulClient]:
        """Return the client new requests should use, if any."""
        ...

    async def replace(self, client: Optional[IConsulClient] = None) -> IConsulClient:
        """Install a new client for subsequent requests."""
        ...
