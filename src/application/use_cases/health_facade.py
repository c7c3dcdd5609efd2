"""Client-facing entry point for reading Consul health."""

from __future__ import annotations

from typing import List, Optional, Sequence

from src.domain.entities.health import (
    HealthCheck,
    QueryResult,
    ServiceEntry,
)
from src.domain.entities.query import HealthVariant, QueryOptions
from src.domain.gateways.health_gateway import IHealthGateway
from src.domain.ports.consul_client import IClientProvider, IConsulClient


class Health:
    """
    Reads the Consul health endpoints through a shared client handle.

    Every call captures the handle's current client once and uses it for the
    whole request; ``reload_client`` swaps the client for later calls only.
    """

    def __init__(self, handle: IClientProvider, gateway: IHealthGateway) -> None:
        self._handle = handle
        self._gateway = gateway

    async def reload_client(
        self, client: Optional[IConsulClient] = None
    ) -> IConsulClient:
        """Replace the shared client, e.g. after the agent address changed."""
        return await self._handle.replace(client)

    async def service(
        self,
        service: str,
        tag: str = "",
        passing_only: bool = False,
        options: Optional[QueryOptions] = None,
    ) -> List[ServiceEntry]:
        """
        Return the instances of ``service``, optionally filtered by one tag.

        Queries the connect (service mesh) view. Use ``service_entries`` for
        the plain or ingress views.
        """

        tags = [tag] if tag else []
        result = await self.service_entries(
            service, tags, passing_only, HealthVariant.CONNECT, options
        )
        return result.items

    async def service_address(
        self,
        service: str,
        tag: str = "",
        passing_only: bool = False,
        options: Optional[QueryOptions] = None,
    ) -> List[str]:
        """Return ``host:port`` for every instance that has both an address and a port."""

        entries = await self.service(service, tag, passing_only, options)
        return [entry.address for entry in entries if entry.address is not None]

    async def service_entries(
        self,
        service: str,
        tags: Sequence[str] = (),
        passing_only: bool = False,
        variant: HealthVariant = HealthVariant.PLAIN,
        options: Optional[QueryOptions] = None,
    ) -> QueryResult[ServiceEntry]:
        client = await self._handle.current()
        return await self._gateway.service_entries(
            client, service, tags, passing_only, variant, options
        )

    async def service_multiple_tags(
        self,
        service: str,
        tags: Sequence[str],
        passing_only: bool = False,
        options: Optional[QueryOptions] = None,
    ) -> QueryResult[ServiceEntry]:
        return await self.service_entries(
            service, tags, passing_only, HealthVariant.PLAIN, options
        )

    async def connect(
        self,
        service: str,
        tag: str = "",
        passing_only: bool = False,
        options: Optional[QueryOptions] = None,
    ) -> QueryResult[ServiceEntry]:
        tags = [tag] if tag else []
        return await self.service_entries(
            service, tags, passing_only, HealthVariant.CONNECT, options
        )

    async def ingress(
        self,
        service: str,
        passing_only: bool = False,
        options: Optional[QueryOptions] = None,
    ) -> QueryResult[ServiceEntry]:
        return await self.service_entries(
            service, (), passing_only, HealthVariant.INGRESS, options
        )

    async def node(
        self, node: str, options: Optional[QueryOptions] = None
    ) -> QueryResult[HealthCheck]:
        client = await self._handle.current()
        return await self._gateway.node_checks(client, node, options)

    async def checks(
        self, service: str, options: Optional[QueryOptions] = None
    ) -> QueryResult[HealthCheck]:
        client = await self._handle.current()
        return await self._gateway.service_checks(client, service, options)

    async def state(
        self, state: str, options: Optional[QueryOptions] = None
    ) -> QueryResult[HealthCheck]:
        client = await self._handle.current()
        return await self._gateway.checks_in_state(client, state, options)
