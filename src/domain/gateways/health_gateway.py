"""
Health Gateway Interface - Domain Layer

This module defines the interface for reading the Consul health endpoints.
"""

from abc import ABC, abstractmethod
from typing import Optional, Sequence

from src.domain.entities.health import HealthCheck, QueryResult, ServiceEntry
from src.domain.entities.query import HealthVariant, QueryOptions
from src.domain.ports.consul_client import IConsulClient


class IHealthGateway(ABC):
    """Interface for Health Gateway."""

    @abstractmethod
    async def service_entries(
        self,
        client: Optional[IConsulClient],
        service: str,
        tags: Sequence[str],
        passing_only: bool,
        variant: HealthVariant,
        options: Optional[QueryOptions] = None,
    ) -> QueryResult[ServiceEntry]:
        """
        Retrieve the instances of ``service`` together with their checks.

        Args:
            client: Transport used for the request
            service: Service name
            tags: Tags every returned instance must carry
            passing_only: Only return instances whose checks are all passing
            variant: Catalog view to query
            options: Blocking query, ACL and datacenter options

        Returns:
            QueryResult: Matching entries and the query metadata

        Raises:
            ConfigurationError: If ``client`` is None
            TransportError: If the request fails
            DecodeError: If the response cannot be decoded
        """
        pass

    @abstractmethod
    async def node_checks(
        self,
        client: Optional[IConsulClient],
        node: str,
        options: Optional[QueryOptions] = None,
    ) -> QueryResult[HealthCheck]:
        """Retrieve the checks registered on ``node``."""
        pass

    @abstractmethod
    async def service_checks(
        self,
        client: Optional[IConsulClient],
        service: str,
        options: Optional[QueryOptions] = None,
    ) -> QueryResult[HealthCheck]:
        """Retrieve the checks associated with ``service``."""
        pass

    @abstractmethod
    async def checks_in_state(
        self,
        client: Optional[IConsulClient],
        state: str,
        options: Optional[QueryOptions] = None,
    ) -> QueryResult[HealthCheck]:
        """Retrieve every check currently in ``state``."""
        pass
