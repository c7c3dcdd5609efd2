"""
Infrastructure Gateway - Consul Health Implementation

This module builds the requests for the ``/v1/health`` endpoints and shapes
their responses into domain records.
"""

from __future__ import annotations

from typing import Dict, Optional, Sequence, Tuple
from urllib.parse import quote

from src.application.dtos.health_dto import (
    decode_health_checks,
    decode_service_entries,
)
from src.domain.entities.errors import ConfigurationError
from src.domain.entities.health import (
    HealthCheck,
    HealthStatus,
    QueryResult,
    ServiceEntry,
)
from src.domain.entities.query import HealthVariant, QueryOptions, QueryParams
from src.domain.gateways.health_gateway import IHealthGateway
from src.domain.ports.consul_client import ConsulResponse, IConsulClient
from src.shared import get_logger

logger = get_logger(__name__)

_VARIANT_PATHS = {
    HealthVariant.PLAIN: "/v1/health/service/{}",
    HealthVariant.CONNECT: "/v1/health/connect/{}",
    HealthVariant.INGRESS: "/v1/health/ingress/{}",
}

_CHECK_STATES = frozenset(
    {
        HealthStatus.ANY.value,
        HealthStatus.PASSING.value,
        HealthStatus.WARNING.value,
        HealthStatus.CRITICAL.value,
    }
)


def service_health_path(service: str, variant: HealthVariant) -> str:
    """Return the endpoint path serving ``variant`` health for ``service``."""

    try:
        template = _VARIANT_PATHS[HealthVariant(variant)]
    except ValueError as e:
        raise ValueError(f"Unsupported health variant: {variant!r}") from e
    return template.format(quote(service, safe=""))


def service_health_params(
    tags: Sequence[str],
    passing_only: bool,
    options: Optional[QueryOptions] = None,
) -> Tuple[QueryParams, Dict[str, str]]:
    """Build the query parameters and headers of a service health request."""

    params: QueryParams = []
    headers: Dict[str, str] = {}
    if options is not None:
        params, headers = options.to_request_parts()
    for tag in tags:
        params.append(("tag", tag))
    if passing_only:
        params.append(("passing", "1"))
    return params, headers


class HealthGateway(IHealthGateway):
    """Reads the Consul health endpoints through an ``IConsulClient``."""

    async def service_entries(
        self,
        client: Optional[IConsulClient],
        service: str,
        tags: Sequence[str],
        passing_only: bool,
        variant: HealthVariant,
        options: Optional[QueryOptions] = None,
    ) -> QueryResult[ServiceEntry]:
        path = service_health_path(service, variant)
        params, headers = service_health_params(tags, passing_only, options)

        logger.info(
            "consul.health.service.request",
            service=service,
            variant=HealthVariant(variant).value,
            tags=list(tags),
            passing_only=passing_only,
        )

        response = await self._get(client, path, params, headers)
        entries = decode_service_entries(response.body)

        logger.info(
            "consul.health.service.response",
            service=service,
            count=len(entries),
            last_index=response.meta.last_index,
        )
        return QueryResult(items=entries, meta=response.meta)

    async def node_checks(
        self,
        client: Optional[IConsulClient],
        node: str,
        options: Optional[QueryOptions] = None,
    ) -> QueryResult[HealthCheck]:
        return await self._checks(
            client, f"/v1/health/node/{quote(node, safe='')}", options
        )

    async def service_checks(
        self,
        client: Optional[IConsulClient],
        service: str,
        options: Optional[QueryOptions] = None,
    ) -> QueryResult[HealthCheck]:
        return await self._checks(
            client, f"/v1/health/checks/{quote(service, safe='')}", options
        )

    async def checks_in_state(
        self,
        client: Optional[IConsulClient],
        state: str,
        options: Optional[QueryOptions] = None,
    ) -> QueryResult[HealthCheck]:
        state = getattr(state, "value", state)
        if state not in _CHECK_STATES:
            raise ValueError(f"Unsupported state: {state!r}")
        return await self._checks(client, f"/v1/health/state/{state}", options)

    async def _checks(
        self,
        client: Optional[IConsulClient],
        path: str,
        options: Optional[QueryOptions],
    ) -> QueryResult[HealthCheck]:
        params: QueryParams = []
        headers: Dict[str, str] = {}
        if options is not None:
            params, headers = options.to_request_parts()

        logger.info("consul.health.checks.request", path=path)

        response = await self._get(client, path, params, headers)
        checks = decode_health_checks(response.body)
        return QueryResult(items=list(checks), meta=response.meta)

    async def _get(
        self,
        client: Optional[IConsulClient],
        path: str,
        params: QueryParams,
        headers: Dict[str, str],
    ) -> ConsulResponse:
        if client is None:
            logger.error("consul.health.client_missing", path=path)
            raise ConfigurationError(details={"path": path})
        return await client.get(path, params=params, headers=headers)
