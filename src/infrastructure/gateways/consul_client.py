"""
Infrastructure Gateway - Consul HTTP client

This module implements the transport used by the health gateway: it sends
GET requests to a Consul agent with httpx, decodes the JSON body and reads
the blocking-query metadata from the response headers.
"""

from __future__ import annotations

from datetime import timedelta
from time import perf_counter
from typing import Dict, Mapping, Optional

import httpx

from src.domain.entities.errors import DecodeError, TransportError
from src.domain.entities.health import QueryMeta
from src.domain.entities.query import QueryParams
from src.domain.ports.consul_client import ConsulResponse, IConsulClient
from src.shared import DEFAULT_CONSUL_ADDRESS, get_logger

logger = get_logger(__name__)


class ConsulClient(IConsulClient):
    """HTTP client for a Consul agent."""

    def __init__(
        self,
        address: str = DEFAULT_CONSUL_ADDRESS,
        *,
        token: Optional[str] = None,
        datacenter: Optional[str] = None,
        namespace: Optional[str] = None,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize the Consul client.

        Args:
            address: Agent address; ``host:port`` defaults to the http scheme
            token: ACL token sent with every request unless overridden
            datacenter: Default datacenter, sent as ``dc`` when set
            namespace: Default namespace, sent as ``ns`` when set
            timeout: Request timeout in seconds
            transport: Optional httpx transport, mostly useful for tests
        """
        if "://" not in address:
            address = f"http://{address}"
        self.address = address.rstrip("/")
        self.token = token
        self.datacenter = datacenter
        self.namespace = namespace
        self.timeout = timeout
        self._transport = transport

    def __repr__(self) -> str:
        return f"ConsulClient(address={self.address!r})"

    async def get(
        self,
        path: str,
        *,
        params: Optional[QueryParams] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> ConsulResponse:
        url = f"{self.address}{path}"
        query = self._with_defaults(params or [])
        request_headers = {"Accept": "application/json"}
        if self.token:
            request_headers["X-Consul-Token"] = self.token
        request_headers.update(headers or {})

        logger.debug("consul.request", url=url, params=query)

        start = perf_counter()
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, transport=self._transport
            ) as client:
                response = await client.get(url, params=query, headers=request_headers)
                response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error(
                "consul.http_error",
                status_code=e.response.status_code,
                response_text=e.response.text,
                url=url,
            )
            raise TransportError(
                f"Consul returned HTTP {e.response.status_code}: {e.response.text}",
                status_code=e.response.status_code,
                details={"url": url, "response_text": e.response.text},
            ) from e
        except httpx.RequestError as e:
            logger.error("consul.request_error", error=str(e), url=url)
            raise TransportError(
                f"Failed to communicate with Consul: {e}",
                details={"url": url},
            ) from e

        request_time = timedelta(seconds=perf_counter() - start)

        try:
            body = response.json()
        except ValueError as e:
            # JSONDecodeError and UnicodeDecodeError for non UTF-8 bodies.
            logger.error("consul.decode_error", error=str(e), url=url)
            raise DecodeError(
                f"Consul returned invalid JSON: {e}", details={"url": url}
            ) from e

        meta = parse_query_meta(response.headers, request_time)
        logger.debug(
            "consul.response",
            url=url,
            status_code=response.status_code,
            last_index=meta.last_index,
        )
        return ConsulResponse(body=body, meta=meta)

    def _with_defaults(self, params: QueryParams) -> QueryParams:
        keys = {key for key, _ in params}
        defaults: QueryParams = []
        if self.datacenter and "dc" not in keys:
            defaults.append(("dc", self.datacenter))
        if self.namespace and "ns" not in keys:
            defaults.append(("ns", self.namespace))
        return defaults + list(params)


def parse_query_meta(
    headers: Mapping[str, str], request_time: Optional[timedelta] = None
) -> QueryMeta:
    """Build QueryMeta from the ``X-Consul-*`` and cache response headers."""

    last_index = _parse_int(headers.get("X-Consul-Index"))
    last_contact = _parse_int(headers.get("X-Consul-LastContact"))
    cache = headers.get("X-Cache")
    age = _parse_int(headers.get("Age"))

    return QueryMeta(
        last_index=last_index,
        last_content_hash=headers.get("X-Consul-ContentHash"),
        last_contact=(
            timedelta(milliseconds=last_contact) if last_contact is not None else None
        ),
        known_leader=_parse_bool(headers.get("X-Consul-KnownLeader")),
        request_time=request_time,
        address_translation_enabled=_parse_bool(
            headers.get("X-Consul-Translate-Addresses")
        ),
        cache_hit=None if cache is None else cache.upper() == "HIT",
        cache_age=timedelta(seconds=age) if age is not None else None,
        default_acl_policy=headers.get("X-Consul-Default-ACL-Policy"),
    )


def _parse_int(value: Optional[str]) -> Optional[int]:
    if value is None or value == "":
        return None
    try:
        return int(value)
    except ValueError as e:
        raise DecodeError(f"Invalid numeric header value: {value!r}") from e


def _parse_bool(value: Optional[str]) -> Optional[bool]:
    if value is None:
        return None
    return value.lower() == "true"
