from __future__ import annotations

from datetime import timedelta

import httpx
import pytest

from src.domain.entities.errors import DecodeError, TransportError
from src.infrastructure.gateways.consul_client import ConsulClient, parse_query_meta


@pytest.mark.asyncio
async def test_get_returns_body_and_meta(mock_transport, consul_headers) -> None:
    requests: list[httpx.Request] = []
    client = ConsulClient(
        "http://consul:8500",
        transport=mock_transport([{"ok": True}], headers=consul_headers, requests=requests),
    )

    response = await client.get("/v1/health/service/web", params=[("tag", "v2")])

    assert response.body == [{"ok": True}]
    assert response.meta.last_index == 42
    assert response.meta.known_leader is True
    assert response.meta.last_contact == timedelta(milliseconds=15)
    assert response.meta.default_acl_policy == "allow"
    assert response.meta.request_time is not None
    assert str(requests[0].url) == "http://consul:8500/v1/health/service/web?tag=v2"
    assert requests[0].method == "GET"


@pytest.mark.asyncio
async def test_get_sends_token_and_default_scope(mock_transport) -> None:
    requests: list[httpx.Request] = []
    client = ConsulClient(
        "consul:8500",
        token="secret",
        datacenter="dc1",
        namespace="team-a",
        transport=mock_transport([], requests=requests),
    )

    await client.get("/v1/health/node/n1")

    request = requests[0]
    assert client.address == "http://consul:8500"
    assert request.headers["X-Consul-Token"] == "secret"
    assert request.url.params.get("dc") == "dc1"
    assert request.url.params.get("ns") == "team-a"


@pytest.mark.asyncio
async def test_explicit_options_override_client_defaults(mock_transport) -> None:
    requests: list[httpx.Request] = []
    client = ConsulClient(
        "http://consul:8500",
        token="default",
        datacenter="dc1",
        transport=mock_transport([], requests=requests),
    )

    await client.get(
        "/v1/health/node/n1",
        params=[("dc", "dc2")],
        headers={"X-Consul-Token": "override"},
    )

    assert requests[0].url.params.get_list("dc") == ["dc2"]
    assert requests[0].headers["X-Consul-Token"] == "override"


@pytest.mark.asyncio
async def test_non_2xx_raises_transport_error(mock_transport) -> None:
    client = ConsulClient(
        "http://consul:8500",
        transport=mock_transport(content=b"ACL not found", status_code=403),
    )

    with pytest.raises(TransportError) as exc_info:
        await client.get("/v1/health/service/web")

    assert exc_info.value.status_code == 403
    assert "ACL not found" in exc_info.value.message


@pytest.mark.asyncio
async def test_network_failure_raises_transport_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    client = ConsulClient("http://consul:8500", transport=httpx.MockTransport(handler))

    with pytest.raises(TransportError) as exc_info:
        await client.get("/v1/health/service/web")

    assert exc_info.value.status_code is None
    assert isinstance(exc_info.value.__cause__, httpx.ConnectError)


@pytest.mark.asyncio
async def test_invalid_json_raises_decode_error(mock_transport) -> None:
    client = ConsulClient(
        "http://consul:8500", transport=mock_transport(content=b"<html>")
    )

    with pytest.raises(DecodeError):
        await client.get("/v1/health/service/web")


@pytest.mark.asyncio
async def test_non_utf8_body_raises_decode_error(mock_transport) -> None:
    client = ConsulClient(
        "http://consul:8500", transport=mock_transport(content=b'[\xff\xfe"]')
    )

    with pytest.raises(DecodeError) as exc_info:
        await client.get("/v1/health/service/web")

    assert exc_info.value.details == {"url": "http://consul:8500/v1/health/service/web"}


def test_parse_query_meta_reads_all_headers() -> None:
    headers = httpx.Headers(
        {
            "X-Consul-Index": "7",
            "X-Consul-ContentHash": "abc123",
            "X-Consul-LastContact": "0",
            "X-Consul-KnownLeader": "false",
            "X-Consul-Translate-Addresses": "true",
            "X-Cache": "HIT",
            "Age": "12",
            "X-Consul-Default-ACL-Policy": "deny",
        }
    )

    meta = parse_query_meta(headers, timedelta(milliseconds=3))

    assert meta.last_index == 7
    assert meta.last_content_hash == "abc123"
    assert meta.last_contact == timedelta(0)
    assert meta.known_leader is False
    assert meta.address_translation_enabled is True
    assert meta.cache_hit is True
    assert meta.cache_age == timedelta(seconds=12)
    assert meta.default_acl_policy == "deny"
    assert meta.request_time == timedelta(milliseconds=3)


def test_parse_query_meta_leaves_missing_headers_absent() -> None:
    meta = parse_query_meta(httpx.Headers({"X-Cache": "MISS"}))

    assert meta.last_index is None
    assert meta.known_leader is None
    assert meta.cache_hit is False
    assert meta.cache_age is None


def test_parse_query_meta_rejects_garbage_index() -> None:
    with pytest.raises(DecodeError):
        parse_query_meta(httpx.Headers({"X-Consul-Index": "abc"}))
