from __future__ import annotations

import json
from typing import List

import httpx
import pytest
from typer.testing import CliRunner

from src.application.use_cases.health_facade import Health
from src.application.use_cases.service_health_use_cases import (
    GetServiceAddressesUseCase,
    GetServiceHealthSummaryUseCase,
)
from src.infrastructure.client_handle import ClientHandle
from src.infrastructure.gateways.consul_client import ConsulClient
from src.infrastructure.gateways.health_gateway import HealthGateway
from src.main import cli

runner = CliRunner()


class _Container:
    def __init__(self, client: ConsulClient) -> None:
        self._health = Health(ClientHandle(client), HealthGateway())

    def health(self) -> Health:
        return self._health

    def get_service_health_summary_use_case(self) -> GetServiceHealthSummaryUseCase:
        return GetServiceHealthSummaryUseCase(health=self._health)

    def get_service_addresses_use_case(self) -> GetServiceAddressesUseCase:
        return GetServiceAddressesUseCase(health=self._health)


@pytest.fixture()
def use_transport(monkeypatch):
    def _install(transport: httpx.MockTransport) -> None:
        client = ConsulClient("http://consul:8500", transport=transport)
        monkeypatch.setattr(cli, "_container", lambda: _Container(client))

    return _install


def test_service_prints_summary(
    use_transport, mock_transport, service_entries_payload, consul_headers
) -> None:
    requests: List[httpx.Request] = []
    use_transport(
        mock_transport(service_entries_payload, headers=consul_headers, requests=requests)
    )

    result = runner.invoke(
        cli.app, ["service", "web", "--tag", "v2", "--passing", "--variant", "ingress"]
    )

    assert result.exit_code == 0, result.output
    summary = json.loads(result.stdout)
    assert summary["status"] == "warning"
    assert summary["variant"] == "ingress"
    assert summary["last_index"] == 42
    assert [i["status"] for i in summary["instances"]] == ["warning", "passing"]
    assert requests[0].url.path == "/v1/health/ingress/web"
    assert requests[0].url.params.get_list("tag") == ["v2"]
    assert requests[0].url.params["passing"] == "1"


def test_addresses_lists_complete_instances(
    use_transport, mock_transport, service_entries_payload
) -> None:
    requests: List[httpx.Request] = []
    use_transport(mock_transport(service_entries_payload, requests=requests))

    result = runner.invoke(cli.app, ["addresses", "web"])

    assert result.exit_code == 0, result.output
    assert json.loads(result.stdout) == ["10.0.0.1:8080"]
    assert requests[0].url.path == "/v1/health/connect/web"


def test_node_prints_checks(use_transport, mock_transport) -> None:
    use_transport(
        mock_transport(
            [
                {"Node": "node-1", "CheckID": "serfHealth", "Status": "passing"},
                {"Node": "node-1", "CheckID": "_node_maintenance", "Status": "critical"},
            ]
        )
    )

    result = runner.invoke(cli.app, ["node", "node-1"])

    assert result.exit_code == 0, result.output
    payload = json.loads(result.stdout)
    assert payload["status"] == "maintenance"
    assert len(payload["checks"]) == 2


def test_state_rejects_unknown_state(use_transport, mock_transport) -> None:
    requests: List[httpx.Request] = []
    use_transport(mock_transport([], requests=requests))

    result = runner.invoke(cli.app, ["state", "bogus"])

    assert result.exit_code == 2
    assert requests == []


def test_transport_failure_exits_with_error(use_transport, mock_transport) -> None:
    use_transport(mock_transport({"error": "boom"}, status_code=500))

    result = runner.invoke(cli.app, ["state", "critical"])

    assert result.exit_code == 1
