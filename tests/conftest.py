from __future__ import annotations

import sys
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

import httpx
import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from src.shared.logging import configure_logging  # noqa: E402


@pytest.fixture(autouse=True, scope="session")
def _structured_logging() -> None:
    configure_logging(level="WARNING", environment="testing")


@pytest.fixture()
def service_entries_payload() -> List[Dict[str, Any]]:
    return [
        {
            "Node": {
                "ID": "40e4a748-2192-161a-0510-9bf59fe950b5",
                "Node": "node-1",
                "Address": "10.0.0.1",
                "Datacenter": "dc1",
                "TaggedAddresses": {"lan": "10.0.0.1", "wan": "10.0.0.1"},
                "Meta": {"instance_type": "t2.medium"},
                "Partition": "default",
                "CreateIndex": 5,
                "ModifyIndex": 7,
            },
            "Service": {
                "ID": "web-1",
                "Service": "web",
                "Tags": ["v2", "primary"],
                "Address": "10.0.0.1",
                "Port": 8080,
                "Meta": {"version": "2.0"},
                "Weights": {"Passing": 10, "Warning": 1},
                "EnableTagOverride": False,
                "CreateIndex": 9,
                "ModifyIndex": 9,
            },
            "Checks": [
                {
                    "Node": "node-1",
                    "CheckID": "serfHealth",
                    "Name": "Serf Health Status",
                    "Status": "passing",
                    "Notes": "",
                    "Output": "Agent alive and reachable",
                    "ServiceID": "",
                    "ServiceName": "",
                    "ServiceTags": [],
                    "Type": "",
                    "CreateIndex": 5,
                    "ModifyIndex": 5,
                },
                {
                    "Node": "node-1",
                    "CheckID": "service:web-1",
                    "Name": "HTTP on /health",
                    "Status": "warning",
                    "Output": "HTTP GET http://10.0.0.1:8080/health: 429",
                    "ServiceID": "web-1",
                    "ServiceName": "web",
                    "ServiceTags": ["v2", "primary"],
                    "Type": "http",
                    "Definition": {
                        "HTTP": "http://10.0.0.1:8080/health",
                        "Method": "GET",
                        "Header": {"Accept": ["application/json"]},
                        "TLSSkipVerify": False,
                        "IntervalDuration": 10_000_000_000,
                        "TimeoutDuration": 1_000_000_000,
                        "Interval": "10s",
                        "Timeout": "1s",
                    },
                    "CreateIndex": 9,
                    "ModifyIndex": 12,
                },
            ],
        },
        {
            "Node": {"Node": "node-2", "Address": "10.0.0.2"},
            "Service": {"ID": "web-2", "Service": "web", "Address": "10.0.0.2"},
            "Checks": [
                {"Node": "node-2", "CheckID": "serfHealth", "Status": "passing"},
            ],
        },
    ]


@pytest.fixture()
def consul_headers() -> Dict[str, str]:
    return {
        "X-Consul-Index": "42",
        "X-Consul-KnownLeader": "true",
        "X-Consul-LastContact": "15",
        "X-Consul-Default-ACL-Policy": "allow",
    }


@pytest.fixture()
def mock_transport() -> Callable[..., httpx.MockTransport]:
    """Build an httpx transport recording requests and replying with ``payload``."""

    def _factory(
        payload: Any = None,
        *,
        status_code: int = 200,
        headers: Optional[Dict[str, str]] = None,
        requests: Optional[List[httpx.Request]] = None,
        content: Optional[bytes] = None,
    ) -> httpx.MockTransport:
        def handler(request: httpx.Request) -> httpx.Response:
            if requests is not None:
                requests.append(request)
            if content is not None:
                return httpx.Response(status_code, content=content, headers=headers)
            return httpx.Response(status_code, json=payload, headers=headers)

        return httpx.MockTransport(handler)

    return _factory
