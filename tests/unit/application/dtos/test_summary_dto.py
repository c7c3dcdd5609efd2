from __future__ import annotations

from src.application.dtos.summary_dto import InstanceHealthDTO
from src.domain.entities.health import ServiceEntry
from tests.factories import make_entry


def test_instance_health_from_domain() -> None:
    entry = make_entry("10.0.0.1", 8080, ("passing", "warning"))

    dto = InstanceHealthDTO.from_domain(entry, "warning")

    assert dto.node == "node-1"
    assert dto.service_id == "web-node-1"
    assert dto.address == "10.0.0.1:8080"
    assert dto.status == "warning"
    assert dto.checks == 2


def test_instance_health_handles_missing_records() -> None:
    dto = InstanceHealthDTO.from_domain(ServiceEntry(), "passing")
    assert dto.node is None
    assert dto.address is None
    assert dto.checks == 0
