"""DTOs summarizing the health of a service's instances."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field

from src.domain.entities.health import ServiceEntry


class InstanceHealthDTO(BaseModel):
    """Aggregated health of a single service instance."""

    node: Optional[str] = Field(default=None, description="Node name")
    service_id: Optional[str] = Field(default=None, description="Service ID")
    address: Optional[str] = Field(
        default=None, description="host:port when both are known"
    )
    status: str = Field(
        description="Aggregated status; empty when the checks are inconsistent"
    )
    checks: int = Field(default=0, description="Number of checks considered")

    @classmethod
    def from_domain(cls, entry: ServiceEntry, status: str) -> "InstanceHealthDTO":
        return cls(
            node=entry.node.node if entry.node else None,
            service_id=entry.service.id if entry.service else None,
            address=entry.address,
            status=status,
            checks=len(entry.checks) if entry.checks is not None else 0,
        )


class ServiceHealthSummaryDTO(BaseModel):
    """Health of every instance of a service plus an overall status."""

    service: str = Field(description="Service name")
    variant: str = Field(description="Catalog view queried")
    status: str = Field(description="Aggregated status across all instances")
    instances: List[InstanceHealthDTO] = Field(default_factory=list)
    last_index: Optional[int] = Field(
        default=None, description="Index to resume a blocking query from"
    )

    model_config = {
        "json_schema_extra": {
            "example": {
                "service": "web",
                "variant": "plain",
                "status": "warning",
                "instances": [
                    {
                        "node": "node-1",
                        "service_id": "web-1",
                        "address": "10.0.0.1:8080",
                        "status": "warning",
                        "checks": 2,
                    }
                ],
                "last_index": 42,
            }
        }
    }
