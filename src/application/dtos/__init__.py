"""
DTOs Package - Application Layer

This package contains Data Transfer Objects (DTOs): the Consul wire models
and the summaries returned by the use cases.
"""

from .health_dto import (
    AgentServiceDTO,
    HealthCheckDefinitionDTO,
    HealthCheckDTO,
    NodeDTO,
    ServiceEntryDTO,
    decode_health_checks,
    decode_service_entries,
    encode_service_entries,
)
from .summary_dto import InstanceHealthDTO, ServiceHealthSummaryDTO

__all__ = [
    "AgentServiceDTO",
    "HealthCheckDefinitionDTO",
    "HealthCheckDTO",
    "NodeDTO",
    "ServiceEntryDTO",
    "decode_health_checks",
    "decode_service_entries",
    "encode_service_entries",
    "InstanceHealthDTO",
    "ServiceHealthSummaryDTO",
]
