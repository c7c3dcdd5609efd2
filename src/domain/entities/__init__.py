"""
Domain Entities Package

This package contains the value objects returned by the Consul health API.
"""

from .catalog import AgentService, Node
from .errors import ConfigurationError, DecodeError, DomainError, TransportError
from .health import (
    NODE_MAINT,
    SERVICE_MAINT_PREFIX,
    UNKNOWN_STATUS,
    HealthCheck,
    HealthCheckDefinition,
    HealthChecks,
    HealthStatus,
    QueryMeta,
    QueryResult,
    ServiceEntry,
    is_maintenance_check_id,
)
from .query import HealthVariant, QueryOptions

__all__ = [
    "AgentService",
    "Node",
    "HealthCheck",
    "HealthCheckDefinition",
    "HealthChecks",
    "HealthStatus",
    "ServiceEntry",
    "QueryMeta",
    "QueryResult",
    "QueryOptions",
    "HealthVariant",
    "NODE_MAINT",
    "SERVICE_MAINT_PREFIX",
    "UNKNOWN_STATUS",
    "is_maintenance_check_id",
    "DomainError",
    "ConfigurationError",
    "TransportError",
    "DecodeError",
]
