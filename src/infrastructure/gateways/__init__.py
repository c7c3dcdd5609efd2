"""
Gateways Package - Infrastructure Layer

This package contains concrete implementations of the gateway
interfaces defined in the domain layer. These implementations
handle the details of the communication with Consul.
"""

from .consul_client import ConsulClient, parse_query_meta
from .health_gateway import HealthGateway

__all__ = ["ConsulClient", "HealthGateway", "parse_query_meta"]
