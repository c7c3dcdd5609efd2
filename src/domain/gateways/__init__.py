"""
Gateways Package - Domain Layer

This package contains interfaces defining gateway contracts
for external service communications. Specific implementations
are provided by the infrastructure layer.
"""

from .health_gateway import IHealthGateway

__all__ = ["IHealthGateway"]
