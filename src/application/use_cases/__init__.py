"""
Use Cases Package - Application Layer

This package contains the health facade and the use cases composed on top
of it.
"""

from .health_facade import Health
from .service_health_use_cases import (
    GetServiceAddressesUseCase,
    GetServiceHealthSummaryUseCase,
)

__all__ = [
    "Health",
    "GetServiceAddressesUseCase",
    "GetServiceHealthSummaryUseCase",
]
