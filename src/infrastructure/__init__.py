"""
Infrastructure Layer Package

This package contains implementations of interfaces defined in the
domain layer: the Consul HTTP transport, the health endpoint gateway and
the shared client handle.
"""

from src.infrastructure import gateways

__all__ = ["gateways"]
