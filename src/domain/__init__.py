"""
Domain Layer Package

This package contains the health records, the status vocabulary and the
aggregation rules. It defines entities, ports and gateway interfaces without
dependencies on external frameworks or infrastructure concerns.
"""

# Re-export submodules
from src.domain import entities, gateways, ports, services

__all__ = ["entities", "gateways", "ports", "services"]
