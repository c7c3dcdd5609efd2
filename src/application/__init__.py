"""
Application Layer Package

This package contains the health facade, the use cases built on it and the
DTOs translating between Consul JSON and domain entities.
"""

# Re-export submodules
from src.application import dtos, use_cases

__all__ = ["dtos", "use_cases"]
