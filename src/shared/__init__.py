"""
Shared module - Cross-cutting concerns / Shared Layer

This module provides utilities and enums used across multiple layers:
environment names, log levels and the logging setup itself. It must not
depend on the domain, application or infrastructure layers.
"""

from .consts import DEFAULT_CONSUL_ADDRESS, EnumEnvironment, EnumLogLevel
from .logging import configure_logging, get_logger, update_logging_from_settings

__all__ = [
    "DEFAULT_CONSUL_ADDRESS",
    "EnumEnvironment",
    "EnumLogLevel",
    "configure_logging",
    "get_logger",
    "update_logging_from_settings",
]
