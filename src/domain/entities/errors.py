"""
Domain Errors

This module defines the failures a health query can surface. Each stage of
a read (client resolution, transport, decoding) has its own error type so
callers can tell which one failed.
"""

from typing import Any, Dict, Optional


class DomainError(Exception):
    """Base class for domain errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class ConfigurationError(DomainError):
    """Raised when no Consul client is available to serve a request."""

    def __init__(
        self,
        message: str = "Consul client is not configured",
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, details)


class TransportError(DomainError):
    """Raised when the request fails or Consul answers with a non-2xx status."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.status_code = status_code
        super().__init__(message, details)


class DecodeError(DomainError):
    """Raised when a response body does not match the expected shape."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details)
