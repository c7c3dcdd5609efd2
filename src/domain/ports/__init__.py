"""Domain ports package."""

from .consul_client import ConsulResponse, IClientProvider, IConsulClient

__all__ = ["ConsulResponse", "IClientProvider", "IConsulClient"]
