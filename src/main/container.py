"""
Dependency container injection module - Main Layer

This module implements the dependency injection container
that wires the Consul client, the health gateway and the
use cases built on top of them.
"""

from dependency_injector import containers, providers

from src.application.use_cases.health_facade import Health
from src.application.use_cases.service_health_use_cases import (
    GetServiceAddressesUseCase,
    GetServiceHealthSummaryUseCase,
)
from src.infrastructure.client_handle import ClientHandle
from src.infrastructure.gateways.consul_client import ConsulClient
from src.infrastructure.gateways.health_gateway import HealthGateway
from src.shared import get_logger

from .config import AppSettings

logger = get_logger(__name__)


class AppContainer(containers.DeclarativeContainer):
    """Composition Root using dependency-injector."""

    # Settings
    config = providers.Configuration()

    # Infrastructure
    # A Factory so every reload picks up the current configuration.
    consul_client = providers.Factory(
        ConsulClient,
        address=config.consul.address,
        token=config.consul.token,
        datacenter=config.consul.datacenter,
        namespace=config.consul.namespace,
        timeout=config.consul.timeout,
    )

    client_handle = providers.Singleton(
        ClientHandle,
        factory=consul_client.provider,
    )

    health_gateway = providers.Singleton(HealthGateway)

    # Application
    health = providers.Singleton(
        Health,
        handle=client_handle,
        gateway=health_gateway,
    )

    get_service_health_summary_use_case = providers.Factory(
        GetServiceHealthSummaryUseCase,
        health=health,
    )

    get_service_addresses_use_case = providers.Factory(
        GetServiceAddressesUseCase,
        health=health,
    )


# -------------------------
# Global Container Instance
# -------------------------
_app_container: AppContainer | None = None


def init_container(settings: AppSettings) -> AppContainer:
    """Initialize global container with application settings."""

    global _app_container

    container = AppContainer()
    container.config.from_pydantic(settings)
    _app_container = container
    return container


def get_container() -> AppContainer:
    """Get the initialized global container."""

    if _app_container is None:
        raise RuntimeError("Container has not been initialized yet")

    return _app_container


async def reconfigure(settings: AppSettings) -> AppContainer:
    """
    Apply new settings to the running container.

    The shared health facade keeps its identity; only its Consul client is
    replaced, so callers holding the facade see the new agent on their next
    request.
    """

    container = get_container()
    container.config.from_pydantic(settings)
    client = await container.health().reload_client()
    logger.info("container.consul.reconfigured", address=client.address)
    return container
