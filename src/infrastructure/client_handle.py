"""
Shared, swappable handle to the active Consul client.

Readers take the read lock only long enough to capture the current client;
the request itself runs on that captured reference, so ``replace`` never
disturbs calls already in flight.
"""

from __future__ import annotations

import asyncio
from contextlib import asynccontextmanager
from typing import AsyncIterator, Callable, Optional

from src.domain.entities.errors import ConfigurationError
from src.domain.ports.consul_client import IClientProvider, IConsulClient
from src.shared import get_logger

logger = get_logger(__name__)

ClientFactory = Callable[[], IConsulClient]


class ReadWriteLock:
    """Asyncio reader/writer lock; a waiting writer blocks new readers."""

    def __init__(self) -> None:
        self._condition = asyncio.Condition()
        self._readers = 0
        self._writer = False
        self._writers_waiting = 0

    @asynccontextmanager
    async def read(self) -> AsyncIterator[None]:
        async with self._condition:
            await self._condition.wait_for(
                lambda: not self._writer and self._writers_waiting == 0
            )
            self._readers += 1
        try:
            yield
        finally:
            async with self._condition:
                self._readers -= 1
                if self._readers == 0:
                    self._condition.notify_all()

    @asynccontextmanager
    async def write(self) -> AsyncIterator[None]:
        async with self._condition:
            self._writers_waiting += 1
            try:
                await self._condition.wait_for(
                    lambda: not self._writer and self._readers == 0
                )
            finally:
                self._writers_waiting -= 1
                # Readers parked behind a cancelled writer must re-check.
                self._condition.notify_all()
            self._writer = True
        try:
            yield
        finally:
            async with self._condition:
                self._writer = False
                self._condition.notify_all()


class ClientHandle(IClientProvider):
    """
    Holds the client used by the health facade.

    The client is built lazily from ``factory`` on first use. A factory
    failure surfaces as ``ConfigurationError`` to that caller and leaves the
    handle empty, so a later call (or ``replace``) can recover.
    """

    def __init__(
        self,
        client: Optional[IConsulClient] = None,
        *,
        factory: Optional[ClientFactory] = None,
    ) -> None:
        self._client = client
        self._factory = factory
        self._lock = ReadWriteLock()

    async def current(self) -> Optional[IConsulClient]:
        """Return the active client, building it on first use."""

        async with self._lock.read():
            client = self._client
        if client is not None or self._factory is None:
            return client

        async with self._lock.write():
            if self._client is None:
                self._client = self._build()
            return self._client

    async def replace(self, client: Optional[IConsulClient] = None) -> IConsulClient:
        """
        Install ``client`` (or a fresh one from the factory) as the active client.

        Raises:
            ConfigurationError: If no client is given and no factory is set,
                or the factory fails.
        """

        async with self._lock.write():
            new_client = client if client is not None else self._build()
            previous = self._client
            self._client = new_client

        logger.info(
            "consul.client.replaced",
            previous=repr(previous) if previous is not None else None,
            current=repr(new_client),
        )
        return new_client

    def _build(self) -> IConsulClient:
        if self._factory is None:
            raise ConfigurationError("No Consul client factory configured")
        try:
            return self._factory()
        except Exception as exc:
            logger.error("consul.client.init_failed", error=str(exc))
            raise ConfigurationError(
                f"Failed to initialize Consul client: {exc}"
            ) from exc
