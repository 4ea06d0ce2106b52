from __future__ import annotations

import importlib
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any, cast
from urllib.parse import urlparse

from pymongo import AsyncMongoClient
from pymongo.asynchronous.database import AsyncDatabase

from contactgain.config import Config


class Service:
    """Base class for services with direct database access."""

    def __init__(self, database: AsyncDatabase[dict[str, Any]]) -> None:
        self.database = database
        self._core: Core | None = None

    async def on_start(self) -> None:
        """Initialize service on application startup."""

    async def on_stop(self) -> None:
        """Cleanup service on application shutdown."""

    @property
    def core(self) -> Core:
        """Get the core application context."""
        if self._core is None:
            raise RuntimeError("Core not set for service")
        return self._core

    def set_core(self, core: Core) -> None:
        """Set the core application context."""
        self._core = core


class Services:
    """Service registry that automatically discovers and initializes services."""

    from contactgain.core.modules.cleanup.service import CleanupService  # noqa: PLC0415
    from contactgain.core.modules.contact.service import ContactService  # noqa: PLC0415
    from contactgain.core.modules.counter.service import CounterService  # noqa: PLC0415
    from contactgain.core.modules.identifier.service import IdentifierService  # noqa: PLC0415
    from contactgain.core.modules.lifecycle.service import LifecycleService  # noqa: PLC0415
    from contactgain.core.modules.session.service import SessionService  # noqa: PLC0415

    counter: CounterService
    identifier: IdentifierService
    session: SessionService
    contact: ContactService
    lifecycle: LifecycleService
    cleanup: CleanupService

    def __init__(self, database: AsyncDatabase[dict[str, Any]]) -> None:
        """Initialize all services automatically using service configuration."""
        self._services: list[Service] = []
        self._database = database

        # Service configuration: (attribute_name, module_path, class_name)
        # Cleanup must start last: its first sweep runs immediately and needs the indexes of the others
        service_configs = [
            ("counter", "contactgain.core.modules.counter.service", "CounterService"),
            ("identifier", "contactgain.core.modules.identifier.service", "IdentifierService"),
            ("session", "contactgain.core.modules.session.service", "SessionService"),
            ("contact", "contactgain.core.modules.contact.service", "ContactService"),
            ("lifecycle", "contactgain.core.modules.lifecycle.service", "LifecycleService"),
            ("cleanup", "contactgain.core.modules.cleanup.service", "CleanupService"),
        ]

        for attr_name, module_path, class_name in service_configs:
            module = importlib.import_module(module_path)
            service_class = cast(type[Service], getattr(module, class_name))
            service_instance = service_class(database)
            setattr(self, attr_name, service_instance)
            self._services.append(service_instance)

    def set_core(self, core: Core) -> None:
        """Set core reference for all services."""
        for service in self._services:
            service.set_core(core)

    async def start_all(self) -> None:
        """Start all services in registration order."""
        for service in self._services:
            await service.on_start()

    async def stop_all(self) -> None:
        """Stop all services in reverse registration order."""
        for service in reversed(self._services):
            await service.on_stop()


class Core:
    """Container providing config, database, and all service instances."""

    config: Config
    mongo_client: AsyncMongoClient[dict[str, Any]] | None
    database: AsyncDatabase[dict[str, Any]]
    services: Services

    def __init__(self, config: Config, database: AsyncDatabase[dict[str, Any]] | None = None) -> None:
        """Initialize core with config and MongoDB, then auto-register services.

        An already opened database may be passed in, in which case no client is created
        and none is closed on shutdown.
        """
        self.config = config
        if database is None:
            self.mongo_client = AsyncMongoClient(config.database_url, uuidRepresentation="standard", tz_aware=True)
            self.database = self.mongo_client.get_database(urlparse(config.database_url).path[1:])
        else:
            self.mongo_client = None
            self.database = database
        self.services = Services(self.database)
        self.services.set_core(self)

    @asynccontextmanager
    async def lifespan(self) -> AsyncGenerator[None]:
        """Manage application lifecycle - startup and shutdown."""
        await self.on_start()
        try:
            yield
        finally:
            await self.on_stop()

    async def on_start(self) -> None:
        await self.services.start_all()

    async def on_stop(self) -> None:
        """Stop services and close the MongoDB connection if this core opened it."""
        await self.services.stop_all()
        if self.mongo_client is not None:
            await self.mongo_client.aclose()
