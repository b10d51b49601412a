from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping, Optional, Union

from fastapi import Request

from schemahub.base.config import SchemaHubConfig, get_config, load_overrides
from schemahub.loader import load_services
from schemahub.openapi.cache import SchemaCache
from schemahub.openapi.merge import SchemaBuilder
from schemahub.registry.events import RegistryEventBus
from schemahub.registry.models import ServiceDescriptor
from schemahub.registry.registry import LocalServiceRegistry

logger = logging.getLogger(__name__)


class ApplicationState:
    """
    Everything one running server owns: config, registry, event bus and the
    document cache. Built once at startup and attached to the FastAPI app.
    """

    def __init__(
        self,
        config: SchemaHubConfig,
        registry: LocalServiceRegistry,
        cache: SchemaCache,
    ):
        self.config = config
        self.registry = registry
        self.cache = cache

    @property
    def bus(self) -> RegistryEventBus:
        return self.registry.bus

    @classmethod
    def create(
        cls,
        config: Optional[SchemaHubConfig] = None,
        services: Optional[Iterable[Union[ServiceDescriptor, Mapping[str, Any]]]] = None,
        overrides: Optional[dict] = None,
    ) -> "ApplicationState":
        """
        Wire registry, builder and cache together.

        Args:
            config: defaults to the global config
            services: initial services; when None, config.services_file is loaded if set
            overrides: operator schema; when None, config.docs.overrides_file is loaded if set
        """
        cfg = config or get_config()

        registry = LocalServiceRegistry(RegistryEventBus())
        builder = SchemaBuilder(
            registry,
            overrides=overrides if overrides is not None else load_overrides(cfg),
            config=cfg,
        )
        cache = SchemaCache(builder, config=cfg)
        cache.bind(registry.bus)

        if services is None and cfg.services_file is not None:
            services = load_services(cfg.services_file)
        for service in services or []:
            registry.register(service)

        return cls(config=cfg, registry=registry, cache=cache)


def get_state(request: Request) -> ApplicationState:
    """FastAPI dependency returning the state attached to the running app."""
    return request.app.state.schemahub
