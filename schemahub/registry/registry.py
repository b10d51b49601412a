"""Module registry: the live set of registered services."""

from __future__ import annotations

import copy
import logging
from typing import Any, Dict, List, Mapping, Optional, Protocol, Union, runtime_checkable

from schemahub.errors import ErrorCode, SchemaHubError
from schemahub.registry.events import RegistryEventBus
from schemahub.registry.models import ServiceDescriptor

logger = logging.getLogger(__name__)


@runtime_checkable
class ServiceRegistry(Protocol):
    """
    What the aggregator needs from a registry: a snapshot of the current
    services, queried on demand.
    """
    def list_services(self, with_actions: bool = False) -> List[ServiceDescriptor]:
        ...


class LocalServiceRegistry:
    """
    In-process registry.

    Services are kept in registration order. Re-registering a service under
    the same qualified name replaces it in place. Every change emits
    "$services.changed" on the bus.
    """

    def __init__(self, bus: Optional[RegistryEventBus] = None):
        self.bus = bus or RegistryEventBus()
        self._services: Dict[str, ServiceDescriptor] = {}

    def __len__(self) -> int:
        return len(self._services)

    def __contains__(self, name: str) -> bool:
        return name in self._services

    def register(self, service: Union[ServiceDescriptor, Mapping[str, Any]]) -> ServiceDescriptor:
        """
        Add or replace a service.

        Accepts a ServiceDescriptor or a service schema mapping.
        """
        descriptor = service if isinstance(service, ServiceDescriptor) else ServiceDescriptor.from_dict(service)
        replaced = descriptor.full_name in self._services
        self._services[descriptor.full_name] = descriptor

        logger.info(
            f"Service '{descriptor.full_name}' {'updated' if replaced else 'registered'} "
            f"({len(descriptor.actions)} actions)"
        )
        self.bus.emit_service_registered(descriptor.full_name)
        self.bus.emit_services_changed()
        return descriptor

    def unregister(self, name: str) -> ServiceDescriptor:
        """
        Remove a service by qualified name.

        Raises:
            SchemaHubError: REGISTRY_SERVICE_NOT_FOUND
        """
        try:
            descriptor = self._services.pop(name)
        except KeyError:
            raise SchemaHubError(
                ErrorCode.REGISTRY_SERVICE_NOT_FOUND,
                f"Service '{name}' is not registered",
                details={"service": name, "registered": list(self._services)},
            ) from None

        logger.info(f"Service '{name}' unregistered")
        self.bus.emit_service_unregistered(name)
        self.bus.emit_services_changed()
        return descriptor

    def get_service(self, name: str) -> Optional[ServiceDescriptor]:
        return self._services.get(name)

    def list_services(self, with_actions: bool = False) -> List[ServiceDescriptor]:
        """
        Snapshot of the registered services, in registration order.

        Callers get copies; mutating them does not touch the registry.
        """
        services = list(self._services.values())
        if not with_actions:
            services = [s.without_actions() for s in services]
        return copy.deepcopy(services)
