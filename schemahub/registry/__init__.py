"""Module __init__: the live service registry the aggregator reads from."""
#
# KEY MODULES:
# - **models.py**: ServiceDescriptor / ActionDescriptor records
# - **events.py**: Synchronous event bus carrying "$services.changed"
# - **registry.py**: ServiceRegistry protocol and the in-process implementation
#
from schemahub.registry.events import RegistryEvent, RegistryEventBus, RegistryEventType
from schemahub.registry.models import ActionDescriptor, ServiceDescriptor
from schemahub.registry.registry import LocalServiceRegistry, ServiceRegistry

__all__ = [
    "ActionDescriptor",
    "LocalServiceRegistry",
    "RegistryEvent",
    "RegistryEventBus",
    "RegistryEventType",
    "ServiceDescriptor",
    "ServiceRegistry",
]
