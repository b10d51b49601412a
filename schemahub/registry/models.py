"""Module models: service and action descriptors."""
#
# A ServiceDescriptor is what the registry knows about one running service:
# its name, optional version, settings (which may hold a service-wide
# "openapi" fragment) and the actions it exposes. An ActionDescriptor may
# carry an "openapi" fragment describing the HTTP operations that reach it.
#

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

from schemahub.errors import ErrorCode, SchemaHubError

# Keys recognized on descriptors
OPENAPI_KEY = "openapi"


def qualified_service_name(name: str, version: Optional[str] = None) -> str:
    """
    Versioned services are addressed as "v<version>.<name>".

    >>> qualified_service_name("products", "2")
    'v2.products'
    """
    if version is None or version == "":
        return name
    version = str(version)
    prefix = version if version.startswith("v") else f"v{version}"
    return f"{prefix}.{name}"


@dataclass
class ActionDescriptor:
    name: str
    service: str
    raw_name: str = ""
    openapi: Any = None

    @classmethod
    def from_definition(cls, raw_name: str, service: str, definition: Any) -> "ActionDescriptor":
        """
        Build a descriptor from a framework-style action definition.

        The definition is either a mapping holding an "openapi" fragment or
        anything else (a bare handler), in which case the action carries no
        fragment. Other keys of the mapping are not used here.
        """
        name = f"{service}.{raw_name}"
        if not isinstance(definition, Mapping):
            return cls(name=name, service=service, raw_name=raw_name)

        return cls(
            name=name,
            service=service,
            raw_name=raw_name,
            openapi=definition.get(OPENAPI_KEY),
        )


@dataclass
class ServiceDescriptor:
    name: str
    version: Optional[str] = None
    settings: Dict[str, Any] = field(default_factory=dict)
    actions: Dict[str, ActionDescriptor] = field(default_factory=dict)

    @property
    def full_name(self) -> str:
        return qualified_service_name(self.name, self.version)

    @property
    def openapi(self) -> Any:
        """Service-level fragment, merged wholesale into the document."""
        return self.settings.get(OPENAPI_KEY)

    def without_actions(self) -> "ServiceDescriptor":
        return ServiceDescriptor(
            name=self.name,
            version=self.version,
            settings=self.settings,
        )

    @classmethod
    def from_dict(cls, schema: Mapping[str, Any]) -> "ServiceDescriptor":
        """
        Build a descriptor from a service schema mapping::

            {
                "name": "products",
                "version": 1,
                "settings": {"openapi": {...}},
                "actions": {"create": {"openapi": {"$path": "POST /products"}}},
            }

        Raises:
            SchemaHubError: REGISTRY_SERVICE_INVALID on a malformed schema
        """
        if not isinstance(schema, Mapping):
            raise SchemaHubError(
                ErrorCode.REGISTRY_SERVICE_INVALID,
                "Service schema must be a mapping",
                details={"type": type(schema).__name__},
            )

        name = schema.get("name")
        if not isinstance(name, str) or not name:
            raise SchemaHubError(
                ErrorCode.REGISTRY_SERVICE_INVALID,
                "Service schema has no name",
                details={"schema_keys": sorted(str(k) for k in schema.keys())},
            )

        version = schema.get("version")
        version = str(version) if version is not None else None

        settings = schema.get("settings") or {}
        actions = schema.get("actions") or {}
        for label, value in (("settings", settings), ("actions", actions)):
            if not isinstance(value, Mapping):
                raise SchemaHubError(
                    ErrorCode.REGISTRY_SERVICE_INVALID,
                    f"Service {label} must be a mapping",
                    details={"service": name, "type": type(value).__name__},
                )

        full_name = qualified_service_name(name, version)
        descriptors: Dict[str, ActionDescriptor] = {}
        for raw_name, definition in actions.items():
            action = ActionDescriptor.from_definition(str(raw_name), full_name, definition)
            descriptors[action.name] = action

        return cls(
            name=name,
            version=version,
            settings=dict(settings),
            actions=descriptors,
        )
