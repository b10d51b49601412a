"""Module merge: assembles an OpenAPI document from registry fragments."""
#
# PURPOSE:
# Turns the live registry into one OpenAPI document.
#
# ORDER OF ASSEMBLY:
# 1. Operator overrides merged over the template (overrides win)
# 2. Each service's settings.openapi merged into the document (service wins)
# 3. Each action's openapi path entries written into paths[route][method]
#    (a later action replaces an earlier one for the same route and method)
#
# MERGE SEMANTICS:
# Mappings merge key by key, the right-hand side wins on scalars and type
# conflicts, and lists are replaced whole.
#

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterator, List, Mapping, Optional, Tuple

from schemahub.base.config import SchemaHubConfig
from schemahub.errors import ErrorCode, SchemaHubError
from schemahub.openapi.security import accept
from schemahub.openapi.template import build_template
from schemahub.registry.models import ActionDescriptor, ServiceDescriptor
from schemahub.registry.registry import ServiceRegistry

logger = logging.getLogger(__name__)

# Field holding "<METHOD> <ROUTE>" on every action path entry
PATH_KEY = "$path"

Document = Dict[str, Any]


def deep_merge(base: Any, overlay: Any) -> Any:
    """
    Merge overlay into base and return the result as a new structure.

    Neither argument is modified.

    >>> deep_merge({"a": {"x": 1, "y": [1, 2]}}, {"a": {"y": [3]}, "b": 2})
    {'a': {'x': 1, 'y': [3]}, 'b': 2}
    """
    if not (isinstance(base, Mapping) and isinstance(overlay, Mapping)):
        return copy.deepcopy(overlay)

    merged: Dict[Any, Any] = {}
    for key, value in base.items():
        if key in overlay:
            merged[key] = deep_merge(value, overlay[key])
        else:
            merged[key] = copy.deepcopy(value)
    for key, value in overlay.items():
        if key not in base:
            merged[key] = copy.deepcopy(value)
    return merged


def parse_path_spec(value: Any) -> Tuple[str, str]:
    """
    Split a combined "<METHOD> <ROUTE>" field.

    The method is lower-cased; the route is everything after the first space.

    Raises:
        SchemaHubError: SCHEMA_PATH_INVALID when either half is missing
    """
    if not isinstance(value, str):
        raise SchemaHubError(
            ErrorCode.SCHEMA_PATH_INVALID,
            f"{PATH_KEY} must be a string like 'GET /route'",
            details={"value": repr(value)},
        )

    method, _, route = value.strip().partition(" ")
    route = route.strip()
    if not method or not route:
        raise SchemaHubError(
            ErrorCode.SCHEMA_PATH_INVALID,
            f"{PATH_KEY} must name both a method and a route",
            details={"value": value},
        )
    return method.lower(), route


@dataclass
class PathEntry:
    method: str
    route: str
    operation: Dict[str, Any]

    @classmethod
    def from_element(cls, element: Mapping[str, Any]) -> "PathEntry":
        operation = copy.deepcopy(dict(element))
        if PATH_KEY not in operation:
            raise SchemaHubError(
                ErrorCode.SCHEMA_PATH_INVALID,
                f"Path entry has no {PATH_KEY} field",
                details={"keys": sorted(str(k) for k in operation)},
            )
        method, route = parse_path_spec(operation.pop(PATH_KEY))
        return cls(method=method, route=route, operation=operation)


def iter_path_entries(fragment: Any) -> Iterator[Mapping[str, Any]]:
    """
    Yield the path-entry elements of an action fragment.

    A mapping is one element; a list or tuple yields each of its items.
    """
    if isinstance(fragment, Mapping):
        yield fragment
        return

    for index, element in enumerate(fragment):
        if not isinstance(element, Mapping):
            raise SchemaHubError(
                ErrorCode.SCHEMA_FRAGMENT_INVALID,
                "Path entry must be an object",
                details={"index": index, "type": type(element).__name__},
            )
        yield element


def has_fragment(action: ActionDescriptor) -> bool:
    return isinstance(action.openapi, (Mapping, list, tuple))


def collect_path_entries(action: ActionDescriptor, bearer_only: bool) -> List[PathEntry]:
    """Path entries of one action that belong in the current pass."""
    if not has_fragment(action):
        return []
    return [
        PathEntry.from_element(element)
        for element in iter_path_entries(action.openapi)
        if accept(element, bearer_only)
    ]


class SchemaBuilder:
    """
    Builds OpenAPI documents from a service registry.

    Args:
        registry: anything with list_services(with_actions=...)
        overrides: operator schema merged over the template
        template_factory: returns a fresh base document on each call
        config: settings handed to the default template
    """

    def __init__(
        self,
        registry: ServiceRegistry,
        overrides: Optional[Mapping[str, Any]] = None,
        template_factory: Optional[Callable[[], Document]] = None,
        config: Optional[SchemaHubConfig] = None,
    ):
        self.registry = registry
        self.overrides: Dict[str, Any] = dict(overrides or {})
        self.template_factory = template_factory or (lambda: build_template(config=config))

    def build(self, bearer_only: bool = False) -> Document:
        """
        Assemble one document.

        Args:
            bearer_only: True for the public document

        Raises:
            SchemaHubError: SCHEMA_COMPILE_FAILED wrapping whatever went wrong
        """
        context: Dict[str, Any] = {"variant": "public" if bearer_only else "private"}
        try:
            doc = deep_merge(self.template_factory(), self.overrides)

            for service in self.registry.list_services(with_actions=True):
                context["service"] = service.full_name
                context.pop("action", None)
                doc = self._merge_service(doc, service)

                for action in service.actions.values():
                    context["action"] = action.name
                    for entry in collect_path_entries(action, bearer_only):
                        self._set_operation(doc, entry)

            return doc
        except Exception as exc:
            details = dict(context)
            details["original_type"] = type(exc).__name__
            details["original_message"] = str(exc)
            if isinstance(exc, SchemaHubError):
                details["original_code"] = exc.code.value
                details["original_message"] = exc.message
                details.update({k: v for k, v in exc.details.items() if k not in details})
            raise SchemaHubError(
                ErrorCode.SCHEMA_COMPILE_FAILED,
                "Unable to compile OpenAPI schema",
                details=details,
            ) from exc

    @staticmethod
    def _merge_service(doc: Document, service: ServiceDescriptor) -> Document:
        fragment = service.openapi
        if fragment is None:
            return doc
        if not isinstance(fragment, Mapping):
            raise SchemaHubError(
                ErrorCode.SCHEMA_FRAGMENT_INVALID,
                "Service openapi settings must be an object",
                details={"type": type(fragment).__name__},
            )
        return deep_merge(doc, fragment)

    @staticmethod
    def _set_operation(doc: Document, entry: PathEntry) -> None:
        paths = doc.setdefault("paths", {})
        route = paths.setdefault(entry.route, {})
        if entry.method in route:
            logger.debug(f"Replacing operation {entry.method.upper()} {entry.route}")
        route[entry.method] = entry.operation
