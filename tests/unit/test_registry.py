import pytest

from helpers import entry, service
from schemahub.errors import ErrorCode, SchemaHubError
from schemahub.registry.events import RegistryEvent, RegistryEventBus, RegistryEventType
from schemahub.registry.models import ServiceDescriptor, qualified_service_name
from schemahub.registry.registry import LocalServiceRegistry, ServiceRegistry


def test_from_dict_qualifies_action_names():
    descriptor = ServiceDescriptor.from_dict(service(
        "products",
        version=2,
        openapi={"tags": [{"name": "Products"}]},
        actions={"create": {"openapi": entry("POST /products")}, "list": lambda ctx: None},
    ))

    assert descriptor.full_name == "v2.products"
    assert list(descriptor.actions) == ["v2.products.create", "v2.products.list"]
    assert descriptor.actions["v2.products.create"].raw_name == "create"
    assert descriptor.actions["v2.products.create"].openapi == {"$path": "POST /products"}
    assert descriptor.actions["v2.products.list"].openapi is None
    assert descriptor.openapi == {"tags": [{"name": "Products"}]}


@pytest.mark.parametrize("name, version, expected", [
    ("products", None, "products"),
    ("products", "1", "v1.products"),
    ("products", "v3", "v3.products"),
])
def test_qualified_service_name(name, version, expected):
    assert qualified_service_name(name, version) == expected


@pytest.mark.parametrize("schema", [
    "products",
    {"settings": {}},
    {"name": ""},
    {"name": "products", "actions": ["create"]},
    {"name": "products", "settings": "openapi"},
])
def test_from_dict_rejects_malformed_schemas(schema):
    with pytest.raises(SchemaHubError) as exc_info:
        ServiceDescriptor.from_dict(schema)
    assert exc_info.value.code == ErrorCode.REGISTRY_SERVICE_INVALID


def test_registry_satisfies_protocol():
    assert isinstance(LocalServiceRegistry(), ServiceRegistry)


def test_register_emits_services_changed():
    bus = RegistryEventBus()
    registry = LocalServiceRegistry(bus)
    received = []
    bus.subscribe(received.append, event_types=[RegistryEventType.SERVICES_CHANGED])

    registry.register(service("products"))
    registry.unregister("products")

    assert [e.type for e in received] == [RegistryEventType.SERVICES_CHANGED] * 2
    assert received[0].sequence < received[1].sequence


def test_list_services_keeps_registration_order_and_replaces_in_place():
    registry = LocalServiceRegistry()
    registry.register(service("a"))
    registry.register(service("b"))
    registry.register(service("a", openapi={"tags": []}))

    names = [s.name for s in registry.list_services()]

    assert names == ["a", "b"]
    assert registry.get_service("a").openapi == {"tags": []}


def test_list_services_with_and_without_actions():
    registry = LocalServiceRegistry()
    registry.register(service("products", actions={"create": {"openapi": entry("POST /products")}}))

    assert registry.list_services()[0].actions == {}
    assert list(registry.list_services(with_actions=True)[0].actions) == ["products.create"]


def test_list_services_returns_copies():
    registry = LocalServiceRegistry()
    registry.register(service("products", openapi={"tags": []}))

    snapshot = registry.list_services(with_actions=True)
    snapshot[0].settings["openapi"]["tags"].append({"name": "mutated"})

    assert registry.get_service("products").openapi == {"tags": []}


def test_unregister_unknown_service():
    with pytest.raises(SchemaHubError) as exc_info:
        LocalServiceRegistry().unregister("ghost")
    assert exc_info.value.code == ErrorCode.REGISTRY_SERVICE_NOT_FOUND
    assert exc_info.value.http_status == 404


def test_bus_unsubscribe_and_failing_subscriber(caplog):
    bus = RegistryEventBus()
    received = []

    def broken(event):
        raise RuntimeError("boom")

    bus.subscribe(broken)
    unsubscribe = bus.subscribe(received.append)

    bus.emit(RegistryEvent(type=RegistryEventType.SERVICES_CHANGED))
    unsubscribe()
    bus.emit_services_changed()

    assert len(received) == 1
    assert bus.subscriber_count == 1
    assert bus.last_sequence > 0
    assert "Subscriber failed" in caplog.text


def test_bus_filters_event_types():
    bus = RegistryEventBus()
    received = []
    bus.subscribe(received.append, event_types=[RegistryEventType.SERVICE_REGISTERED])

    bus.emit_services_changed()
    bus.emit_service_registered("products")

    assert [e.payload for e in received] == [{"service": "products"}]


def test_action_definition_keeps_only_the_openapi_fragment():
    fragment = entry("GET /products", security=[{"bearerAuth": []}])
    descriptor = ServiceDescriptor.from_dict({
        "name": "products",
        "actions": {"list": {"params": "ignored", "openapi": fragment}},
    })

    action = descriptor.actions["products.list"]
    assert action.name == "products.list"
    assert action.openapi == fragment
    assert not hasattr(action, "params")
