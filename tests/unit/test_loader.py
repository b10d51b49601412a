import json
from pathlib import Path

import pytest

from schemahub.errors import ErrorCode, SchemaHubError
from schemahub.loader import load_services, parse_services

EXAMPLE = Path(__file__).resolve().parents[2] / "examples" / "services.json"


def test_parse_accepts_list_and_wrapper():
    as_list = parse_services([{"name": "products"}])
    wrapped = parse_services({"services": [{"name": "products", "version": 1}]})

    assert as_list[0].full_name == "products"
    assert wrapped[0].full_name == "v1.products"


@pytest.mark.parametrize("data", [
    [{"name": ""}],
    [{"name": "a.b"}],
    [{"settings": {}}],
    {"services": "products"},
    [{"name": "products", "actions": []}],
])
def test_parse_rejects_invalid_definitions(data):
    with pytest.raises(SchemaHubError) as exc_info:
        parse_services(data)
    assert exc_info.value.code == ErrorCode.REGISTRY_SERVICE_INVALID
    assert exc_info.value.details["errors"]


def test_load_example_file():
    services = load_services(EXAMPLE)

    products = services[0]
    assert products.name == "products"
    assert "Product" in products.openapi["components"]["schemas"]
    assert isinstance(products.actions["products.list"].openapi, list)
    assert products.actions["products.count"].openapi is None


def test_load_errors(tmp_path):
    with pytest.raises(SchemaHubError) as exc_info:
        load_services(tmp_path / "missing.json")
    assert exc_info.value.code == ErrorCode.CONFIG_FILE_NOT_FOUND

    broken = tmp_path / "broken.json"
    broken.write_text("{", encoding="utf-8")
    with pytest.raises(SchemaHubError) as exc_info:
        load_services(broken)
    assert exc_info.value.code == ErrorCode.CONFIG_PARSE_ERROR


def test_load_round_trip(tmp_path):
    path = tmp_path / "services.json"
    path.write_text(json.dumps([{"name": "orders", "actions": {"create": {"openapi": {"$path": "POST /orders"}}}}]))

    services = load_services(path)

    assert services[0].actions["orders.create"].openapi == {"$path": "POST /orders"}
