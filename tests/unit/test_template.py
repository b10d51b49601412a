from schemahub import __version__
from schemahub.base.config import DocsConfig, SchemaHubConfig
from schemahub.openapi.template import build_template, copyright_notice


def test_template_defaults():
    doc = build_template()

    assert doc["openapi"] == "3.0.3"
    assert doc["info"]["title"] == "SCHEMAHUB API Documentation"
    assert doc["info"]["version"] == __version__
    assert [s["description"] for s in doc["servers"]] == ["Sandbox Server", "Production Server"]
    assert doc["paths"] == {}
    assert doc["security"] == []
    assert doc["tags"] == []
    assert doc["externalDocs"]["url"]


def test_template_components():
    components = build_template()["components"]

    assert set(components["responses"]) == {"UnauthorizedErrorToken", "UnauthorizedErrorBasic", "404", "500"}
    assert components["responses"]["500"]["content"]["application/json"]["schema"] == {
        "$ref": "#/components/schemas/Error"
    }
    assert components["securitySchemes"]["bearerAuth"] == {
        "type": "http",
        "scheme": "bearer",
        "bearerFormat": "JWT",
    }
    assert components["securitySchemes"]["basicAuth"]["scheme"] == "basic"
    assert components["schemas"]["Error"]["required"] == ["message"]
    assert "message" in components["schemas"]["Error"]["example"]


def test_template_reads_config():
    config = SchemaHubConfig(docs=DocsConfig(
        organization="Acme",
        copyright_since=2019,
        sandbox_url="https://sandbox.acme.test/api",
        production_url="https://acme.test/api",
    ))

    doc = build_template(title="Acme API", version="2.1.0", config=config, year=2024)

    assert doc["info"]["title"] == "Acme API"
    assert doc["info"]["version"] == "2.1.0"
    assert doc["info"]["license"]["name"] == "Acme Copyright © - 2019 - 2024"
    assert [s["url"] for s in doc["servers"]] == ["https://sandbox.acme.test/api", "https://acme.test/api"]


def test_template_is_a_fresh_copy():
    first = build_template()
    first["paths"]["/x"] = {}
    first["components"]["schemas"]["Error"]["type"] = "string"

    second = build_template()

    assert second["paths"] == {}
    assert second["components"]["schemas"]["Error"]["type"] == "object"


def test_copyright_notice_uses_current_year_by_default():
    from datetime import datetime

    assert copyright_notice("Acme", 2017).endswith(f"- {datetime.now().year}")
