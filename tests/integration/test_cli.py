import json
from pathlib import Path

import pytest

from schemahub.cli import build_parser, main

EXAMPLE = Path(__file__).resolve().parents[2] / "examples" / "services.json"


def test_dump_writes_both_documents(tmp_path, capsys):
    out = tmp_path / "build"

    code = main(["dump", "--services", str(EXAMPLE), "--out", str(out)])

    assert code == 0
    public = json.loads((out / "openapi.json").read_text(encoding="utf-8"))
    private = json.loads((out / "openapi-private.json").read_text(encoding="utf-8"))
    assert set(public["paths"]) == {"/products", "/products/{sku}"}
    assert set(public["paths"]["/products"]) == {"get"}
    assert set(private["paths"]["/products"]) == {"get", "post"}
    assert "Product" in public["components"]["schemas"]
    assert "Public document saved" in capsys.readouterr().out


def test_dump_reports_compile_errors(tmp_path, capsys):
    services = tmp_path / "services.json"
    services.write_text(json.dumps([{"name": "broken", "actions": {"x": {"openapi": {"summary": "?"}}}}]))

    code = main(["dump", "--services", str(services), "--out", str(tmp_path)])

    assert code == 1
    assert "SCHEMA_001" in capsys.readouterr().err
    assert not (tmp_path / "openapi.json").exists()


def test_dump_reports_missing_services_file(tmp_path, capsys):
    code = main(["dump", "--services", str(tmp_path / "missing.json"), "--out", str(tmp_path)])

    assert code == 1
    assert "CONFIG_002" in capsys.readouterr().err


def test_serve_arguments():
    args = build_parser().parse_args(["serve", "--host", "0.0.0.0", "--port", "9001", "--services", "s.json"])

    assert (args.host, args.port, args.services) == ("0.0.0.0", 9001, "s.json")


def test_command_is_required():
    with pytest.raises(SystemExit):
        build_parser().parse_args([])
