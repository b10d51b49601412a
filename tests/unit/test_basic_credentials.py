import base64
from types import SimpleNamespace

import pytest
from fastapi.security import HTTPBasicCredentials
from starlette.requests import Request

from schemahub.base.config import DocsConfig, SchemaHubConfig
from schemahub.server.routers.auth import (
    check_basic_credentials,
    read_basic_credentials,
    verify_private_access,
)


def basic(value: str) -> str:
    return "Basic " + base64.b64encode(value.encode("utf-8")).decode("ascii")


def make_request(authorization=None) -> Request:
    headers = []
    if authorization is not None:
        headers.append((b"authorization", authorization.encode("latin-1")))
    return Request({
        "type": "http",
        "method": "GET",
        "scheme": "http",
        "server": ("testserver", 80),
        "client": ("127.0.0.1", 50000),
        "path": "/openapi-private.json",
        "query_string": b"",
        "headers": headers,
    })


@pytest.mark.anyio
async def test_read_valid_header():
    credentials = await read_basic_credentials(make_request(basic("your-login:your-password")))
    assert (credentials.username, credentials.password) == ("your-login", "your-password")


@pytest.mark.anyio
async def test_password_may_contain_colons():
    credentials = await read_basic_credentials(make_request(basic("user:pa:ss")))
    assert (credentials.username, credentials.password) == ("user", "pa:ss")


@pytest.mark.anyio
async def test_scheme_is_case_insensitive():
    credentials = await read_basic_credentials(make_request(basic("a:b").replace("Basic", "basic")))
    assert (credentials.username, credentials.password) == ("a", "b")


@pytest.mark.anyio
@pytest.mark.parametrize("header", [
    None,
    "",
    "Basic",
    "Bearer " + base64.b64encode(b"a:b").decode("ascii"),
    "Basic %%%",
    "Basic not-base64!!",
    "Basic " + base64.b64encode(b"no-colon").decode("ascii"),
])
async def test_read_returns_none_for_malformed_headers(header):
    assert await read_basic_credentials(make_request(header)) is None


@pytest.mark.parametrize("username, password, expected", [
    ("your-login", "your-password", True),
    ("your-login", "wrong", False),
    ("other", "your-password", False),
    ("", "", False),
])
def test_check_credentials(username, password, expected):
    credentials = HTTPBasicCredentials(username=username, password=password)
    assert check_basic_credentials(credentials, "your-login", "your-password") is expected


def test_missing_credentials_never_match():
    assert check_basic_credentials(None, "your-login", "your-password") is False


def test_empty_configured_pair_never_matches():
    assert check_basic_credentials(HTTPBasicCredentials(username="", password=""), "", "") is False


@pytest.mark.anyio
@pytest.mark.parametrize("header, expected", [
    (basic("ops:pw"), True),
    (basic("ops:nope"), False),
    ("Basic %%%", False),
    (None, False),
])
async def test_verify_private_access_uses_configured_pair(header, expected):
    state = SimpleNamespace(config=SchemaHubConfig(docs=DocsConfig(private_login="ops", private_password="pw")))
    assert await verify_private_access(make_request(header), state=state) is expected
