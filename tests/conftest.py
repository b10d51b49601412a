"""Pytest configuration for SchemaHub."""
import os

import pytest

from schemahub.base.config import DocsConfig, SchemaHubConfig, set_config


def pytest_configure():
    # Keep tests away from any operator environment.
    os.environ.setdefault("SCHEMAHUB_ENV", "test")


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def config(tmp_path):
    return SchemaHubConfig(docs=DocsConfig(snapshot_dir=tmp_path), environment="test")


@pytest.fixture(autouse=True)
def _global_config(config):
    set_config(config)
    yield
    set_config(None)
