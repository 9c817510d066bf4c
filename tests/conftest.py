import pytest

from helpers import FakeFactory
from sessionhub import SessionManager, SessionRegistry, StaticConfigProvider


@pytest.fixture
def factory():
    return FakeFactory()


@pytest.fixture
def registry():
    return SessionRegistry()


@pytest.fixture
def grid_manager(factory, registry):
    config = StaticConfigProvider({"host": "supergrid-east.example.com", "implicitWaitTime": "5"})
    return SessionManager(factory, config, registry=registry)


@pytest.fixture
def local_manager(factory, registry):
    return SessionManager(factory, StaticConfigProvider(), registry=registry)
