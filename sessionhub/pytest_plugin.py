"""
pytest integration

Enable with ``pytest_plugins = ["sessionhub.pytest_plugin"]`` in a conftest.
Every test that requests ``driver`` gets a session bound to the thread it
runs on; the session is retired when the test finishes and anything still
registered is shut down at the end of the run.

Override ``capabilities`` in a conftest or test module to change what is
requested, and ``sessionhub_config`` to point at another config source.
"""

from typing import Any, Dict

import pytest

from .config import YamlConfigProvider
from .core.session.manager import SessionManager


def pytest_addoption(parser):
    group = parser.getgroup("sessionhub")
    group.addoption(
        "--sessionhub-config",
        action="store",
        default="sessionhub.yml",
        help="Path to the sessionhub YAML configuration (default: sessionhub.yml)",
    )


@pytest.fixture(scope="session")
def sessionhub_config(request):
    return YamlConfigProvider(request.config.getoption("--sessionhub-config"))


@pytest.fixture(scope="session")
def session_manager(sessionhub_config):
    manager = SessionManager.from_config(sessionhub_config)
    yield manager
    manager.shutdown()


@pytest.fixture
def capabilities() -> Dict[str, Any]:
    return {}


@pytest.fixture
def driver(session_manager, capabilities):
    handle = session_manager.start_session(capabilities)
    yield handle
    session_manager.retire_thread()
