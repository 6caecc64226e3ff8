"""Test configuration and fixtures for the multipage test-suite.

Every test runs against :class:`InMemoryHost`, a host kept entirely in
memory, so no editor or display is needed. Fixtures build the services the
same way :class:`MultipageContext` wires them.
"""

import logging
import sys
from pathlib import Path

import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from multipage.config import ConfigManager, MultipageConfig
from multipage.core.context import set_app_context
from multipage.core.extensions import ExtensionRegistry
from multipage.core.memory_host import InMemoryHost
from multipage.core.services import (
    ContextRedirect,
    EventRouter,
    LayoutService,
    ModeService,
    ProvisioningService,
)
from multipage.core.state import MultipageStateRegistry

# Configure test logging
logging.basicConfig(
    level=logging.DEBUG,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

GROUP = "tab-1"
DOCUMENT = "notes.txt"


@pytest.fixture
def host():
    """A fresh in-memory host with one 1000-line document loaded."""
    h = InMemoryHost()
    h.add_document(DOCUMENT, 1000)
    return h


@pytest.fixture
def group():
    return GROUP


@pytest.fixture
def document():
    return DOCUMENT


@pytest.fixture
def open_columns(host):
    """Open ``n`` 40-line viewports on ``document`` in ``group``, left to right."""
    def _open(n, document=DOCUMENT, group=GROUP, height=40):
        return [host.open_viewport(group, document, height=height) for _ in range(n)]
    return _open


@pytest.fixture
def config():
    return MultipageConfig()


@pytest.fixture
def state():
    return MultipageStateRegistry()


@pytest.fixture
def extensions():
    return ExtensionRegistry()


@pytest.fixture
def layout_service(host, config):
    return LayoutService(host, config)


@pytest.fixture
def provisioning_service(host):
    return ProvisioningService(host)


@pytest.fixture
def mode_service(host, state, layout_service, provisioning_service):
    return ModeService(host, state, layout_service, provisioning_service)


@pytest.fixture
def event_router(host, state, layout_service):
    router = EventRouter(host, state, layout_service)
    router.attach()
    yield router
    router.detach()


@pytest.fixture
def context_redirect(host, state):
    return ContextRedirect(host, state)


@pytest.fixture(autouse=True)
def reset_singletons(tmp_path, monkeypatch):
    """Isolate the global context and the config singleton between tests."""
    monkeypatch.setenv("MULTIPAGE_CONFIG_DIR", str(tmp_path / "config"))
    ConfigManager.reset()
    set_app_context(None)
    yield
    set_app_context(None)
    ConfigManager.reset()
