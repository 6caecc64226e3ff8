"""Multipage: view one long document across side-by-side panes.

Consecutive panes showing the same document are scrolled so that each
continues where its left neighbour ends, and scroll-binding keeps the
arrangement intact while the user scrolls.

Host integrations normally need only :func:`setup`:

>>> from multipage import InMemoryHost, setup, teardown
>>> host = InMemoryHost()
>>> context = setup(host, {"overlap": 1}, use_config_files=False)
>>> context.commands.names()
['MultipageEnable', 'MultipageDisable', 'MultipageToggle']
>>> teardown()
"""

from .bootstrap import setup, teardown  # noqa: F401
from .config import MultipageConfig  # noqa: F401
from .core.context import MultipageContext, get_app_context  # noqa: F401
from .core.exceptions import MultipageError  # noqa: F401
from .core.host import HostAPI, HostEvent  # noqa: F401
from .core.memory_host import InMemoryHost  # noqa: F401

__all__: list[str] = [
    "setup",
    "teardown",
    "get_app_context",
    "MultipageContext",
    "MultipageConfig",
    "MultipageError",
    "HostAPI",
    "HostEvent",
    "InMemoryHost",
]
