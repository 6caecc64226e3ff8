from __future__ import annotations

"""Scoped activation of a viewport.

Some host queries only make sense "from inside" a viewport (the host's own
view snapshot, third-party renderers that read the active window). The
context manager below activates a viewport for the duration of a block and
always hands the active-viewport pointer back, also when the block raises.
"""

import logging
from contextlib import contextmanager
from typing import Iterator

from .host import HostAPI
from .models import Viewport

logger = logging.getLogger(__name__)

__all__ = ["activated_viewport"]


@contextmanager
def activated_viewport(host: HostAPI, viewport: Viewport) -> Iterator[Viewport]:
    """Make ``viewport`` active inside the ``with`` block.

    Activation goes through ``host.set_active_viewport`` which does not emit
    ``VIEWPORT_ENTERED``. On exit the previously active viewport is restored
    if it is still valid; a previous viewport that was closed inside the block
    leaves ``viewport`` active.

    ``HostAPI`` has no way to clear the active pointer, so when no viewport
    was active before the block ``viewport`` stays active afterwards.
    """
    previous = host.get_active_viewport()
    if previous == viewport:
        yield viewport
        return

    host.set_active_viewport(viewport)
    try:
        yield viewport
    finally:
        if previous is None:
            logger.debug("No active viewport to restore; %r stays active", viewport)
        elif host.is_viewport_valid(previous):
            host.set_active_viewport(previous)
        else:
            logger.debug("Previously active viewport %r is gone; leaving %r active", previous, viewport)
