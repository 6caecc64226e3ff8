from __future__ import annotations

"""Viewport discovery.

Resolves, on every call, which viewports of a window group currently show a
document. Results are never cached: the host may have closed, moved or
re-targeted any viewport since the previous call.
"""

from typing import List, Optional

from .host import HostAPI
from .models import Document, Viewport, WindowGroup

__all__ = ["discover_viewports", "leftmost_viewport"]


def discover_viewports(host: HostAPI, group: WindowGroup, document: Document) -> List[Viewport]:
    """Return the viewports of ``group`` showing ``document``, left to right.

    Ordering is by column position; ties keep the host's iteration order
    because ``sorted`` is stable. Invalid handles are skipped. An empty list is
    returned when nothing shows the document.
    """
    found: List[Viewport] = []
    for viewport in host.list_viewports(group):
        if not host.is_viewport_valid(viewport):
            continue
        if host.viewport_document(viewport) == document:
            found.append(viewport)

    return sorted(found, key=lambda vp: host.viewport_position(vp)[1])


def leftmost_viewport(host: HostAPI, group: WindowGroup, document: Document) -> Optional[Viewport]:
    """Return the left-most viewport showing ``document`` or None."""
    viewports = discover_viewports(host, group, document)
    if not viewports:
        return None
    return viewports[0]
