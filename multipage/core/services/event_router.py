from __future__ import annotations

"""Keep layouts consistent with host-level window changes.

The router listens to the host's "document displayed in viewport" and
"viewport entered" notifications. For an enabled document it re-runs the
layout pass; for a disabled one it clears the scroll binding of the viewport
that was touched. Manual rearrangements (resizing, closing a pane, opening a
new split) therefore heal on the next event without an explicit re-enable.
"""

import logging
from typing import Any, List, Optional

from multipage.core.host import HostAPI, HostEvent
from multipage.core.models import LayoutResult, Viewport
from multipage.core.state import MultipageStateRegistry

from .layout_service import LayoutService

logger = logging.getLogger(__name__)

__all__ = ["EventRouter"]


class EventRouter:
    """Route host layout events to the layout service.

    Dispatch is not nested: a notification that arrives while the router is
    already handling one (e.g. emitted by the host in reaction to the router's
    own writes) is ignored.
    """

    EVENTS = (HostEvent.DOCUMENT_DISPLAYED, HostEvent.VIEWPORT_ENTERED)

    def __init__(self, host: HostAPI, state: MultipageStateRegistry,
                 layout_service: LayoutService) -> None:
        self._host = host
        self._state = state
        self._layout = layout_service
        self._tokens: List[Any] = []
        self._dispatching = False

    @property
    def attached(self) -> bool:
        return bool(self._tokens)

    def attach(self) -> None:
        """Subscribe to the host events; a second call is a no-op."""
        if self._tokens:
            return
        self._tokens.append(self._host.subscribe(HostEvent.DOCUMENT_DISPLAYED, self.on_document_displayed))
        self._tokens.append(self._host.subscribe(HostEvent.VIEWPORT_ENTERED, self.on_viewport_entered))
        logger.debug("Event router attached")

    def detach(self) -> None:
        for token in self._tokens:
            self._host.unsubscribe(token)
        self._tokens = []
        logger.debug("Event router detached")

    # ---------------------------------------------------------------- Handlers

    def on_document_displayed(self, viewport: Viewport) -> Optional[LayoutResult]:
        return self._dispatch(viewport)

    def on_viewport_entered(self, viewport: Viewport) -> Optional[LayoutResult]:
        return self._dispatch(viewport)

    def _dispatch(self, viewport: Viewport) -> Optional[LayoutResult]:
        if self._dispatching:
            return None
        self._dispatching = True
        try:
            return self._resync(viewport)
        finally:
            self._dispatching = False

    def _resync(self, viewport: Viewport) -> Optional[LayoutResult]:
        host = self._host
        if viewport is None or not host.is_viewport_valid(viewport):
            return None
        document = host.viewport_document(viewport)
        if not host.is_document_valid(document):
            # Wiped; a later document may reuse the handle.
            self._state.forget(document)
            return None
        group = host.viewport_group(viewport)

        if self._state.is_enabled(document, group):
            return self._layout.apply_layout(document, group)

        host.set_scrollbind(viewport, False)
        return None
