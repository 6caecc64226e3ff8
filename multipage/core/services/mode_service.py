from __future__ import annotations

"""Enable/disable state machine for multipage mode.

States are ``Disabled`` (initial) and ``Enabled``, recorded in the injected
:class:`~multipage.core.state.MultipageStateRegistry`. Every transition is
followed by the matching side effect: enabling provisions columns (optional)
and lays the document out, disabling unbinds its viewports without touching
their geometry.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional

from multipage.core.discovery import discover_viewports
from multipage.core.host import HostAPI
from multipage.core.models import Document, LayoutResult, Viewport, WindowGroup
from multipage.core.state import MultipageStateRegistry

from .layout_service import LayoutService
from .provisioning_service import ProvisioningService

logger = logging.getLogger(__name__)

__all__ = ["ModeService", "ModeResult"]


@dataclass
class ModeResult:
    """Result of a mode transition.

    Attributes
    ----------
    enabled
        Flag value after the transition.
    viewports
        Viewports touched by the transition, left to right.
    layout
        Layout pass result when the transition enabled the mode.
    """

    enabled: bool
    viewports: List[Viewport]
    layout: Optional[LayoutResult] = None


class ModeService:
    """Route enable/disable/toggle requests to the layout services."""

    def __init__(
        self,
        host: HostAPI,
        state: MultipageStateRegistry,
        layout_service: LayoutService,
        provisioning_service: ProvisioningService,
    ) -> None:
        self._host = host
        self._state = state
        self._layout = layout_service
        self._provisioning = provisioning_service

    @property
    def state(self) -> MultipageStateRegistry:
        return self._state

    def is_enabled(self, document: Document, group: WindowGroup) -> bool:
        return self._state.is_enabled(document, group)

    # ------------------------------------------------------------ Transitions

    def enable(self, document: Document, group: WindowGroup,
               columns: Optional[int] = None) -> ModeResult:
        """Enable multipage mode and lay the document out.

        Safe to repeat: an already enabled document is re-provisioned and
        re-laid out, which refreshes the layout after a manual resize.
        """
        self._state.set_enabled(document, group, True)

        if columns is not None and columns > 0:
            self._provisioning.ensure_columns(document, group, columns)

        layout = self._layout.apply_layout(document, group)
        viewports = discover_viewports(self._host, group, document)
        logger.info("Multipage enabled for %r in %r (%s)", document, group, layout.reason)
        return ModeResult(enabled=True, viewports=viewports, layout=layout)

    def disable(self, document: Document, group: WindowGroup) -> ModeResult:
        """Disable multipage mode and unbind the document's viewports."""
        self._state.set_enabled(document, group, False)
        viewports = self._layout.unbind(document, group)
        logger.info("Multipage disabled for %r in %r (%d viewport(s) unbound)",
                    document, group, len(viewports))
        return ModeResult(enabled=False, viewports=viewports)

    def toggle(self, document: Document, group: WindowGroup,
               columns: Optional[int] = None) -> ModeResult:
        if self._state.is_enabled(document, group):
            return self.disable(document, group)
        return self.enable(document, group, columns)

    # -------------------------------------------------- Current document/group

    def _current(self) -> Optional[tuple]:
        host = self._host
        viewport = host.get_active_viewport()
        if viewport is None or not host.is_viewport_valid(viewport):
            return None
        document = host.viewport_document(viewport)
        if not host.is_document_valid(document):
            return None
        return document, host.viewport_group(viewport)

    def enable_current(self, columns: Optional[int] = None) -> Optional[ModeResult]:
        current = self._current()
        if current is None:
            return None
        return self.enable(current[0], current[1], columns)

    def disable_current(self) -> Optional[ModeResult]:
        current = self._current()
        if current is None:
            return None
        return self.disable(current[0], current[1])

    def toggle_current(self, columns: Optional[int] = None) -> Optional[ModeResult]:
        current = self._current()
        if current is None:
            return None
        return self.toggle(current[0], current[1], columns)
