from __future__ import annotations

"""Layout engine: assign page offsets to the viewports of a document.

The service is UI-agnostic: it talks to the editor exclusively through an
injected :class:`~multipage.core.host.HostAPI` and reads the overlap from a
live :class:`~multipage.config.MultipageConfig` at every pass, so a changed
overlap takes effect on the next pass.

Design principles
-----------------
- Never creates or closes viewports; only scrolls and binds existing ones.
- Conservative: expected states (no viewport, collapsed reference pane,
  stale handles) produce a ``LayoutResult`` with ``applied=False`` or skip the
  affected viewport, never an exception.
- Idempotent: a pass is a pure function of the left-most top-of-view, the
  viewport heights, the overlap and the document length.
"""

import logging
from typing import List, Optional, Tuple

from multipage.config.settings import MultipageConfig
from multipage.core.activation import activated_viewport
from multipage.core.discovery import discover_viewports
from multipage.core.geometry import clamp_topline, desired_topline, page_span
from multipage.core.host import HostAPI
from multipage.core.models import BaseView, Document, LayoutResult, Viewport, WindowGroup

logger = logging.getLogger(__name__)

__all__ = ["LayoutService"]


class LayoutService:
    """Lay out and scroll-bind every viewport showing a document.

    Parameters
    ----------
    host : HostAPI
        Window manager the service reads from and writes to.
    config : MultipageConfig
        Live configuration; ``config.overlap`` is read on every pass.

    Examples
    --------
    >>> from multipage.core.memory_host import InMemoryHost
    >>> host = InMemoryHost()
    >>> doc = host.add_document("notes.txt", 1000)
    >>> for _ in range(3):
    ...     _ = host.open_viewport("tab", doc, height=40)
    >>> LayoutService(host, MultipageConfig()).apply_layout(doc, "tab").ordered_toplines()
    [1, 40, 79]
    """

    def __init__(self, host: HostAPI, config: MultipageConfig) -> None:
        self._host = host
        self._config = config

    @property
    def config(self) -> MultipageConfig:
        return self._config

    # --------------------------------------------------------------------- API

    def capture_base_view(self, viewport: Viewport) -> Optional[BaseView]:
        """Snapshot the top-of-view of ``viewport`` from inside it.

        Returns None when the viewport is stale or collapsed.
        """
        host = self._host
        if not host.is_viewport_valid(viewport):
            return None
        height = host.viewport_height(viewport)
        if height <= 0:
            return None
        with activated_viewport(host, viewport):
            topline = host.get_topline(viewport)
        return BaseView(viewport=viewport, topline=topline, height=height)

    def current_layout(self, document: Document, group: WindowGroup) -> List[Tuple[Viewport, int]]:
        """Return ``(viewport, topline)`` as currently shown, left to right.

        Top-of-view lines are read directly: nothing is activated or written,
        so the result can be compared with the plan of :meth:`plan_layout`.
        """
        host = self._host
        return [(viewport, host.get_topline(viewport))
                for viewport in discover_viewports(host, group, document)]

    def plan_layout(self, document: Document, group: WindowGroup,
                    viewports: Optional[List[Viewport]] = None,
                    ) -> Optional[Tuple[BaseView, int, List[Tuple[Viewport, int]]]]:
        """Compute the offsets a pass would write, without writing them.

        Returns:
            ``(base_view, span, [(viewport, topline), ...])`` or None when the
            preconditions for a multi-pane layout are not met
        """
        host = self._host
        if viewports is None:
            viewports = discover_viewports(host, group, document)
        if len(viewports) < 2:
            return None

        base = self.capture_base_view(viewports[0])
        if base is None:
            return None

        span = page_span(base.height, self._config.overlap)
        total_lines = host.line_count(document)

        plan: List[Tuple[Viewport, int]] = []
        for idx, viewport in enumerate(viewports, start=1):
            if not host.is_viewport_valid(viewport):
                continue
            own_height = host.viewport_height(viewport)
            top = clamp_topline(desired_topline(base.topline, span, idx), total_lines, own_height)
            plan.append((viewport, top))
        return base, span, plan

    def apply_layout(self, document: Document, group: WindowGroup) -> LayoutResult:
        """Bind and scroll every viewport of ``group`` showing ``document``.

        Steps: discover viewports left to right; bind a lone viewport and stop;
        otherwise derive the span from the left-most height and overlap,
        snapshot the left-most top-of-view, bind every viewport and write
        ``clamp(base + span * (idx - 1))`` as each one's top-of-view.
        """
        host = self._host
        if not host.is_document_valid(document):
            return LayoutResult(applied=False, reason="invalid-document")

        viewports = discover_viewports(host, group, document)
        if not viewports:
            return LayoutResult(applied=False, reason="no-viewports")

        if len(viewports) == 1:
            # Keep it bound so panes opened later join the scroll binding.
            host.set_scrollbind(viewports[0], True)
            return LayoutResult(applied=True, reason="single-viewport")

        planned = self.plan_layout(document, group, viewports)
        if planned is None:
            logger.debug("Layout skipped for %r in %r: reference viewport collapsed", document, group)
            return LayoutResult(applied=False, reason="collapsed-reference")
        base, span, plan = planned

        for viewport in viewports:
            if host.is_viewport_valid(viewport):
                host.set_scrollbind(viewport, True)

        result = LayoutResult(applied=True, reason="applied", span=span, base=base)
        for viewport, top in plan:
            if not host.is_viewport_valid(viewport):
                continue
            host.set_topline(viewport, top)
            result.toplines[viewport] = top

        logger.debug("Layout %r in %r: span=%d base=%d tops=%s",
                     document, group, span, base.topline, result.ordered_toplines())
        return result

    def unbind(self, document: Document, group: WindowGroup) -> List[Viewport]:
        """Clear the scroll-bound flag of every viewport showing ``document``.

        Returns:
            The viewports that were unbound
        """
        host = self._host
        viewports = discover_viewports(host, group, document)
        for viewport in viewports:
            host.set_scrollbind(viewport, False)
        return viewports
