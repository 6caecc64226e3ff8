from __future__ import annotations

"""In-memory implementation of :class:`multipage.core.host.HostAPI`.

The host keeps a tiny window model: window groups (tabs) hold viewports laid
out left to right, each viewport shows one document, has a height, a width
and a top-of-view line. It is used by the test-suite and by embedders that
want to drive the layout services without an editor.

Two families of methods exist:

- The ``HostAPI`` methods used by the services. They never emit events;
  ``set_topline`` is a programmatic scroll and does not propagate to
  scroll-bound viewports.
- "User" methods (``focus``, ``display``, ``scroll``, ``close_viewport``,
  ``resize``) that simulate what a person does in the editor. ``focus`` and
  ``display`` emit events; ``scroll`` propagates to every other scroll-bound
  viewport of the group, which is what scroll binding means to the host.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Hashable, List, Optional, Tuple

from .geometry import clamp_topline
from .host import EventCallback, HostEvent
from .models import Document, WindowGroup

logger = logging.getLogger(__name__)

__all__ = ["InMemoryHost"]


@dataclass
class _ViewportRecord:
    handle: int
    group: WindowGroup
    document: Document
    height: int
    width: int
    topline: int = 1
    scrollbind: bool = False
    column: Optional[int] = None  # explicit column, overrides the computed one


class InMemoryHost:
    """Window model kept entirely in memory.

    Parameters
    ----------
    split_right : bool, default=True
        Where ``split_viewport`` places the new viewport relative to its base.
    default_height, default_width : int
        Size given to viewports opened without an explicit size.
    """

    def __init__(self, *, split_right: bool = True, default_height: int = 40,
                 default_width: int = 80) -> None:
        self.split_right = split_right
        self.default_height = default_height
        self.default_width = default_width

        self._documents: Dict[Document, int] = {}
        self._viewports: Dict[int, _ViewportRecord] = {}
        self._creation_order: Dict[WindowGroup, List[int]] = {}
        self._visual_order: Dict[WindowGroup, List[int]] = {}
        self._active: Optional[int] = None
        self._current_group: Optional[WindowGroup] = None
        self._subscribers: Dict[int, Tuple[HostEvent, EventCallback]] = {}
        self._next_handle = 1000
        self._next_token = 1

        # History for assertions: (event, viewport) tuples, in emission order.
        self.emitted: List[Tuple[HostEvent, int]] = []

    # ------------------------------------------------------------------
    # Model setup
    # ------------------------------------------------------------------
    def add_document(self, document: Document, line_count: int) -> Document:
        self._documents[document] = max(0, int(line_count))
        return document

    def set_line_count(self, document: Document, line_count: int) -> None:
        if document not in self._documents:
            raise KeyError(f"Unknown document: {document!r}")
        self._documents[document] = max(0, int(line_count))

    def remove_document(self, document: Document) -> None:
        """Forget ``document``; viewports still showing it keep a stale handle."""
        self._documents.pop(document, None)

    def open_viewport(self, group: WindowGroup, document: Document, *,
                      height: Optional[int] = None, width: Optional[int] = None,
                      topline: int = 1) -> int:
        """Open a viewport at the right edge of ``group``.

        The first viewport opened becomes the active one.
        """
        record = self._new_record(group, document, height, width)
        record.topline = self._clamped(record, topline)
        self._creation_order.setdefault(group, []).append(record.handle)
        self._visual_order.setdefault(group, []).append(record.handle)
        if self._active is None:
            self._active = record.handle
            self._current_group = group
        return record.handle

    def place(self, viewport: int, column: Optional[int]) -> None:
        """Pin ``viewport`` at an explicit column (None restores the computed one)."""
        self._record(viewport).column = column

    # ------------------------------------------------------------------
    # User actions
    # ------------------------------------------------------------------
    def focus(self, viewport: int) -> None:
        """Enter ``viewport`` the way a user does, emitting ``VIEWPORT_ENTERED``."""
        record = self._record(viewport)
        self._active = record.handle
        self._current_group = record.group
        self._emit(HostEvent.VIEWPORT_ENTERED, record.handle)

    def display(self, viewport: int, document: Document) -> None:
        """Show ``document`` in ``viewport``, emitting ``DOCUMENT_DISPLAYED``."""
        record = self._record(viewport)
        record.document = document
        record.topline = self._clamped(record, 1)
        self._emit(HostEvent.DOCUMENT_DISPLAYED, record.handle)

    def scroll(self, viewport: int, delta: int) -> None:
        """Scroll ``viewport`` by ``delta`` lines as the user would.

        When the viewport is scroll-bound, every other scroll-bound viewport of
        the same group moves by the same number of lines, each clamped to its
        own document and height.
        """
        record = self._record(viewport)
        before = record.topline
        record.topline = self._clamped(record, record.topline + delta)
        moved = record.topline - before
        if not record.scrollbind or moved == 0:
            return
        for handle in self._creation_order.get(record.group, []):
            other = self._viewports[handle]
            if other.handle == record.handle or not other.scrollbind:
                continue
            other.topline = self._clamped(other, other.topline + moved)

    def resize(self, viewport: int, height: int) -> None:
        self._record(viewport).height = int(height)

    def close_viewport(self, viewport: int) -> None:
        record = self._viewports.pop(viewport, None)
        if record is None:
            return
        self._creation_order[record.group].remove(viewport)
        self._visual_order[record.group].remove(viewport)
        if self._active == viewport:
            remaining = self._visual_order[record.group]
            self._active = remaining[0] if remaining else None

    # ------------------------------------------------------------------
    # HostAPI: discovery
    # ------------------------------------------------------------------
    def list_viewports(self, group: WindowGroup) -> List[int]:
        return list(self._creation_order.get(group, []))

    def viewport_document(self, viewport: int) -> Document:
        return self._record(viewport).document

    def viewport_group(self, viewport: int) -> WindowGroup:
        return self._record(viewport).group

    # ------------------------------------------------------------------
    # HostAPI: geometry
    # ------------------------------------------------------------------
    def viewport_position(self, viewport: int) -> Tuple[int, int]:
        record = self._record(viewport)
        if record.column is not None:
            return 0, record.column
        column = 0
        for handle in self._visual_order[record.group]:
            if handle == viewport:
                break
            column += self._viewports[handle].width + 1  # separator
        return 0, column

    def viewport_height(self, viewport: int) -> int:
        return self._record(viewport).height

    def get_topline(self, viewport: int) -> int:
        return self._record(viewport).topline

    def set_topline(self, viewport: int, line: int) -> None:
        record = self._record(viewport)
        record.topline = self._clamped(record, line)

    def get_scrollbind(self, viewport: int) -> bool:
        return self._record(viewport).scrollbind

    def set_scrollbind(self, viewport: int, bound: bool) -> None:
        self._record(viewport).scrollbind = bool(bound)

    # ------------------------------------------------------------------
    # HostAPI: active viewport
    # ------------------------------------------------------------------
    def get_active_viewport(self) -> Optional[int]:
        return self._active

    def set_active_viewport(self, viewport: int) -> None:
        record = self._record(viewport)
        self._active = record.handle
        self._current_group = record.group

    def active_group(self) -> Optional[WindowGroup]:
        return self._current_group

    # ------------------------------------------------------------------
    # HostAPI: splitting
    # ------------------------------------------------------------------
    def split_viewport(self, base: int, document: Document) -> int:
        base_record = self._record(base)
        record = self._new_record(base_record.group, document,
                                  base_record.height, base_record.width)
        if document == base_record.document:
            record.topline = base_record.topline
        record.topline = self._clamped(record, record.topline)

        order = self._visual_order[base_record.group]
        index = order.index(base)
        order.insert(index + 1 if self.split_right else index, record.handle)
        self._creation_order[base_record.group].append(record.handle)

        self._active = record.handle
        self._current_group = record.group
        logger.debug("Split viewport %s -> %s", base, record.handle)
        return record.handle

    # ------------------------------------------------------------------
    # HostAPI: documents and validity
    # ------------------------------------------------------------------
    def line_count(self, document: Document) -> int:
        return self._documents.get(document, 0)

    def is_document_valid(self, document: Document) -> bool:
        return document in self._documents

    def is_viewport_valid(self, viewport: Any) -> bool:
        return viewport in self._viewports

    # ------------------------------------------------------------------
    # HostAPI: events
    # ------------------------------------------------------------------
    def subscribe(self, event: HostEvent, callback: EventCallback) -> int:
        token = self._next_token
        self._next_token += 1
        self._subscribers[token] = (HostEvent(event), callback)
        return token

    def unsubscribe(self, token: Any) -> None:
        self._subscribers.pop(token, None)

    def subscriber_count(self, event: Optional[HostEvent] = None) -> int:
        if event is None:
            return len(self._subscribers)
        return sum(1 for ev, _cb in self._subscribers.values() if ev == event)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------
    def _new_record(self, group: WindowGroup, document: Document,
                    height: Optional[int], width: Optional[int]) -> _ViewportRecord:
        handle = self._next_handle
        self._next_handle += 1
        record = _ViewportRecord(
            handle=handle,
            group=group,
            document=document,
            height=self.default_height if height is None else int(height),
            width=self.default_width if width is None else int(width),
        )
        self._viewports[handle] = record
        return record

    def _record(self, viewport: Hashable) -> _ViewportRecord:
        try:
            return self._viewports[viewport]  # type: ignore[index]
        except KeyError:
            raise ValueError(f"Invalid viewport: {viewport!r}") from None

    def _clamped(self, record: _ViewportRecord, line: int) -> int:
        return clamp_topline(line, self._documents.get(record.document, 0), max(1, record.height))

    def _emit(self, event: HostEvent, viewport: int) -> None:
        self.emitted.append((event, viewport))
        callbacks: List[Callable[[int], None]] = [
            cb for ev, cb in list(self._subscribers.values()) if ev == event
        ]
        for callback in callbacks:
            callback(viewport)
