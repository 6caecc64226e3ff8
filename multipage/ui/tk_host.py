# -*- coding: utf-8 -*-
"""Tk implementation of the multipage host interface.

Each viewport is a read-only ``tk.Text`` (with its scrollbar) placed in a
horizontal ``ttk.Panedwindow``; the window is a single window group.
Documents are plain text loaded into memory by name.

Behaviour mirrored from an editor:
- ``<FocusIn>`` on a pane emits ``VIEWPORT_ENTERED``.
- ``display()`` loads a document into a pane and emits ``DOCUMENT_DISPLAYED``.
- When the user scrolls a scroll-bound pane, every other scroll-bound pane
  follows by the same number of lines. Programmatic ``set_topline`` calls do
  not propagate.
- ``set_active_viewport`` only moves the internal pointer; keyboard focus is
  left alone so transient activation is invisible.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

import tkinter as tk
from tkinter import font as tkfont
from tkinter import ttk

from multipage.core.geometry import clamp_topline
from multipage.core.host import EventCallback, HostEvent

logger = logging.getLogger(__name__)

__all__ = ["TkHost"]


@dataclass
class _Pane:
    handle: int
    frame: ttk.Frame
    text: tk.Text
    scrollbar: ttk.Scrollbar
    document: str
    scrollbind: bool = False
    last_top: int = 1


class TkHost:
    """Window manager over Tk text panes.

    Parameters
    ----------
    paned : ttk.Panedwindow
        Horizontal paned window that receives the panes.
    group : str, default="main"
        Identity of the single window group this host manages.
    font : str | tuple
        Font for the text panes; fixed-width keeps line heights uniform.
    """

    def __init__(self, paned: ttk.Panedwindow, *, group: str = "main",
                 font: Any = "TkFixedFont") -> None:
        self._paned = paned
        self.group = group
        self._font = font
        self._documents: Dict[str, List[str]] = {}
        self._panes: Dict[int, _Pane] = {}
        self._order: List[int] = []
        self._active: Optional[int] = None
        self._subscribers: Dict[int, Tuple[HostEvent, EventCallback]] = {}
        self._next_handle = 1
        self._next_token = 1
        self._propagating = False

    # ------------------------------------------------------------------
    # Documents and panes
    # ------------------------------------------------------------------
    def load_document(self, name: str, text: str) -> str:
        self._documents[name] = text.splitlines() or [""]
        return name

    def open_viewport(self, document: str) -> int:
        """Add a pane at the right edge showing ``document``."""
        pane = self._create_pane(document)
        self._paned.add(pane.frame, weight=1)
        if self._active is None:
            self._active = pane.handle
        return pane.handle

    def display(self, viewport: int, document: str) -> None:
        pane = self._pane(viewport)
        pane.document = document
        self._fill(pane)
        self._emit(HostEvent.DOCUMENT_DISPLAYED, viewport)

    def close_viewport(self, viewport: int) -> None:
        pane = self._panes.pop(viewport, None)
        if pane is None:
            return
        self._order.remove(viewport)
        self._paned.forget(pane.frame)
        pane.frame.destroy()
        if self._active == viewport:
            self._active = self._order[0] if self._order else None

    def focus_viewport(self, viewport: int) -> None:
        self._pane(viewport).text.focus_set()

    # ------------------------------------------------------------------
    # HostAPI
    # ------------------------------------------------------------------
    def list_viewports(self, group: Any) -> List[int]:
        if group != self.group:
            return []
        # Paned order, so unmapped panes (all at x=0) still sort left to right
        by_frame = {str(p.frame): h for h, p in self._panes.items()}
        return [by_frame[str(name)] for name in self._paned.panes() if str(name) in by_frame]

    def viewport_document(self, viewport: int) -> str:
        return self._pane(viewport).document

    def viewport_group(self, viewport: int) -> str:
        self._pane(viewport)
        return self.group

    def viewport_position(self, viewport: int) -> Tuple[int, int]:
        frame = self._pane(viewport).frame
        frame.update_idletasks()
        return frame.winfo_y(), frame.winfo_x()

    def viewport_height(self, viewport: int) -> int:
        text = self._pane(viewport).text
        text.update_idletasks()
        pixels = text.winfo_height()
        if pixels <= 1:
            return 0  # not mapped yet
        chrome = 2 * (int(text.cget("borderwidth")) + int(text.cget("highlightthickness"))
                      + int(text.cget("pady")))
        linespace = tkfont.Font(font=text.cget("font")).metrics("linespace")
        return max(0, (pixels - chrome) // max(1, linespace))

    def get_topline(self, viewport: int) -> int:
        return int(self._pane(viewport).text.index("@0,0").split(".")[0])

    def set_topline(self, viewport: int, line: int) -> None:
        pane = self._pane(viewport)
        total = len(self._documents.get(pane.document, []))
        pane.last_top = max(1, int(line))
        pane.text.yview_moveto((pane.last_top - 1) / max(1, total))

    def get_scrollbind(self, viewport: int) -> bool:
        return self._pane(viewport).scrollbind

    def set_scrollbind(self, viewport: int, bound: bool) -> None:
        pane = self._pane(viewport)
        pane.scrollbind = bool(bound)
        pane.last_top = self.get_topline(viewport)

    def get_active_viewport(self) -> Optional[int]:
        return self._active

    def set_active_viewport(self, viewport: int) -> None:
        self._pane(viewport)
        self._active = viewport

    def active_group(self) -> str:
        return self.group

    def split_viewport(self, base: int, document: str) -> int:
        base_pane = self._pane(base)
        pane = self._create_pane(document)
        index = [str(p) for p in self._paned.panes()].index(str(base_pane.frame))
        self._paned.insert(index + 1, pane.frame, weight=1)
        if document == base_pane.document:
            self.set_topline(pane.handle, self.get_topline(base))
        self._active = pane.handle
        return pane.handle

    def line_count(self, document: str) -> int:
        return len(self._documents.get(document, []))

    def is_document_valid(self, document: Any) -> bool:
        return document in self._documents

    def is_viewport_valid(self, viewport: Any) -> bool:
        return viewport in self._panes

    def subscribe(self, event: HostEvent, callback: EventCallback) -> int:
        token = self._next_token
        self._next_token += 1
        self._subscribers[token] = (HostEvent(event), callback)
        return token

    def unsubscribe(self, token: Any) -> None:
        self._subscribers.pop(token, None)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------
    def _pane(self, viewport: Any) -> _Pane:
        try:
            return self._panes[viewport]
        except KeyError:
            raise ValueError(f"Invalid viewport: {viewport!r}") from None

    def _create_pane(self, document: str) -> _Pane:
        handle = self._next_handle
        self._next_handle += 1

        frame = ttk.Frame(self._paned)
        frame.rowconfigure(0, weight=1)
        frame.columnconfigure(0, weight=1)
        text = tk.Text(frame, wrap="none", font=self._font, width=60, undo=False)
        scrollbar = ttk.Scrollbar(frame, orient="vertical", command=text.yview)
        text.grid(row=0, column=0, sticky="nsew")
        scrollbar.grid(row=0, column=1, sticky="ns")

        pane = _Pane(handle=handle, frame=frame, text=text, scrollbar=scrollbar, document=document)
        text.configure(yscrollcommand=lambda first, last, h=handle: self._on_yscroll(h, first, last))
        text.bind("<FocusIn>", lambda _e, h=handle: self._on_focus(h))

        self._panes[handle] = pane
        self._order.append(handle)
        self._fill(pane)
        return pane

    def _fill(self, pane: _Pane) -> None:
        lines = self._documents.get(pane.document, [])
        pane.text.configure(state="normal")
        pane.text.delete("1.0", "end")
        pane.text.insert("1.0", "\n".join(lines))
        pane.text.configure(state="disabled")
        pane.last_top = 1

    def _on_focus(self, handle: int) -> None:
        if handle not in self._panes:
            return
        self._active = handle
        self._emit(HostEvent.VIEWPORT_ENTERED, handle)

    def _on_yscroll(self, handle: int, first: str, last: str) -> None:
        pane = self._panes.get(handle)
        if pane is None:
            return
        pane.scrollbar.set(first, last)

        top = self.get_topline(handle)
        delta = top - pane.last_top
        pane.last_top = top
        if delta == 0 or not pane.scrollbind or self._propagating:
            return

        self._propagating = True
        try:
            for other in self._panes.values():
                if other.handle == handle or not other.scrollbind:
                    continue
                total = len(self._documents.get(other.document, []))
                height = max(1, self.viewport_height(other.handle))
                self.set_topline(other.handle, clamp_topline(other.last_top + delta, total, height))
        finally:
            self._propagating = False

    def _emit(self, event: HostEvent, viewport: int) -> None:
        for ev, callback in list(self._subscribers.values()):
            if ev == event:
                try:
                    callback(viewport)
                except Exception as exc:
                    # A failing subscriber must not break the Tk event loop
                    logger.error("Error in %s handler: %s", event.value, exc, exc_info=True)
