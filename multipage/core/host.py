from __future__ import annotations

"""Host capability interface.

Defines the contract between the layout services and the editor that owns
the windows. The services never reach for a global editor API; a ``HostAPI``
implementation is injected into each of them, which keeps them testable
against :class:`multipage.core.memory_host.InMemoryHost`.

Viewports, documents and window groups are opaque hashable handles chosen by
the host. Handles may become invalid at any time (a pane is closed, a buffer
is wiped); callers check ``is_viewport_valid`` / ``is_document_valid`` before
using a handle they did not just receive.
"""

from enum import Enum
from typing import Any, Callable, Hashable, Iterable, Protocol, Tuple, runtime_checkable

from .models import Document, Viewport, WindowGroup

__all__ = ["HostAPI", "HostEvent", "EventCallback"]


class HostEvent(str, Enum):
    """Layout-affecting notifications emitted by the host."""

    DOCUMENT_DISPLAYED = "document-displayed"
    VIEWPORT_ENTERED = "viewport-entered"


# Callback receives the affected viewport.
EventCallback = Callable[[Viewport], None]


@runtime_checkable
class HostAPI(Protocol):
    """Protocol for the window manager consumed by the layout services."""

    # ------------------------------------------------------------ Discovery

    def list_viewports(self, group: WindowGroup) -> Iterable[Viewport]:
        """Return every viewport of ``group`` in the host's stable order."""
        ...

    def viewport_document(self, viewport: Viewport) -> Document:
        """Return the document currently displayed in ``viewport``."""
        ...

    def viewport_group(self, viewport: Viewport) -> WindowGroup:
        """Return the window group that owns ``viewport``."""
        ...

    # ------------------------------------------------------------- Geometry

    def viewport_position(self, viewport: Viewport) -> Tuple[int, int]:
        """Return the ``(row, col)`` screen position of the viewport."""
        ...

    def viewport_height(self, viewport: Viewport) -> int:
        """Return the visible height of the viewport in lines."""
        ...

    def get_topline(self, viewport: Viewport) -> int:
        """Return the 1-based document line shown on the first row."""
        ...

    def set_topline(self, viewport: Viewport, line: int) -> None:
        """Scroll the viewport so that ``line`` is on its first row."""
        ...

    # -------------------------------------------------------- Scroll binding

    def get_scrollbind(self, viewport: Viewport) -> bool:
        ...

    def set_scrollbind(self, viewport: Viewport, bound: bool) -> None:
        ...

    # ------------------------------------------------------ Active viewport

    def get_active_viewport(self) -> Viewport:
        ...

    def set_active_viewport(self, viewport: Viewport) -> None:
        """Make ``viewport`` active without emitting ``VIEWPORT_ENTERED``."""
        ...

    def active_group(self) -> WindowGroup:
        ...

    # ------------------------------------------------------------ Splitting

    def split_viewport(self, base: Viewport, document: Document) -> Viewport:
        """Create a vertical split of ``base`` showing ``document``.

        The new viewport becomes the active one, as after the host's own
        split command.
        """
        ...

    # ------------------------------------------------------------ Documents

    def line_count(self, document: Document) -> int:
        ...

    def is_document_valid(self, document: Document) -> bool:
        ...

    def is_viewport_valid(self, viewport: Viewport) -> bool:
        ...

    # --------------------------------------------------------------- Events

    def subscribe(self, event: HostEvent, callback: EventCallback) -> Hashable:
        """Register ``callback`` for ``event`` and return a removal token."""
        ...

    def unsubscribe(self, token: Any) -> None:
        ...
