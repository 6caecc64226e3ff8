from __future__ import annotations

"""Value objects shared by the layout services.

Documents, window groups and viewports are opaque handles owned by the host;
nothing here stores them beyond a single layout pass.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Hashable, List, Optional, Tuple

Document = Hashable
WindowGroup = Hashable
Viewport = Hashable

__all__ = [
    "Document",
    "WindowGroup",
    "Viewport",
    "BaseView",
    "LayoutResult",
]


@dataclass(frozen=True)
class BaseView:
    """Snapshot of the left-most viewport taken at the start of a pass.

    Attributes
    ----------
    viewport :
        Handle of the reference (left-most) viewport.
    topline :
        Its top-of-view line when the pass started (1-based).
    height :
        Its visible height in lines.
    """

    viewport: Viewport
    topline: int
    height: int


@dataclass
class LayoutResult:
    """Outcome of one layout pass.

    Attributes
    ----------
    applied
        True when offsets were written (or the single viewport was bound).
    reason
        Short machine-friendly reason, e.g. ``"applied"``, ``"no-viewports"``,
        ``"single-viewport"``, ``"collapsed-reference"``.
    toplines
        Top-of-view written per viewport, in left-to-right order.
    span
        Page span used for the pass, or None when no offsets were computed.
    """

    applied: bool
    reason: str
    toplines: Dict[Viewport, int] = field(default_factory=dict)
    span: Optional[int] = None
    base: Optional[BaseView] = None

    def ordered_toplines(self) -> List[int]:
        return list(self.toplines.values())

    def as_pairs(self) -> List[Tuple[Any, int]]:
        return list(self.toplines.items())
