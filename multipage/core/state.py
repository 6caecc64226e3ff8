from __future__ import annotations

"""Session-scoped multipage flags.

The registry replaces a flag stored on the document itself: it is owned by
the session context and injected into every service that reads or writes
the flag, so several documents (and several registries) can be exercised in
isolation.
"""

import logging
from typing import Dict, Hashable, List, Literal, Tuple

from .exceptions import ConfigurationError
from .models import Document, WindowGroup

logger = logging.getLogger(__name__)

__all__ = ["MultipageStateRegistry", "StateScope", "STATE_SCOPES"]

StateScope = Literal["document", "group"]
STATE_SCOPES: Tuple[str, ...] = ("document", "group")


class MultipageStateRegistry:
    """Track which documents are in multipage mode.

    Parameters
    ----------
    scope : {"document", "group"}, default="document"
        ``"document"`` keys the flag by document only: enabling a document in
        one window group also makes the event router lay it out in any other
        group where it appears. ``"group"`` keys the flag by
        ``(document, group)`` so each group is enabled independently.

    Notes
    -----
    Documents start disabled. The flag is never persisted.
    """

    def __init__(self, scope: StateScope = "document") -> None:
        if scope not in STATE_SCOPES:
            raise ConfigurationError(
                f"Unknown state scope {scope!r}; expected one of {', '.join(STATE_SCOPES)}",
                key="state_scope",
                value=scope,
            )
        self._scope: StateScope = scope
        self._enabled: Dict[Hashable, bool] = {}

    @property
    def scope(self) -> StateScope:
        return self._scope

    def _key(self, document: Document, group: WindowGroup) -> Hashable:
        if self._scope == "group":
            return (document, group)
        return document

    def is_enabled(self, document: Document, group: WindowGroup) -> bool:
        return self._enabled.get(self._key(document, group), False)

    def set_enabled(self, document: Document, group: WindowGroup, enabled: bool) -> None:
        key = self._key(document, group)
        previous = self._enabled.get(key, False)
        self._enabled[key] = bool(enabled)
        if previous != bool(enabled):
            logger.debug("Multipage %s for %r", "enabled" if enabled else "disabled", key)

    def forget(self, document: Document) -> None:
        """Drop every flag recorded for ``document`` (e.g. when it is wiped)."""
        if self._scope == "document":
            self._enabled.pop(document, None)
            return
        for key in [k for k in self._enabled if k[0] == document]:
            del self._enabled[key]

    def enabled_keys(self) -> List[Hashable]:
        return [key for key, value in self._enabled.items() if value]

    def set_scope(self, scope: StateScope) -> None:
        """Change the key scope; only allowed while nothing is enabled."""
        if scope == self._scope:
            return
        if scope not in STATE_SCOPES:
            raise ConfigurationError(
                f"Unknown state scope {scope!r}; expected one of {', '.join(STATE_SCOPES)}",
                key="state_scope",
                value=scope,
            )
        if self.enabled_keys():
            raise ConfigurationError(
                "state_scope cannot change while documents are in multipage mode",
                key="state_scope",
                value=scope,
            )
        self._enabled.clear()
        self._scope = scope
