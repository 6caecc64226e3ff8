from __future__ import annotations

"""Redirect a context-header renderer to the left-most page.

A context-header integration draws the enclosing scopes of the first visible
line of the *active* viewport. In multipage mode only the left-most pane is
the "first page", so the renderer is run from inside that pane whatever pane
the user is in. The shim composes with the integration: it receives the
integration's function, returns a wrapper with the same call signature, and
is installed at the single point where the host resolves the entry point
(:class:`~multipage.core.extensions.ExtensionRegistry`).
"""

import functools
import logging
from typing import Any, Callable, Optional

from multipage.core.activation import activated_viewport
from multipage.core.discovery import leftmost_viewport
from multipage.core.extensions import CONTEXT_UPDATE, ExtensionRegistry
from multipage.core.host import HostAPI
from multipage.core.models import Viewport
from multipage.core.state import MultipageStateRegistry

logger = logging.getLogger(__name__)

__all__ = ["ContextRedirect"]


class ContextRedirect:
    """Intercept, delegate, restore.

    The shim owns its install-once guard: installing it again (e.g. because
    setup ran twice) never wraps the entry point a second time.
    """

    def __init__(self, host: HostAPI, state: MultipageStateRegistry) -> None:
        self._host = host
        self._state = state
        self._installed = False
        self._installed_name: Optional[str] = None

    @property
    def installed(self) -> bool:
        return self._installed

    def _redirect_target(self) -> Optional[Viewport]:
        host = self._host
        active = host.get_active_viewport()
        if active is None or not host.is_viewport_valid(active):
            return None
        document = host.viewport_document(active)
        if not host.is_document_valid(document):
            return None
        group = host.viewport_group(active)
        if not self._state.is_enabled(document, group):
            return None
        target = leftmost_viewport(host, group, document)
        if target is None or not host.is_viewport_valid(target):
            return None
        return target

    def wrap(self, original: Callable[..., Any]) -> Callable[..., Any]:
        """Return ``original`` wrapped so it runs from the left-most pane."""

        @functools.wraps(original)
        def redirected(*args: Any, **kwargs: Any) -> Any:
            target = self._redirect_target()
            if target is not None:
                try:
                    with activated_viewport(self._host, target):
                        return original(*args, **kwargs)
                except Exception as exc:
                    logger.debug("Redirected context update failed, falling back: %s", exc)
            return original(*args, **kwargs)

        return redirected

    def install(self, extensions: ExtensionRegistry, name: str = CONTEXT_UPDATE) -> bool:
        """Replace the entry point ``name`` with its redirected version.

        Returns:
            True if the shim is installed (now or by an earlier call), False
            when no integration registered ``name``
        """
        if self._installed:
            return True

        original = extensions.resolve(name)
        if original is None:
            logger.debug("No %s entry point registered; context redirect not installed", name)
            return False

        extensions.replace(name, self.wrap(original))
        self._installed = True
        self._installed_name = name
        logger.info("Context redirect installed for %s", name)
        return True

    def uninstall(self, extensions: ExtensionRegistry) -> bool:
        """Hand the provider's original function back to the registry."""
        if not self._installed or self._installed_name is None:
            return False
        original = extensions.original(self._installed_name)
        if original is not None and extensions.has_entry_point(self._installed_name):
            extensions.replace(self._installed_name, original)
        self._installed = False
        self._installed_name = None
        return True
