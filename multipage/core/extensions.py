from __future__ import annotations

"""Registry of third-party entry points.

Optional integrations (for example a context-header renderer) register the
function the host calls into under a well-known name. The host looks the
function up here on every call, so an interception such as
:class:`multipage.core.services.context_redirect.ContextRedirect` swaps the
registered function at this single point instead of patching the
integration's module.
"""

import logging
from typing import Any, Callable, Dict, List, Optional

from .exceptions import ExtensionRegistrationError

logger = logging.getLogger(__name__)

__all__ = ["ExtensionRegistry", "CONTEXT_UPDATE"]

# Name under which a context-header integration exposes its update function.
CONTEXT_UPDATE = "context.update"


class ExtensionRegistry:
    """Name-to-callable registry for third-party entry points.

    Each entry remembers the provider that registered it and the original
    callable, so a replaced entry point can still be traced back to (and
    restored from) what the provider supplied.
    """

    def __init__(self) -> None:
        self._entry_points: Dict[str, Callable[..., Any]] = {}
        self._originals: Dict[str, Callable[..., Any]] = {}
        self._providers: Dict[str, str] = {}  # name -> provider_id
        self._logger = logging.getLogger(f"{__name__}.ExtensionRegistry")

    # -------------------------------------------------------------------------
    # Registration
    # -------------------------------------------------------------------------

    def register_entry_point(self, name: str, func: Callable[..., Any], provider_id: str) -> None:
        """Register ``func`` as the entry point called ``name``.

        Raises:
            ExtensionRegistrationError: If ``func`` is not callable or ``name``
                is already registered.
        """
        if not callable(func):
            raise ExtensionRegistrationError(
                f"Entry point {name!r} is not callable",
                name=name,
                provider_id=provider_id,
            )
        if name in self._entry_points:
            existing = self._providers.get(name, "unknown")
            raise ExtensionRegistrationError(
                f"Entry point {name!r} already registered by {existing}",
                name=name,
                provider_id=provider_id,
            )

        self._entry_points[name] = func
        self._originals[name] = func
        self._providers[name] = provider_id
        self._logger.info("Registered entry point %s from %s", name, provider_id)

    def unregister_entry_point(self, name: str) -> bool:
        """Remove the entry point called ``name``.

        Returns:
            True if an entry point was found and removed
        """
        if name not in self._entry_points:
            return False
        del self._entry_points[name]
        self._originals.pop(name, None)
        provider = self._providers.pop(name, None)
        self._logger.info("Unregistered entry point %s from %s", name, provider)
        return True

    def replace(self, name: str, func: Callable[..., Any]) -> Callable[..., Any]:
        """Install ``func`` in place of the current entry point.

        Returns:
            The callable that was previously registered under ``name``

        Raises:
            ExtensionRegistrationError: If nothing is registered under ``name``
        """
        if name not in self._entry_points:
            raise ExtensionRegistrationError(
                f"No entry point {name!r} to replace",
                name=name,
            )
        if not callable(func):
            raise ExtensionRegistrationError(
                f"Replacement for {name!r} is not callable",
                name=name,
            )
        previous = self._entry_points[name]
        self._entry_points[name] = func
        self._logger.debug("Replaced entry point %s", name)
        return previous

    # -------------------------------------------------------------------------
    # Resolution
    # -------------------------------------------------------------------------

    def has_entry_point(self, name: str) -> bool:
        return name in self._entry_points

    def resolve(self, name: str) -> Optional[Callable[..., Any]]:
        """Return the callable the host should invoke for ``name``."""
        return self._entry_points.get(name)

    def original(self, name: str) -> Optional[Callable[..., Any]]:
        """Return the callable the provider registered, ignoring replacements."""
        return self._originals.get(name)

    def call(self, name: str, *args: Any, **kwargs: Any) -> Any:
        """Invoke the entry point ``name``; a missing entry point is a no-op."""
        func = self._entry_points.get(name)
        if func is None:
            return None
        return func(*args, **kwargs)

    def get_provider(self, name: str) -> Optional[str]:
        return self._providers.get(name)

    def get_registry_stats(self) -> Dict[str, Any]:
        """Get registry statistics for debugging."""
        replaced: List[str] = [
            name for name, func in self._entry_points.items()
            if func is not self._originals.get(name)
        ]
        return {
            "entry_points": sorted(self._entry_points),
            "providers": dict(self._providers),
            "replaced": sorted(replaced),
        }
