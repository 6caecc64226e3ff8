from __future__ import annotations

"""Session context wiring the layout services together.

The MultipageContext owns the session-scoped objects (live configuration,
multipage flags, third-party entry points) and hands them to each service by
injection. A host integration creates one context per editor session,
usually through :func:`multipage.bootstrap.setup`.
"""

import logging
from typing import Any, Dict, Mapping, Optional

from multipage.commands import CommandRegistry
from multipage.config.settings import MultipageConfig

from .extensions import ExtensionRegistry
from .host import HostAPI
from .services import ContextRedirect, EventRouter, LayoutService, ModeService, ProvisioningService
from .state import MultipageStateRegistry

logger = logging.getLogger(__name__)

__all__ = ["MultipageContext", "get_app_context", "set_app_context"]


class MultipageContext:
    """Session-scoped gateway to the multipage services.

    Args:
        host: Window manager implementation
        config: Live settings; defaults to :class:`MultipageConfig` defaults
        state: Multipage flag registry; created from ``config.state_scope``
            when omitted
        extensions: Third-party entry point registry
    """

    def __init__(
        self,
        host: HostAPI,
        config: Optional[MultipageConfig] = None,
        state: Optional[MultipageStateRegistry] = None,
        extensions: Optional[ExtensionRegistry] = None,
    ) -> None:
        self._host = host
        self._config = config if config is not None else MultipageConfig()
        self._state = state if state is not None else MultipageStateRegistry(self._config.state_scope)
        self._extensions = extensions if extensions is not None else ExtensionRegistry()

        self.layout_service = LayoutService(host, self._config)
        self.provisioning_service = ProvisioningService(host)
        self.mode_service = ModeService(host, self._state, self.layout_service, self.provisioning_service)
        self.event_router = EventRouter(host, self._state, self.layout_service)
        self.context_redirect = ContextRedirect(host, self._state)
        self.commands = CommandRegistry(self.mode_service)

        self._logger = logging.getLogger(f"{__name__}.MultipageContext")
        self._logger.debug("MultipageContext initialized (scope=%s)", self._state.scope)

    # -------------------------------------------------------------------------
    # Accessors
    # -------------------------------------------------------------------------

    @property
    def host(self) -> HostAPI:
        return self._host

    @property
    def config(self) -> MultipageConfig:
        return self._config

    @property
    def state(self) -> MultipageStateRegistry:
        return self._state

    @property
    def extensions(self) -> ExtensionRegistry:
        return self._extensions

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    def configure(self, options: Optional[Mapping[str, Any]] = None) -> MultipageConfig:
        """Merge ``options`` into the live settings.

        The new overlap applies from the next layout pass on.

        Raises:
            ConfigurationError: If an option is invalid, or ``state_scope``
                changes while a document is in multipage mode
        """
        if not options:
            return self._config
        # Validate everything before touching the live objects.
        candidate = MultipageConfig.from_mapping({**self._config.as_dict(), **dict(options)})
        self._state.set_scope(candidate.state_scope)
        self._config.update(options)
        self._logger.info("Multipage options updated: %s", self._config.as_dict())
        return self._config

    def attach(self) -> None:
        """Start following host layout events (re-subscribes from scratch)."""
        self.event_router.detach()
        self.event_router.attach()

    def detach(self) -> None:
        self.event_router.detach()

    def install_context_redirect(self) -> bool:
        """Install the context-header redirect if enabled and available."""
        if not self._config.context_redirect:
            return False
        return self.context_redirect.install(self._extensions, self._config.context_entry_point)

    # -------------------------------------------------------------------------
    # Debugging
    # -------------------------------------------------------------------------

    def get_context_stats(self) -> Dict[str, Any]:
        return {
            'config': self._config.as_dict(),
            'state_scope': self._state.scope,
            'enabled': self._state.enabled_keys(),
            'router_attached': self.event_router.attached,
            'context_redirect_installed': self.context_redirect.installed,
            'extensions': self._extensions.get_registry_stats(),
        }


# -------------------------------------------------------------------------
# Global Context Accessor
# -------------------------------------------------------------------------

_global_app_context: Optional[MultipageContext] = None


def set_app_context(context: Optional[MultipageContext]) -> None:
    """Set (or clear, with None) the global multipage context."""
    global _global_app_context
    _global_app_context = context
    if context is not None:
        logger.debug("Global MultipageContext set")


def get_app_context() -> Optional[MultipageContext]:
    """Get the global multipage context."""
    return _global_app_context
