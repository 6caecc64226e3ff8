from __future__ import annotations

"""Setup entry point for host integrations.

``setup()`` builds (or refreshes) the session's
:class:`~multipage.core.context.MultipageContext`: it merges options,
subscribes the event router to the host, exposes the user commands and,
when a context-header integration has registered its entry point, installs
the left-most-pane redirect. Calling it again is safe: options are merged
into the live configuration, event subscriptions are recreated rather than
duplicated and the redirect is never installed twice.
"""

import logging
from typing import Any, Mapping, Optional

from multipage.config import ConfigManager, MultipageConfig
from multipage.core.context import MultipageContext, get_app_context, set_app_context
from multipage.core.extensions import ExtensionRegistry
from multipage.core.host import HostAPI

logger = logging.getLogger(__name__)

__all__ = ["setup", "teardown"]


def setup(
    host: HostAPI,
    options: Optional[Mapping[str, Any]] = None,
    *,
    extensions: Optional[ExtensionRegistry] = None,
    use_config_files: bool = True,
) -> MultipageContext:
    """Wire multipage into ``host`` and return the session context.

    Args:
        host: Window manager implementation
        options: Option overrides (``overlap``, ``state_scope``, ...)
        extensions: Registry holding third-party entry points; a fresh one is
            created for a new session when omitted
        use_config_files: Merge packaged/user YAML options below ``options``

    Raises:
        ConfigurationError: If an option is invalid
    """
    context = get_app_context()
    if context is not None and context.host is host:
        context.configure(options)
    else:
        if context is not None:
            # A new host replaces the session; hand its entry points back first.
            context.detach()
            context.context_redirect.uninstall(context.extensions)
        if use_config_files:
            config = ConfigManager().build_config(dict(options or {}))
        else:
            config = MultipageConfig.from_mapping(options or {})
        context = MultipageContext(host, config, extensions=extensions)
        set_app_context(context)

    context.attach()
    if context.install_context_redirect():
        logger.debug("Context redirect active")
    logger.info("Multipage set up (overlap=%d, scope=%s)", context.config.overlap, context.state.scope)
    return context


def teardown() -> None:
    """Detach the current session from its host and forget it."""
    context = get_app_context()
    if context is None:
        return
    context.detach()
    context.context_redirect.uninstall(context.extensions)
    set_app_context(None)
