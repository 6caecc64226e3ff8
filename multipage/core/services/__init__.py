from __future__ import annotations

"""Layout services (layout engine, provisioning, mode, events, redirect).

Services are instantiated with an injected host and shared state; see
:class:`multipage.core.context.MultipageContext` for the wiring.
"""

from .layout_service import LayoutService  # noqa: F401
from .provisioning_service import ProvisioningService  # noqa: F401
from .mode_service import ModeResult, ModeService  # noqa: F401
from .event_router import EventRouter  # noqa: F401
from .context_redirect import ContextRedirect  # noqa: F401

__all__: list[str] = [
    "LayoutService",
    "ProvisioningService",
    "ModeService",
    "ModeResult",
    "EventRouter",
    "ContextRedirect",
]
