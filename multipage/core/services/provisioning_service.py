from __future__ import annotations

"""Viewport provisioning: make sure a document has N columns in a group."""

import logging
from typing import List, Optional

from multipage.core.discovery import discover_viewports
from multipage.core.host import HostAPI
from multipage.core.models import Document, Viewport, WindowGroup

logger = logging.getLogger(__name__)

__all__ = ["ProvisioningService"]


class ProvisioningService:
    """Create vertical splits until a document is shown in enough viewports.

    The active viewport is restored afterwards, and the returned sequence is
    always re-discovered: host-assigned positions of new splits are unknown
    until they exist.
    """

    def __init__(self, host: HostAPI) -> None:
        self._host = host

    def _base_viewport(self, document: Document, group: WindowGroup,
                       existing: List[Viewport]) -> Optional[Viewport]:
        """Pick the viewport the first new split is made from.

        The active viewport when it belongs to ``group`` and already shows the
        document (or the document is not shown in ``group`` yet), else the
        right-most existing one. None when ``group`` offers neither.
        """
        host = self._host
        active = host.get_active_viewport()
        active_in_group = (
            active is not None
            and host.is_viewport_valid(active)
            and host.viewport_group(active) == group
        )
        if active_in_group and (not existing or host.viewport_document(active) == document):
            return active
        if existing:
            return existing[-1]
        return None

    def ensure_columns(self, document: Document, group: WindowGroup,
                       columns: Optional[int]) -> List[Viewport]:
        """Return the viewports showing ``document``, creating splits if needed.

        Args:
            document: Document to show
            group: Window group to provision in
            columns: Desired number of viewports; None or a count that is
                already met leaves the layout untouched

        Returns:
            The viewports showing ``document`` in ``group``, left to right
        """
        host = self._host
        existing = discover_viewports(host, group, document)
        if not columns or columns <= len(existing):
            return existing

        base = self._base_viewport(document, group, existing)
        if base is None or not host.is_viewport_valid(base):
            logger.debug("No viewport to split from for %r in %r", document, group)
            return existing

        previous = host.get_active_viewport()
        missing = columns - len(existing)
        try:
            for _ in range(missing):
                base = host.split_viewport(base, document)
        finally:
            if previous is not None and host.is_viewport_valid(previous):
                host.set_active_viewport(previous)

        logger.info("Created %d split(s) for %r in %r", missing, document, group)
        return discover_viewports(host, group, document)
