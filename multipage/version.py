# -*- coding: utf-8 -*-
"""Application version detection utilities.

Provides a single public function, ``get_app_version()``. The installed
distribution metadata is the source of truth; a source checkout that was
never installed reports ``"vdev"``.
"""

from __future__ import annotations

from importlib import metadata
from typing import Optional

DISTRIBUTION_NAME = "multipage-layout"

_CACHED_VERSION: Optional[str] = None


def get_app_version() -> str:
    """Return the version string (e.g., ``v0.1.0``), or ``"vdev"``."""
    global _CACHED_VERSION
    if _CACHED_VERSION:
        return _CACHED_VERSION

    try:
        text = metadata.version(DISTRIBUTION_NAME).strip()
    except metadata.PackageNotFoundError:
        text = ""
    if text:
        _CACHED_VERSION = text if text.startswith("v") else f"v{text}"
    else:
        _CACHED_VERSION = "vdev"
    return _CACHED_VERSION
