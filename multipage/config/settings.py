from __future__ import annotations

"""Typed runtime settings for the layout services."""

import logging
from dataclasses import dataclass, fields
from typing import Any, Dict, Mapping

from multipage.core.exceptions import ConfigurationError
from multipage.core.extensions import CONTEXT_UPDATE

logger = logging.getLogger(__name__)

__all__ = ["MultipageConfig"]

_STATE_SCOPES = ("document", "group")


@dataclass
class MultipageConfig:
    """Settings shared (by reference) with every service of a session.

    Attributes
    ----------
    overlap : int
        Lines shared between the visible ranges of two adjacent panes. With
        ``overlap = 1`` the last line of a pane is repeated as the first line
        of the next one.
    state_scope : str
        ``"document"`` or ``"group"``; see
        :class:`multipage.core.state.MultipageStateRegistry`.
    context_redirect : bool
        Whether setup installs the context-header redirect when an
        integration is present.
    context_entry_point : str
        Registry name of the context-header update function.
    """

    overlap: int = 1
    state_scope: str = "document"
    context_redirect: bool = True
    context_entry_point: str = CONTEXT_UPDATE

    def __post_init__(self) -> None:
        self._validate("overlap", self.overlap)
        self._validate("state_scope", self.state_scope)
        self._validate("context_redirect", self.context_redirect)
        self._validate("context_entry_point", self.context_entry_point)

    # ------------------------------------------------------------------
    # Public helpers
    # ------------------------------------------------------------------
    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "MultipageConfig":
        config = cls()
        config.update(data)
        return config

    def update(self, data: Mapping[str, Any]) -> None:
        """Validate and apply ``data`` in place.

        Unknown keys are ignored with a warning. Values are validated before
        anything is assigned, so an invalid mapping leaves the config unchanged.

        Raises:
            ConfigurationError: If a known key has an invalid value
        """
        known = {f.name for f in fields(self)}
        accepted: Dict[str, Any] = {}
        for key, value in dict(data or {}).items():
            if key not in known:
                logger.warning("Ignoring unknown multipage option %r", key)
                continue
            accepted[key] = self._validate(key, value)
        for key, value in accepted.items():
            setattr(self, key, value)

    def as_dict(self) -> Dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------
    @staticmethod
    def _validate(key: str, value: Any) -> Any:
        if key == "overlap":
            # bool is an int subclass; "overlap: true" in YAML is a mistake.
            if isinstance(value, bool) or not isinstance(value, int):
                raise ConfigurationError(f"overlap must be an integer, got {value!r}", key=key, value=value)
            if value < 0:
                raise ConfigurationError(f"overlap must be >= 0, got {value}", key=key, value=value)
            return value
        if key == "state_scope":
            if value not in _STATE_SCOPES:
                raise ConfigurationError(
                    f"state_scope must be one of {', '.join(_STATE_SCOPES)}, got {value!r}",
                    key=key,
                    value=value,
                )
            return value
        if key == "context_redirect":
            if not isinstance(value, bool):
                raise ConfigurationError(f"context_redirect must be a boolean, got {value!r}", key=key, value=value)
            return value
        if key == "context_entry_point":
            if not isinstance(value, str) or not value:
                raise ConfigurationError("context_entry_point must be a non-empty string", key=key, value=value)
            return value
        return value
