from __future__ import annotations

"""User command surface: ``MultipageEnable [N]``, ``MultipageDisable``,
``MultipageToggle [N]``.

Commands act on the host's active document and window group. ``N`` is the
number of columns to provision; it can be given as an argument or as a
count prefix (``3MultipageEnable``-style hosts pass ``count=3``).
"""

import logging
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

from multipage.core.exceptions import CommandArgumentError, UnknownCommandError
from multipage.core.services.mode_service import ModeResult, ModeService

logger = logging.getLogger(__name__)

__all__ = ["CommandRegistry", "CommandSpec", "parse_column_count"]


def parse_column_count(args: str = "", count: int = 0, command: Optional[str] = None) -> Optional[int]:
    """Return the requested column count or None.

    An explicit argument wins over a positive ``count``.

    Raises:
        CommandArgumentError: If the argument is not a positive integer
    """
    text = (args or "").strip()
    if text:
        try:
            value = int(text)
        except ValueError as exc:
            raise CommandArgumentError(
                f"Column count must be a positive integer, got {text!r}",
                command=command,
                argument=text,
                cause=exc,
            ) from exc
        if value <= 0:
            raise CommandArgumentError(
                f"Column count must be a positive integer, got {value}",
                command=command,
                argument=text,
            )
        return value
    if count and count > 0:
        return int(count)
    return None


@dataclass(frozen=True)
class CommandSpec:
    """Description of one user command, for host registration."""

    name: str
    handler: Callable[[str, int], Optional[ModeResult]]
    takes_count: bool
    description: str


class CommandRegistry:
    """Map command names to mode transitions."""

    ENABLE = "MultipageEnable"
    DISABLE = "MultipageDisable"
    TOGGLE = "MultipageToggle"

    def __init__(self, mode_service: ModeService) -> None:
        self._mode = mode_service
        self._commands: Dict[str, CommandSpec] = {}
        self._register(CommandSpec(self.ENABLE, self._enable, True,
                                   "Enable multipage mode, optionally with N columns"))
        self._register(CommandSpec(self.DISABLE, self._disable, False,
                                   "Disable multipage mode"))
        self._register(CommandSpec(self.TOGGLE, self._toggle, True,
                                   "Toggle multipage mode, optionally with N columns"))

    def _register(self, spec: CommandSpec) -> None:
        self._commands[spec.name] = spec

    # ------------------------------------------------------------------ API

    def names(self) -> List[str]:
        return list(self._commands)

    def specs(self) -> List[CommandSpec]:
        return list(self._commands.values())

    def execute(self, name: str, args: str = "", count: int = 0) -> Optional[ModeResult]:
        """Run command ``name``.

        Returns:
            The mode transition result, or None when there is no current
            document to act on

        Raises:
            UnknownCommandError: If ``name`` is not a multipage command
            CommandArgumentError: If the column count is invalid
        """
        spec = self._commands.get(name)
        if spec is None:
            raise UnknownCommandError(f"Unknown command: {name}", command=name)
        logger.debug("Running %s args=%r count=%r", name, args, count)
        return spec.handler(args, count)

    def execute_line(self, line: str) -> Optional[ModeResult]:
        """Run a command line such as ``":MultipageEnable 3"``."""
        text = line.strip().lstrip(":").strip()
        if not text:
            raise UnknownCommandError("Empty command")
        name, *rest = text.split(None, 1)
        return self.execute(name, rest[0] if rest else "")

    # ------------------------------------------------------------- Handlers

    def _enable(self, args: str, count: int) -> Optional[ModeResult]:
        return self._mode.enable_current(parse_column_count(args, count, self.ENABLE))

    def _disable(self, args: str, count: int) -> Optional[ModeResult]:
        return self._mode.disable_current()

    def _toggle(self, args: str, count: int) -> Optional[ModeResult]:
        return self._mode.toggle_current(parse_column_count(args, count, self.TOGGLE))
