from __future__ import annotations

"""Exception classes for the multipage layout package.

Core layout operations never raise for expected states (collapsed panes,
missing viewports, stale handles); they degrade to "layout not refreshed".
The exceptions below are raised at the glue boundary only: configuration,
command parsing and third-party entry-point registration.
"""

from typing import Any, Optional


class MultipageError(Exception):
    """Base exception for all multipage errors.

    All package exceptions inherit from this base class so that front-ends
    can report them uniformly.
    """

    def __init__(self, message: str, document: Optional[Any] = None,
                 cause: Optional[Exception] = None) -> None:
        super().__init__(message)
        self.document = document
        self.cause = cause

    def __str__(self) -> str:
        if self.document is not None:
            return f"[Document: {self.document}] {super().__str__()}"
        return super().__str__()


class ConfigurationError(MultipageError):
    """Raised when a configuration value is invalid.

    This includes negative overlaps, non-integer overlaps and unknown
    state scopes passed to ``setup()`` or ``MultipageConfig.update()``.
    """

    def __init__(self, message: str, key: Optional[str] = None,
                 value: Any = None, cause: Optional[Exception] = None) -> None:
        super().__init__(message, cause=cause)
        self.key = key
        self.value = value


class CommandError(MultipageError):
    """Base class for command surface errors."""

    def __init__(self, message: str, command: Optional[str] = None,
                 cause: Optional[Exception] = None) -> None:
        super().__init__(message, cause=cause)
        self.command = command


class UnknownCommandError(CommandError):
    """Raised when a command name is not registered."""
    pass


class CommandArgumentError(CommandError):
    """Raised when a command argument cannot be parsed.

    The column count accepted by ``MultipageEnable`` and ``MultipageToggle``
    must be a positive integer.
    """

    def __init__(self, message: str, command: Optional[str] = None,
                 argument: Optional[str] = None,
                 cause: Optional[Exception] = None) -> None:
        super().__init__(message, command, cause)
        self.argument = argument


class ExtensionRegistrationError(MultipageError):
    """Raised when a third-party entry point cannot be registered.

    This includes duplicate names and non-callable entry points.
    """

    def __init__(self, message: str, name: Optional[str] = None,
                 provider_id: Optional[str] = None,
                 cause: Optional[Exception] = None) -> None:
        super().__init__(message, cause=cause)
        self.name = name
        self.provider_id = provider_id
