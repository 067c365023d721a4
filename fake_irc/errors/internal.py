"""Centralized internal error hierarchy.

These exceptions give semantic categories to the failures the server can
observe. Raw socket errors are wrapped at the boundary where they stop being
recoverable (startup); per-connection errors are handled in place.

Classes:
  InternalError        – Base for all internal errors.
  ParsingError         – A protocol line could not be turned into a message.
  NoCommandError       – A line carried no command word.
  ConfigError          – Server configuration failed validation.
  StartupError         – The server could not start (bind failure, bad config).
"""

from __future__ import annotations

from collections.abc import Mapping


class InternalError(Exception):
    """Base class for all internal application errors with metadata support.

    Attributes:
        data: Dictionary containing arbitrary structured context data.

    Args:
        message: Descriptive error message.
        data: Optional mapping of additional context data.
    """

    data: dict[str, object]

    def __init__(
        self, message: str, *, data: Mapping[str, object] | None = None
    ) -> None:
        super().__init__(message)
        # Copy into a plain dict to avoid unexpected mutations from caller.
        self.data = dict(data) if data else {}


class ParsingError(InternalError):
    """Exception raised when a protocol line cannot be parsed."""


class NoCommandError(ParsingError):
    """Raised when a line is empty after the optional tag and prefix.

    Args:
        line: The offending line, kept in ``data["line"]`` for logging.
    """

    def __init__(self, line: str) -> None:
        super().__init__("IRC line has no command", data={"line": line})


class ConfigError(InternalError):
    """Exception raised when the server configuration is invalid."""


class StartupError(InternalError):
    """Exception raised when the server cannot begin accepting connections."""


__all__ = [
    "InternalError",
    "ParsingError",
    "NoCommandError",
    "ConfigError",
    "StartupError",
]
