"""Error hierarchy and structured error logging helpers."""

from .handling import log_error
from .internal import (
    ConfigError,
    InternalError,
    NoCommandError,
    ParsingError,
    StartupError,
)

__all__ = [
    "ConfigError",
    "InternalError",
    "NoCommandError",
    "ParsingError",
    "StartupError",
    "log_error",
]
