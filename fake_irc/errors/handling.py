from __future__ import annotations

import asyncio
import logging

from ..logging_config import log_structured_error
from .internal import (
    ConfigError,
    InternalError,
    ParsingError,
    StartupError,
)


def categorize_error(error: BaseException) -> str:
    """Return the aggregation category used for ``error``."""
    if isinstance(error, OSError | asyncio.IncompleteReadError):
        return "network"
    if isinstance(error, ParsingError):
        return "parsing"
    if isinstance(error, ConfigError):
        return "config"
    if isinstance(error, StartupError):
        return "startup"
    if isinstance(error, InternalError):
        return "internal"
    return "unknown"


def log_error(
    message: str,
    error: BaseException,
    context: dict[str, object] | None = None,
    level: int = logging.ERROR,
) -> None:
    """Logs an error message with the associated exception details.

    The error is categorized from its type and recorded through structured
    logging so repeated failures show up in the exit summary.

    Args:
        message: A descriptive message about the error context.
        error: The exception instance to be logged.
        context: Optional additional context data for debugging.
        level: Logging level (default: ERROR).
    """
    log_structured_error(
        error_type=categorize_error(error),
        message=f"{message}: {error}",
        exception=error,
        context=context,
        level=level,
    )
