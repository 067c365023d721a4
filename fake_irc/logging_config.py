r"""
Logging configuration module for the fake IRC server.

Provides the colorlog based root logging setup and structured error logging
with per-category aggregation, summarized when the process exits.
"""

import atexit
import logging
import os
import sys
import threading
import time
from collections import defaultdict
from typing import Any

import colorlog


class ErrorAggregator:
    """Aggregates error occurrences per category.

    Connection and relay failures are expected in a test double (clients
    disconnect abruptly all the time), so they are counted rather than
    alerted on, and the counts are reported once at shutdown.
    """

    def __init__(self, max_entries: int = 1000):
        self.errors: dict[str, list[dict[str, Any]]] = defaultdict(list)
        self.lock = threading.Lock()
        self.max_entries = max_entries

    def record_error(
        self, error_type: str, message: str, context: dict[str, Any] | None = None
    ) -> None:
        """Record an error occurrence with context."""
        with self.lock:
            entries = self.errors[error_type]
            entries.append(
                {"timestamp": time.time(), "message": message, "context": context or {}}
            )
            if len(entries) > self.max_entries:
                del entries[: len(entries) - self.max_entries]

    def get_error_summary(self) -> dict[str, dict[str, Any]]:
        with self.lock:
            return {
                error_type: {
                    "total_count": len(occurrences),
                    "last_message": occurrences[-1]["message"] if occurrences else None,
                }
                for error_type, occurrences in self.errors.items()
            }

    def clear(self) -> None:
        with self.lock:
            self.errors.clear()

    def log_summary_report(self) -> None:
        """Log a summary report of error patterns."""
        summary = self.get_error_summary()
        if not summary:
            logging.info("No errors recorded in current session")
            return

        logging.warning("ERROR SUMMARY REPORT")
        for error_type, stats in summary.items():
            logging.warning(f"  {error_type}: {stats['total_count']} total")
            if stats["last_message"]:
                logging.warning(f"    Last: {stats['last_message']}")


# Global error aggregator instance
error_aggregator = ErrorAggregator()


def log_structured_error(
    error_type: str,
    message: str,
    exception: BaseException | None = None,
    context: dict[str, Any] | None = None,
    level: int = logging.ERROR,
) -> None:
    """Log an error with structured context and aggregation.

    Args:
        error_type: Category of the error (e.g., 'network', 'parsing', 'startup')
        message: Descriptive error message
        exception: The exception that occurred (optional)
        context: Additional context data for debugging
        level: Logging level (default: ERROR)
    """
    structured_message = f"[{error_type.upper()}] {message}"

    if exception:
        structured_message += f" | Exception: {type(exception).__name__}"

    if context:
        context_str = " | ".join(f"{k}={v}" for k, v in context.items())
        structured_message += f" | Context: {context_str}"

    logging.log(level, structured_message)
    error_aggregator.record_error(error_type, message, context)


class LoggerConfigurator:
    """Handles logging configuration cleanly using colorlog.

    Supports environment variable configuration for log levels.
    """

    def __init__(self, stream=None):
        """Initialize the configurator.

        Args:
            stream: Optional output stream, defaults to stderr so stdout stays
                free for whatever drives the relay input.
        """
        self.stream = stream

    @staticmethod
    def resolve_level() -> int:
        """DEBUG: Set to 'true', '1', or 'yes' for DEBUG level, otherwise INFO."""
        debug_env = os.environ.get("DEBUG", "").lower()
        return logging.DEBUG if debug_env in ("true", "1", "yes") else logging.INFO

    @staticmethod
    def build_formatter() -> colorlog.ColoredFormatter:
        return colorlog.ColoredFormatter(
            "%(asctime)s %(log_color)s%(levelname)-8s%(reset)s %(message_log_color)s%(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
            log_colors={
                "DEBUG": "cyan",
                "INFO": "green",
                "WARNING": "yellow",
                "ERROR": "red",
                "CRITICAL": "magenta",
            },
            secondary_log_colors={
                "message": {
                    "ERROR": "red",
                    "CRITICAL": "magenta",
                }
            },
            reset=True,
        )

    def configure(self, *, register_summary: bool = True) -> None:
        """Configure root logging with colored output."""
        log_level = self.resolve_level()

        handler = logging.StreamHandler(self.stream or sys.stderr)
        handler.setFormatter(self.build_formatter())

        logging.basicConfig(level=log_level, handlers=[handler], force=True)
        logging.getLogger().setLevel(log_level)
        # asyncio reports every peer reset at DEBUG; those are our own events
        logging.getLogger("asyncio").setLevel(logging.WARNING)

        if register_summary:
            atexit.register(self._log_final_error_summary)

    def _log_final_error_summary(self) -> None:
        """Log final error summary on application exit."""
        try:
            logging.info("Final error summary before shutdown:")
            error_aggregator.log_summary_report()
        except Exception as e:  # noqa: BLE001
            logging.error(f"Failed to log final error summary: {e}")
