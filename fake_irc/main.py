#!/usr/bin/env python3
"""
Main entry point for the fake IRC server
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from collections.abc import AsyncIterator

from . import __version__
from .config import ServerConfig, load_config
from .errors.handling import log_error
from .errors.internal import ConfigError, StartupError
from .irc.listener import IRCServer
from .irc.relay import BroadcastRelay, stdin_lines
from .logging_config import LoggerConfigurator
from .logs.logger import logger


def parse_port(value: str) -> int:
    try:
        port = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(
            f"PORT argument is not a number: {value!r}"
        ) from None
    if not 0 <= port <= 65535:
        raise argparse.ArgumentTypeError(f"PORT out of range: {port}")
    return port


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="fake-irc-server",
        description=(
            "Fake IRC server for client testing. Lines typed on stdin are "
            "broadcast to every registered client."
        ),
    )
    parser.add_argument(
        "port",
        metavar="PORT",
        nargs="?",
        type=parse_port,
        default=None,
        help="port to listen on (default: 1234 or $FAKE_IRC_PORT)",
    )
    return parser


def _log_relay_exit(task: asyncio.Task) -> None:
    if task.cancelled():
        return
    error = task.exception()
    if error is not None:
        log_error("Broadcast relay stopped", error)


async def main(
    config: ServerConfig, lines: AsyncIterator[str] | None = None
) -> None:
    """Run the listener and the broadcast relay until cancelled.

    Args:
        config: Server configuration.
        lines: Broadcast input; defaults to stdin.

    Raises:
        StartupError: If the listening socket cannot be bound.
    """
    server = IRCServer(config)
    await server.start()
    relay = BroadcastRelay(server.registrations)
    relay_task = asyncio.create_task(
        relay.run(lines if lines is not None else stdin_lines()),
        name="broadcast-relay",
    )
    relay_task.add_done_callback(_log_relay_exit)
    # nothing consumes registrations once the relay is done
    relay_task.add_done_callback(lambda _task: server.close_registrations())
    try:
        await server.serve_forever()
    finally:
        relay_task.cancel()
        await asyncio.gather(relay_task, return_exceptions=True)
        await server.close()


def run(argv: list[str] | None = None) -> None:
    """Synchronous entry point for the application.

    Bad arguments exit with argparse's usage error (status 2); bind or
    configuration failures exit with status 1.
    """
    args = build_arg_parser().parse_args(argv)
    LoggerConfigurator().configure()
    logger.log_event("app", "start", version=__version__)
    try:
        config = load_config(port=args.port)
        asyncio.run(main(config))
    except (ConfigError, StartupError) as e:
        log_error("Fatal startup error", e, context=e.data, level=logging.CRITICAL)
        sys.exit(1)
    except KeyboardInterrupt:
        logger.log_event("app", "interrupted")
        sys.exit(0)
    finally:
        logger.log_event("app", "shutdown")


if __name__ == "__main__":
    run()
