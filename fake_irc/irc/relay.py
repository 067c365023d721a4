"""Broadcast relay: fan external input lines out to registered clients."""

from __future__ import annotations

import asyncio
import logging
import sys
import threading
from collections.abc import AsyncIterator
from typing import BinaryIO

from ..constants import LINE_TERMINATOR, WIRE_ENCODING
from ..errors.handling import log_error
from ..logs.logger import logger


def _describe(writer: asyncio.StreamWriter) -> str | None:
    peer = writer.get_extra_info("peername")
    if isinstance(peer, tuple) and len(peer) >= 2:
        return f"{peer[0]}:{peer[1]}"
    return None


class BroadcastRelay:
    """Single consumer of the registration queue.

    Before each broadcast the queue is drained without blocking, so a client
    that registered since the previous line receives the next one.
    """

    def __init__(self, registrations: asyncio.Queue[asyncio.StreamWriter]) -> None:
        self.registrations = registrations
        self.targets: list[asyncio.StreamWriter] = []

    def drain_registrations(self) -> int:
        added = 0
        while True:
            try:
                writer = self.registrations.get_nowait()
            except asyncio.QueueEmpty:
                break
            self.targets.append(writer)
            added += 1
        if added:
            logger.log_event(
                "relay", "targets_added", level=logging.DEBUG, count=added
            )
        return added

    async def broadcast(self, line: str) -> int:
        """Send ``line`` to every known target; return the delivery count.

        A failed target is logged and skipped. Targets whose transport is
        closing are dropped from the set.
        """
        self.drain_registrations()
        payload = f"{line}{LINE_TERMINATOR}".encode(WIRE_ENCODING)
        logger.log_event(
            "relay",
            "broadcast",
            level=logging.DEBUG,
            targets=len(self.targets),
            line=line,
        )
        delivered = 0
        for writer in list(self.targets):
            if writer.is_closing():
                self.targets.remove(writer)
                logger.log_event(
                    "relay", "target_pruned", level=logging.DEBUG, peer=_describe(writer)
                )
                continue
            try:
                writer.write(payload)
                await writer.drain()
            except (ConnectionError, OSError) as e:
                log_error(
                    "Failed to deliver broadcast",
                    e,
                    context={"peer": _describe(writer)},
                    level=logging.WARNING,
                )
                continue
            delivered += 1
        return delivered

    async def run(self, lines: AsyncIterator[str]) -> None:
        """Relay every line from ``lines`` until the source is exhausted."""
        logger.log_event("relay", "start", level=logging.DEBUG)
        async for line in lines:
            await self.broadcast(line)
        self.targets.clear()
        logger.log_event("relay", "input_ended")


def _strip_newline(line: str) -> str:
    if line.endswith("\r\n"):
        return line[:-2]
    if line.endswith("\n"):
        return line[:-1]
    return line


async def stdin_lines(stream: BinaryIO | None = None) -> AsyncIterator[str]:
    """Yield lines from a blocking byte stream (stdin by default).

    Reading happens on a daemon thread so a blocked read never keeps the
    process alive at shutdown. Lines are yielded without their newline.
    Each line is decoded on its own; a line that is not valid UTF-8 is
    skipped and the following lines are still relayed.
    """
    source = stream if stream is not None else sys.stdin.buffer
    loop = asyncio.get_running_loop()
    queue: asyncio.Queue[str | None] = asyncio.Queue()

    def _put(item: str | None) -> None:
        try:
            loop.call_soon_threadsafe(queue.put_nowait, item)
        except RuntimeError:
            # loop already closed during shutdown
            pass

    def _reader() -> None:
        try:
            for raw in source:
                try:
                    line = raw.decode(WIRE_ENCODING)
                except UnicodeDecodeError as e:
                    logger.log_event(
                        "relay", "input_skipped", level=logging.WARNING, error=str(e)
                    )
                    continue
                _put(_strip_newline(line))
        except (OSError, ValueError) as e:
            # ValueError: stream closed underneath us
            logger.log_event(
                "relay", "input_error", level=logging.WARNING, error=str(e)
            )
        _put(None)

    threading.Thread(target=_reader, name="relay-input", daemon=True).start()
    while True:
        line = await queue.get()
        if line is None:
            return
        yield line
