"""Accept loop: one ConnectionHandler task per client."""

from __future__ import annotations

import asyncio
import logging

from ..config.model import ServerConfig
from ..errors.handling import log_error
from ..errors.internal import StartupError
from ..logs.logger import logger
from .connection import ConnectionHandler


def _format_address(address: object) -> str | None:
    if isinstance(address, tuple) and len(address) >= 2:
        return f"{address[0]}:{address[1]}"
    return str(address) if address else None


class IRCServer:
    """Listening socket plus the registration publish queue.

    Every handler that completes registration puts its writer on
    ``registrations``; the broadcast relay is the only consumer.
    Once the relay has stopped, ``close_registrations`` turns publishing
    into a no-op so writers of later clients are not retained.
    """

    def __init__(self, config: ServerConfig) -> None:
        self.config = config
        self.registrations: asyncio.Queue[asyncio.StreamWriter] = asyncio.Queue()
        self._server: asyncio.Server | None = None
        self._handlers: set[asyncio.Task] = set()
        self._publishing = True

    @property
    def bound_port(self) -> int:
        """Port actually bound (differs from config when config.port is 0)."""
        if self._server is None or not self._server.sockets:
            raise RuntimeError("server is not started")
        return self._server.sockets[0].getsockname()[1]

    async def start(self) -> None:
        try:
            self._server = await asyncio.start_server(
                self._accept,
                host=self.config.host,
                port=self.config.port,
                limit=self.config.stream_limit,
            )
        except OSError as e:
            raise StartupError(
                f"Can't listen on {self.config.host}:{self.config.port}: {e}",
                data={"host": self.config.host, "port": self.config.port},
            ) from e
        logger.log_event(
            "server", "listening", host=self.config.host, port=self.bound_port
        )

    async def serve_forever(self) -> None:
        """Accept connections until cancelled; call ``close`` to end open clients."""
        if self._server is None:
            await self.start()
        await asyncio.get_running_loop().create_future()

    async def close(self) -> None:
        if self._server is None:
            return
        self._server.close()
        for task in list(self._handlers):
            task.cancel()
        if self._handlers:
            await asyncio.gather(*self._handlers, return_exceptions=True)
        await self._server.wait_closed()
        self._server = None
        logger.log_event("server", "stopped")

    def close_registrations(self) -> None:
        """Stop publishing registered writers and drop any still queued."""
        self._publishing = False
        while not self.registrations.empty():
            self.registrations.get_nowait()

    def _publish(self, writer: asyncio.StreamWriter) -> None:
        if self._publishing:
            self.registrations.put_nowait(writer)

    async def _accept(
        self, reader: asyncio.StreamReader, writer: asyncio.StreamWriter
    ) -> None:
        peer = _format_address(writer.get_extra_info("peername"))
        sockname = writer.get_extra_info("sockname")
        port = sockname[1] if isinstance(sockname, tuple) else self.config.port
        logger.log_event("server", "connection_accepted", peer=peer)

        handler = ConnectionHandler(
            self.config, port, publish=self._publish, peer=peer
        )
        task = asyncio.current_task()
        if task is not None:
            self._handlers.add(task)
        try:
            await handler.run(reader, writer)
        except asyncio.CancelledError:
            raise
        except Exception as e:  # noqa: BLE001
            # isolate the failure to this connection; keep accepting
            log_error(
                "Connection handler failed",
                e,
                context={"peer": peer},
                level=logging.ERROR,
            )
        finally:
            if task is not None:
                self._handlers.discard(task)
