"""Per-connection registration state machine and read loop."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable

from ..config.model import ServerConfig
from ..constants import LINE_TERMINATOR, WIRE_ENCODING
from ..errors.handling import log_error
from ..errors.internal import NoCommandError
from ..logs.logger import logger
from . import replies
from .models import ConnectionState, ParsedMessage
from .parser import command_matches, parse_irc_message, strip_line_terminator

PublishCallback = Callable[[asyncio.StreamWriter], None]


class ConnectionHandler:
    """Owns one client connection: its state, its reader and its writer.

    ``handle_line``/``handle_message`` are synchronous and return the reply
    lines to send, so the state machine can be driven without sockets.
    ``run`` wires them to a stream pair and hands the writer to ``publish``
    once registration completes.
    """

    def __init__(
        self,
        config: ServerConfig,
        port: int,
        publish: PublishCallback | None = None,
        peer: str | None = None,
    ) -> None:
        self.config = config
        self.port = port
        self.publish = publish
        self.peer = peer
        self.state = ConnectionState()
        self._discarding = False

    # --- state machine -------------------------------------------------

    def handle_line(self, raw: str) -> list[str]:
        """Frame, parse and dispatch one raw line (terminator included)."""
        line = strip_line_terminator(raw)
        if line is None:
            self._log("unterminated_line", raw=raw)
            return []
        try:
            message = parse_irc_message(line)
        except NoCommandError:
            self._log("parse_failed", line=line)
            return []
        return self.handle_message(message)

    def handle_message(self, message: ParsedMessage) -> list[str]:
        if command_matches(message.command, "PING"):
            # PING and its PONG are never traced
            return [replies.pong(self.config, message.param(0) or "")]

        self._log(
            "message",
            command=message.command,
            params=list(message.params),
            prefix=message.prefix,
            tag=message.tag,
        )
        if command_matches(message.command, "NICK"):
            self.state.nickname = message.param(0)
        elif command_matches(message.command, "USER"):
            self.state.username = message.param(0)
            self.state.realname = message.param(3)
        return self._complete_registration()

    def _complete_registration(self) -> list[str]:
        state = self.state
        if state.registered or not state.identity_complete():
            return []
        lines = replies.registration_replies(
            self.config, state.nickname, state.username, self.port
        )
        for line in lines:
            self._log("send", line=line)
        state.registered = True
        logger.log_event(
            "irc",
            "registered",
            nick=state.nickname,
            peer=self.peer,
            username=state.username,
            realname=state.realname,
        )
        return lines

    # --- transport -----------------------------------------------------

    async def run(
        self, reader: asyncio.StreamReader, writer: asyncio.StreamWriter
    ) -> None:
        """Process lines until end of input or an I/O error.

        I/O errors end this connection only; they are logged, not raised.
        """
        try:
            while True:
                data = await self._read_line(reader)
                if data is None:
                    break
                try:
                    raw = data.decode(WIRE_ENCODING)
                except UnicodeDecodeError:
                    self._log("undecodable_line", raw=data)
                    continue
                was_registered = self.state.registered
                for line in self.handle_line(raw):
                    await self.send(writer, line)
                if self.publish and self.state.registered and not was_registered:
                    self.publish(writer)
        except (ConnectionError, OSError) as e:
            log_error(
                "Connection I/O failure",
                e,
                context={"peer": self.peer, "nick": self.state.nickname},
                level=logging.WARNING,
            )
        finally:
            await self._close(writer)

    async def _read_line(self, reader: asyncio.StreamReader) -> bytes | None:
        """Return the next LF-terminated chunk, or None at end of input.

        Chunks longer than the reader limit are dropped up to and including
        their LF. Trailing bytes without a LF at EOF are dropped.
        """
        while True:
            try:
                data = await reader.readuntil(b"\n")
            except asyncio.IncompleteReadError as e:
                if e.partial and not self._discarding:
                    self._log("unterminated_line", raw=e.partial)
                return None
            except asyncio.LimitOverrunError as e:
                if not self._discarding:
                    self._log("line_too_long", limit=self.config.read_limit)
                self._discarding = True
                await reader.read(e.consumed)
                continue
            if self._discarding:
                self._discarding = False
                continue
            return data

    async def send(self, writer: asyncio.StreamWriter, line: str) -> None:
        writer.write(f"{line}{LINE_TERMINATOR}".encode(WIRE_ENCODING))
        await writer.drain()

    async def _close(self, writer: asyncio.StreamWriter) -> None:
        writer.close()
        try:
            await writer.wait_closed()
        except (ConnectionError, OSError):
            # peer already gone; nothing left to flush
            pass
        logger.log_event(
            "irc",
            "connection_closed",
            nick=self.state.nickname,
            peer=self.peer,
            registered=self.state.registered,
        )

    def _log(self, action: str, **kwargs: object) -> None:
        logger.log_event(
            "irc",
            action,
            level=logging.DEBUG,
            nick=self.state.nickname,
            peer=self.peer,
            **kwargs,
        )
