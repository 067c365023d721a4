"""IRC protocol pieces: parser, connection state machine, listener, relay."""

from .connection import ConnectionHandler
from .listener import IRCServer
from .models import ConnectionState, ParsedMessage, RegistrationState
from .parser import (
    IRCParser,
    command_matches,
    parse_irc_message,
    strip_line_terminator,
)
from .relay import BroadcastRelay, stdin_lines

__all__ = [
    "BroadcastRelay",
    "ConnectionHandler",
    "ConnectionState",
    "IRCParser",
    "IRCServer",
    "ParsedMessage",
    "RegistrationState",
    "command_matches",
    "parse_irc_message",
    "stdin_lines",
    "strip_line_terminator",
]
