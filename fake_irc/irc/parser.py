"""IRC message parsing utilities.

A small cursor based parser: one left-to-right pass over the line with no
backtracking. Lines are expected without their CRLF terminator; use
``strip_line_terminator`` on raw input first.
"""

from __future__ import annotations

from ..constants import LINE_TERMINATOR
from ..errors.internal import NoCommandError
from .models import ParsedMessage

# ASCII whitespace only; other Unicode spaces are part of a word.
_WHITESPACE = frozenset(" \t\n\r\x0c")
_ASCII_UPPER = str.maketrans(
    "abcdefghijklmnopqrstuvwxyz", "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
)


class IRCParser:
    """Cursor over a single line; create one per parse call."""

    def __init__(self, line: str) -> None:
        self.line = line
        self.pos = 0

    def peek(self) -> str | None:
        if self.pos < len(self.line):
            return self.line[self.pos]
        return None

    def skip_whitespace(self) -> None:
        while self.pos < len(self.line) and self.line[self.pos] in _WHITESPACE:
            self.pos += 1

    def skip_word(self) -> None:
        while self.pos < len(self.line) and self.line[self.pos] not in _WHITESPACE:
            self.pos += 1

    def read_word(self) -> str:
        start = self.pos
        self.skip_word()
        return self.line[start : self.pos]

    def parse_word_if_starts_with(self, marker: str) -> str | None:
        """Read the word following ``marker``; the marker is not included.

        Returns an empty string when the marker is followed by whitespace or
        the end of the line, and None when the marker is not present.
        """
        self.skip_whitespace()
        if self.peek() != marker:
            return None
        self.pos += 1
        return self.read_word()

    def parse_word(self) -> str | None:
        self.skip_whitespace()
        word = self.read_word()
        return word or None

    def parse_params(self) -> list[str]:
        params: list[str] = []
        self.skip_whitespace()
        while self.pos < len(self.line):
            if self.line[self.pos] == ":":
                # trailing parameter: rest of the line, spaces included
                params.append(self.line[self.pos + 1 :])
                self.pos = len(self.line)
                break
            params.append(self.read_word())
            self.skip_whitespace()
        return params

    def parse(self) -> ParsedMessage:
        tag = self.parse_word_if_starts_with("@")
        prefix = self.parse_word_if_starts_with(":")
        command = self.parse_word()
        if command is None:
            raise NoCommandError(self.line)
        params = self.parse_params()
        return ParsedMessage(
            command=command, params=tuple(params), tag=tag, prefix=prefix
        )


def parse_irc_message(line: str) -> ParsedMessage:
    """Parse one IRC line (without CRLF) into a ``ParsedMessage``.

    Raises:
        NoCommandError: If nothing but whitespace, a tag or a prefix is present.
    """
    return IRCParser(line).parse()


def strip_line_terminator(raw: str) -> str | None:
    """Return ``raw`` without its trailing CRLF.

    Returns None when the data does not end with an exact CRLF pair, meaning
    the line is incomplete (bare LF, EOF mid-line) and must not be parsed.
    """
    if not raw.endswith(LINE_TERMINATOR):
        return None
    return raw[: -len(LINE_TERMINATOR)]


def command_matches(command: str, name: str) -> bool:
    """Case-insensitive (ASCII only) comparison of a command with ``name``."""
    return command.translate(_ASCII_UPPER) == name.translate(_ASCII_UPPER)
