"""
Unit tests for the IRC line parser.
"""

import pytest

from fake_irc.errors.internal import NoCommandError, ParsingError
from fake_irc.irc.models import ParsedMessage
from fake_irc.irc.parser import (
    IRCParser,
    command_matches,
    parse_irc_message,
    strip_line_terminator,
)


class TestParseIrcMessage:
    """parse_irc_message field extraction."""

    def test_full_message(self):
        msg = parse_irc_message("@tag :prefix COMMAND p1 p2 :trailing text")
        assert msg == ParsedMessage(
            command="COMMAND",
            params=("p1", "p2", "trailing text"),
            tag="tag",
            prefix="prefix",
        )

    def test_command_only(self):
        msg = parse_irc_message("QUIT")
        assert msg.command == "QUIT"
        assert msg.params == ()
        assert msg.tag is None
        assert msg.prefix is None

    def test_prefix_without_tag(self):
        msg = parse_irc_message(":nick!user@host PRIVMSG #chan :hi there")
        assert msg.tag is None
        assert msg.prefix == "nick!user@host"
        assert msg.command == "PRIVMSG"
        assert msg.params == ("#chan", "hi there")

    def test_tag_is_captured_opaquely(self):
        msg = parse_irc_message("@badge=1;color=red PING x")
        assert msg.tag == "badge=1;color=red"
        assert msg.prefix is None

    def test_command_case_preserved(self):
        assert parse_irc_message("nIcK foo").command == "nIcK"

    def test_leading_and_repeated_whitespace(self):
        msg = parse_irc_message("   NICK\t  foo   bar  ")
        assert msg.command == "NICK"
        assert msg.params == ("foo", "bar")

    def test_trailing_keeps_embedded_and_trailing_spaces(self):
        msg = parse_irc_message("USER alice 0 * :Alice   A  ")
        assert msg.params == ("alice", "0", "*", "Alice   A  ")

    def test_trailing_keeps_colons(self):
        msg = parse_irc_message("PRIVMSG #c ::) see: this")
        assert msg.params == ("#c", ":) see: this")

    def test_empty_trailing(self):
        msg = parse_irc_message("TOPIC #c :")
        assert msg.params == ("#c", "")

    def test_colon_inside_middle_param_is_literal(self):
        msg = parse_irc_message("MODE a:b c")
        assert msg.params == ("a:b", "c")

    def test_unbounded_param_count(self):
        words = [f"p{i}" for i in range(40)]
        msg = parse_irc_message("CMD " + " ".join(words))
        assert list(msg.params) == words

    def test_bare_markers_yield_empty_strings(self):
        msg = parse_irc_message("@ : PING")
        assert msg.tag == ""
        assert msg.prefix == ""
        assert msg.command == "PING"

    def test_non_ascii_whitespace_is_part_of_word(self):
        msg = parse_irc_message("NICK a\u00a0b")
        assert msg.params == ("a\u00a0b",)

    def test_unicode_params(self):
        msg = parse_irc_message("PRIVMSG #ü :héllo wörld")
        assert msg.params == ("#ü", "héllo wörld")

    @pytest.mark.parametrize("line", ["", "   ", "@tag", ":prefix", "@tag :prefix   "])
    def test_no_command(self, line):
        with pytest.raises(NoCommandError) as exc:
            parse_irc_message(line)
        assert isinstance(exc.value, ParsingError)
        assert exc.value.data["line"] == line

    def test_param_accessor(self):
        msg = parse_irc_message("USER a b c :d")
        assert msg.param(0) == "a"
        assert msg.param(3) == "d"
        assert msg.param(4) is None
        assert msg.param(-1) is None

    def test_message_is_immutable(self):
        msg = parse_irc_message("NICK foo")
        with pytest.raises(AttributeError):
            msg.command = "USER"  # type: ignore[misc]


class TestIRCParserCursor:
    def test_word_if_starts_with_absent_marker_keeps_position(self):
        parser = IRCParser("NICK foo")
        assert parser.parse_word_if_starts_with("@") is None
        assert parser.parse_word() == "NICK"

    def test_parse_params_consumes_everything(self):
        parser = IRCParser("a b :c d")
        assert parser.parse_params() == ["a", "b", "c d"]
        assert parser.peek() is None


class TestStripLineTerminator:
    def test_crlf_stripped(self):
        assert strip_line_terminator("PING x\r\n") == "PING x"

    def test_only_final_crlf_stripped(self):
        assert strip_line_terminator("a\r\n\r\n") == "a\r\n"

    @pytest.mark.parametrize("raw", ["PING x\n", "PING x\r", "PING x", "PING x\n\r", ""])
    def test_incomplete_lines_rejected(self, raw):
        assert strip_line_terminator(raw) is None

    def test_empty_line_with_crlf(self):
        assert strip_line_terminator("\r\n") == ""


class TestCommandMatches:
    @pytest.mark.parametrize("command", ["nick", "NICK", "Nick", "nIcK"])
    def test_case_insensitive(self, command):
        assert command_matches(command, "NICK")

    def test_different_command(self):
        assert not command_matches("NICKS", "NICK")

    def test_ascii_only_folding(self):
        # U+0131 DOTLESS I upper-cases to 'I' under Unicode rules
        assert not command_matches("n\u0131ck", "NICK")
