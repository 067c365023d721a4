"""
Configuration constants for the fake IRC server

Network defaults can be overridden by setting an environment variable with
the same name. Protocol identity values are fixed so client tests can match
the registration replies byte for byte.
"""

import os


def _get_env_int(name: str, default: int) -> int:
    """Retrieve an integer value from an environment variable.

    If the variable is not set or cannot be parsed, a warning is printed and
    the default value is returned.
    """
    value = os.getenv(name)
    if value is not None:
        try:
            return int(value)
        except ValueError:
            print(
                f"Warning: Invalid integer value for {name}='{value}', using default {default}"
            )
    return default


def _get_env_str(name: str, default: str) -> str:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    return value.strip()


# Listening socket
FAKE_IRC_HOST = _get_env_str("FAKE_IRC_HOST", "127.0.0.1")  # loopback only
FAKE_IRC_PORT = _get_env_int("FAKE_IRC_PORT", 1234)
FAKE_IRC_READ_LIMIT = _get_env_int(
    "FAKE_IRC_READ_LIMIT", 0
)  # Max line length in bytes; 0 leaves lines unbounded

# Server identity shown in replies
SERVER_NAME = "localhost"
PROGRAM_VERSION = "fake-irc-server-v0.1.0"
SERVER_CREATED_AT = "Sep 22 2018 at 19:19:32"  # fake time
USER_MODES = "CDGPRSabcdfgijklnorsuwxyz"
CHANNEL_MODES = "bciklmnopstvzeIMRS"
CHANNEL_MODES_WITH_PARAMS = "bkloveI"
NICK_LEN = 30

# Wire format
LINE_TERMINATOR = "\r\n"
WIRE_ENCODING = "utf-8"
