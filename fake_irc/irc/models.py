"""IRC message and connection state models."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


@dataclass(frozen=True)
class ParsedMessage:
    """One protocol line split into its parts.

    ``tag`` and ``prefix`` exclude their ``@``/``:`` markers. A trailing
    parameter introduced by ``:`` is stored verbatim without the colon.
    """

    command: str
    params: tuple[str, ...] = ()
    tag: str | None = None
    prefix: str | None = None

    def param(self, index: int) -> str | None:
        """Return the positional parameter at ``index`` or None if absent."""
        if 0 <= index < len(self.params):
            return self.params[index]
        return None


class RegistrationState(Enum):
    AWAITING_REGISTRATION = auto()
    REGISTERED = auto()


@dataclass
class ConnectionState:
    nickname: str | None = None
    username: str | None = None
    realname: str | None = None
    registered: bool = False

    @property
    def registration(self) -> RegistrationState:
        if self.registered:
            return RegistrationState.REGISTERED
        return RegistrationState.AWAITING_REGISTRATION

    def identity_complete(self) -> bool:
        return (
            self.nickname is not None
            and self.username is not None
            and self.realname is not None
        )
