"""Reply line builders (without CRLF)."""

from __future__ import annotations

from ..config.model import ServerConfig

RPL_WELCOME = "001"
RPL_YOURHOST = "002"
RPL_CREATED = "003"
RPL_MYINFO = "004"
RPL_ISUPPORT = "005"


def pong(config: ServerConfig, token: str) -> str:
    return f":{config.server_name} PONG {token}"


def registration_replies(
    config: ServerConfig, nick: str, user: str, port: int
) -> list[str]:
    """Build the RPL_WELCOME..RPL_ISUPPORT block sent once per connection.

    Args:
        config: Server identity values.
        nick: Registered nickname.
        user: Registered username.
        port: Port the client connected to.
    """
    src = f":{config.server_name}"
    return [
        f"{src} {RPL_WELCOME} {nick} :Welcome to the Local Network, "
        f"{nick}!{user}@{config.server_name}",
        f"{src} {RPL_YOURHOST} {nick} :Your host is "
        f"{config.server_name}[{config.host}/{port}], "
        f"running version {config.program_version}",
        f"{src} {RPL_CREATED} {nick} :This server was created {config.created_at}",
        f"{src} {RPL_MYINFO} {nick} {config.server_name} {config.program_version} "
        f"{config.user_modes} {config.channel_modes} {config.channel_modes_with_params}",
        f"{src} {RPL_ISUPPORT} {nick} NICKLEN={config.nick_len} "
        ":are supported by this server",
    ]
