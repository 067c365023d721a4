from __future__ import annotations

import sys

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .. import constants


class ServerConfig(BaseModel):
    """Static server identity and listening options.

    Built once at startup and shared read-only by every connection handler.

    Attributes:
        host: Bind address; also reported as the server address in RPL_YOURHOST.
        port: Listening port. ``0`` lets the OS pick one (used by tests).
        server_name: Name used as the source prefix of every reply.
        program_version: Version string reported in RPL_YOURHOST/RPL_MYINFO.
        created_at: Fixed creation timestamp reported in RPL_CREATED.
        user_modes: User modes advertised in RPL_MYINFO.
        channel_modes: Channel modes advertised in RPL_MYINFO.
        channel_modes_with_params: Channel modes taking a parameter.
        nick_len: NICKLEN token advertised in RPL_ISUPPORT.
        read_limit: Max line length in bytes; longer lines are dropped.
            ``0`` (the default) leaves lines unbounded.
    """

    model_config = ConfigDict(frozen=True)

    host: str = constants.FAKE_IRC_HOST
    port: int = Field(default=constants.FAKE_IRC_PORT, ge=0, le=65535)
    server_name: str = constants.SERVER_NAME
    program_version: str = constants.PROGRAM_VERSION
    created_at: str = constants.SERVER_CREATED_AT
    user_modes: str = constants.USER_MODES
    channel_modes: str = constants.CHANNEL_MODES
    channel_modes_with_params: str = constants.CHANNEL_MODES_WITH_PARAMS
    nick_len: int = Field(default=constants.NICK_LEN, gt=0)
    read_limit: int = Field(default=constants.FAKE_IRC_READ_LIMIT, ge=0)

    @property
    def stream_limit(self) -> int:
        """Buffer limit handed to the connection StreamReader."""
        return self.read_limit or sys.maxsize

    @field_validator("host", "server_name", "program_version")
    @classmethod
    def validate_token(cls, v: str) -> str:
        """Reject values that would break reply framing.

        These values are spliced into single-word positions of reply lines,
        so they must be non-empty and free of whitespace.
        """
        stripped = v.strip()
        if not stripped or any(ch.isspace() for ch in stripped):
            raise ValueError("must be a single non-empty word")
        return stripped
