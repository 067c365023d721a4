"""Procedural configuration API."""

from __future__ import annotations

from typing import Any

from pydantic import ValidationError

from ..errors.internal import ConfigError
from ..logs.logger import logger
from .model import ServerConfig


def load_config(port: int | None = None, **overrides: Any) -> ServerConfig:
    """Build the server configuration.

    Environment-derived defaults come from ``constants``; an explicit
    ``port`` (the CLI argument) and keyword overrides take precedence.

    Raises:
        ConfigError: If the resulting configuration does not validate.
    """
    values: dict[str, Any] = dict(overrides)
    if port is not None:
        values["port"] = port
    try:
        config = ServerConfig(**values)
    except ValidationError as e:
        raise ConfigError(
            f"Invalid server configuration: {e.error_count()} error(s)",
            data={"errors": e.errors(include_url=False)},
        ) from e
    logger.log_event("app", "config_loaded", host=config.host, port=config.port)
    return config
