"""Configuration package exports."""

from .core import load_config
from .model import ServerConfig

__all__ = ["ServerConfig", "load_config"]
