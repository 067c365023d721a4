"""Fake IRC server used as a test double for IRC client development."""

__version__ = "0.1.0"
