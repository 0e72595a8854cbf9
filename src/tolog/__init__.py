"""Tolog — a daily markdown journal kept in sync with its directory."""

__version__ = "0.1.0"
