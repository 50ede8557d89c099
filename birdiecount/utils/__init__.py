"""Shared helpers."""

from .logging import log, set_console_logging

__all__ = ["log", "set_console_logging"]
