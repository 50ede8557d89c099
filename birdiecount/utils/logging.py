"""Logging utilities for the birdie counter."""

import logging
import os

DEFAULT_LOG_FILE = "/tmp/birdiecount_debug.log"

# Global state
_console_logging_enabled = None
_file_logger = None


def _is_tui_running() -> bool:
    """Detect if we're running in TUI mode vs CLI mode"""
    if _console_logging_enabled is not None:
        return not _console_logging_enabled

    # Default to console output unless explicitly disabled
    return False


def set_console_logging(enabled: bool | None):
    """Explicitly enable/disable console logging"""
    global _console_logging_enabled
    _console_logging_enabled = enabled


def _get_file_logger() -> logging.Logger:
    global _file_logger

    if _file_logger is None:
        _file_logger = logging.getLogger("birdiecount_file")
        _file_logger.setLevel(logging.DEBUG)
        log_file = os.getenv("BIRDIECOUNT_LOG_FILE") or DEFAULT_LOG_FILE
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s - %(levelname)s - %(message)s")
        )
        _file_logger.addHandler(file_handler)
        _file_logger.propagate = False
    return _file_logger


def log(message: str, level: int = logging.INFO):
    """
    Smart logging that adapts to context:
    - Always logs to file for debugging
    - Also logs to console for CLI operations (--once, argument checks)
    - Skips console output while the score display is running

    ``level`` is a stdlib logging level; failures pass logging.ERROR.
    """
    _get_file_logger().log(level, message)

    if not _is_tui_running():
        print(message)
