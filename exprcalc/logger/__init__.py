"""Logger module for exprcalc

This module provides a flexible logging interface that allows users to
drop in their own logger implementations.

Usage:
    from exprcalc.logger import session_logger

    session_logger.info("Expression evaluated", expression="1+2", result=3.0)

    # Or implement your own
    class MyCustomLogger(Logger):
        def info(self, message: str, **kwargs):
            # Your custom implementation
            pass
"""

from exprcalc.config import load_log_settings
from .logger import Logger
from .structured_logger import StructuredLogger

# Configuration from environment
_log_settings = load_log_settings()

# Shared logger instance
session_logger: Logger = StructuredLogger(
    level=_log_settings.level,
    log_file=_log_settings.file,
    json_format=_log_settings.json_format,
)

__all__ = [
    "Logger",
    "StructuredLogger",
    "session_logger",
]
