"""
Logging configuration and utilities for the Indy Tool package.

This module provides logging setup and a wrapping formatter so that the long
artifact URLs printed during replay and migration stay readable.
"""

import logging
from typing import Optional

# ============================================================================
# Logging Configuration Constants
# ============================================================================

DEFAULT_LOG_WIDTH = 120

DEFAULT_LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"

# Worker thread names help when jobs run in a pool
CONCURRENT_LOG_FORMAT = "%(asctime)s - %(levelname)s - [%(threadName)s] %(message)s"

# ============================================================================
# Custom Formatters
# ============================================================================


class WrappingFormatter(logging.Formatter):
    """
    Formatter that wraps long log lines on word boundaries.

    URLs are never split, so a line holding a single long URL stays intact.
    """

    def __init__(
        self, fmt: Optional[str] = None, datefmt: Optional[str] = None, width: int = DEFAULT_LOG_WIDTH
    ) -> None:
        super().__init__(fmt, datefmt)
        self.width = width

    def format(self, record: logging.LogRecord) -> str:
        formatted = super().format(record)
        if len(formatted) <= self.width:
            return formatted

        lines = []
        current_line = ""
        for word in formatted.split():
            if len(current_line + " " + word) <= self.width:
                current_line += (" " + word) if current_line else word
            else:
                if current_line:
                    lines.append(current_line)
                current_line = word
        if current_line:
            lines.append(current_line)

        return "\n".join(lines)


# ============================================================================
# Logging Setup Functions
# ============================================================================


def setup_logging(verbosity: int = 0, use_wrapping: bool = False, concurrent: bool = False) -> None:
    """
    Setup logging configuration with multi-level verbosity.

    Args:
        verbosity: Verbosity level (0=WARNING, 1=INFO, 2=DEBUG, 3+=DEBUG with HTTP logs)
        use_wrapping: If True, use the wrapping formatter for long messages
        concurrent: If True, include the worker thread name in every line

    Verbosity Levels:
        0 (default): WARNING - banners, phase results and errors
        1 (-d):      INFO - every transferred and deleted artifact
        2 (-dd):     DEBUG - staging paths, cache decisions, request details
        3+ (-ddd):   DEBUG - everything above plus httpx request logs

    Example:
        >>> from indy_tool.utils import setup_logging
        >>> setup_logging(1)  # INFO level
    """
    if verbosity <= 0:
        level = logging.WARNING
    elif verbosity == 1:
        level = logging.INFO
    else:
        level = logging.DEBUG

    fmt = CONCURRENT_LOG_FORMAT if concurrent else DEFAULT_LOG_FORMAT

    if use_wrapping:
        handler = logging.StreamHandler()
        handler.setFormatter(WrappingFormatter(fmt=fmt, width=DEFAULT_LOG_WIDTH))

        root_logger = logging.getLogger()
        root_logger.handlers.clear()
        root_logger.addHandler(handler)
        root_logger.setLevel(level)
    else:
        logging.basicConfig(level=level, format=fmt)

    # httpx logs every request at INFO level, which would drown per-artifact output
    http_level = logging.DEBUG if verbosity >= 3 else logging.WARNING
    logging.getLogger("httpx").setLevel(http_level)
    logging.getLogger("httpcore").setLevel(http_level)


__all__ = [
    "WrappingFormatter",
    "setup_logging",
]
