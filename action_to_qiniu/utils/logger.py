"""
Logging configuration and utilities for the action-to-qiniu package.

This module provides logging setup, custom formatters, and logging utilities
to ensure consistent and readable logging across the package.
"""

import logging
from typing import Optional

from .constants import DEFAULT_LOG_WIDTH

# ============================================================================
# Custom Formatters
# ============================================================================


class WrappingFormatter(logging.Formatter):
    """
    Custom formatter that wraps long log messages for better readability.

    Messages that already span several lines (run reports, command output)
    are wrapped line by line so their layout is kept.
    """

    def __init__(
        self, fmt: Optional[str] = None, datefmt: Optional[str] = None, width: int = DEFAULT_LOG_WIDTH
    ) -> None:
        """
        Initialize the wrapping formatter.

        Args:
            fmt: Format string for log messages
            datefmt: Date format string
            width: Maximum width for log message wrapping
        """
        super().__init__(fmt, datefmt)
        self.width = width

    def _wrap_line(self, line: str) -> str:
        if len(line) <= self.width:
            return line

        lines = []
        current_line = ""
        for word in line.split():
            if len(current_line + " " + word) <= self.width:
                current_line += (" " + word) if current_line else word
            else:
                if current_line:
                    lines.append(current_line)
                current_line = word

        if current_line:
            lines.append(current_line)

        return "\n".join(lines)

    def format(self, record: logging.LogRecord) -> str:
        """
        Format the log record with line wrapping.

        Args:
            record: Log record to format

        Returns:
            Formatted log message with wrapping
        """
        formatted = super().format(record)
        return "\n".join(self._wrap_line(line) for line in formatted.splitlines())


# ============================================================================
# Logging Setup Functions
# ============================================================================


def setup_logging(verbosity: int = 0, use_wrapping: bool = False) -> None:
    """
    Setup logging configuration with multi-level verbosity.

    Args:
        verbosity: Verbosity level (0=WARNING, 1=INFO, 2=DEBUG, 3+=DEBUG with HTTP logs)
        use_wrapping: If True, use wrapping formatter for long messages

    Verbosity Levels:
        0 (default): WARNING - Run summary, warnings and errors
        1 (-d):      INFO - Stage progress messages
        2 (-dd):     DEBUG - Per-request and per-file details
        3+ (-ddd):   DEBUG - Maximum verbosity including HTTP request logs

    Example:
        >>> from action_to_qiniu.utils import setup_logging
        >>> setup_logging(0)  # WARNING level (default)
        >>> setup_logging(2)  # DEBUG level
    """
    if verbosity == 0:
        level = logging.WARNING
    elif verbosity == 1:
        level = logging.INFO
    else:  # 2 or higher
        level = logging.DEBUG

    if use_wrapping:
        formatter = WrappingFormatter(fmt="%(asctime)s - %(levelname)s - %(message)s", width=DEFAULT_LOG_WIDTH)
        handler = logging.StreamHandler()
        handler.setFormatter(formatter)

        # Clear any existing handlers
        root_logger = logging.getLogger()
        root_logger.handlers.clear()
        root_logger.addHandler(handler)
        root_logger.setLevel(level)
    else:
        logging.basicConfig(level=level, format="%(asctime)s - %(levelname)s - %(message)s")

    # httpx logs every HTTP request at INFO level which clutters the output
    if verbosity < 3:
        logging.getLogger("httpx").setLevel(logging.WARNING)
        logging.getLogger("httpcore").setLevel(logging.WARNING)
    else:
        logging.getLogger("httpx").setLevel(logging.DEBUG)
        logging.getLogger("httpcore").setLevel(logging.DEBUG)


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance with the given name.

    Args:
        name: Name for the logger (typically __name__)

    Returns:
        Logger instance
    """
    return logging.getLogger(name)


def progress_level(verbose: bool) -> int:
    """
    Log level for per-item progress messages.

    Verbose runs surface progress at WARNING so it shows without ``-d``;
    quiet runs keep it at INFO.

    Args:
        verbose: Whether the run is verbose

    Returns:
        Logging level
    """
    return logging.WARNING if verbose else logging.INFO


__all__ = [
    "WrappingFormatter",
    "setup_logging",
    "get_logger",
    "progress_level",
]
