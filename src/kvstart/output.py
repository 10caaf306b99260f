"""Colored stderr messages and logging.

The rendered script is the only thing kvstart writes to stdout, so every
diagnostic goes to stderr.
"""

from __future__ import annotations

import logging
import os
import sys

# ANSI color codes
RED = "\033[31m"
GREEN = "\033[32m"
YELLOW = "\033[33m"
DIM = "\033[2m"
NC = "\033[0m"  # No color / reset

_logger = logging.getLogger("kvstart")


class ColoredFormatter(logging.Formatter):
    """Formatter that colors records by level."""

    def format(self, record: logging.LogRecord) -> str:
        msg = super().format(record)
        if record.levelno >= logging.ERROR:
            return _colorize(RED, msg)
        elif record.levelno >= logging.WARNING:
            return _colorize(YELLOW, msg)
        elif record.levelno <= logging.DEBUG:
            return _colorize(DIM, msg)
        return msg


def setup_logging(debug: bool = False) -> None:
    """Configure the kvstart logger.

    Args:
        debug: If True, log at DEBUG (resolved topology, chosen script
            variants). Otherwise only warnings and errors.
    """
    level = logging.DEBUG if debug else logging.WARNING
    _logger.setLevel(level)

    if not _logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(ColoredFormatter("[kvstart] %(message)s"))
        _logger.addHandler(handler)
    for h in _logger.handlers:
        h.setLevel(level)


def get_logger() -> logging.Logger:
    return _logger


def debug(msg: str) -> None:
    """Log debug message (only shown with --debug flag)."""
    _logger.debug(msg)


def _supports_color(stream: object = None) -> bool:
    """Check if stream supports color. NO_COLOR disables it."""
    if os.environ.get("NO_COLOR"):
        return False
    if stream is None:
        stream = sys.stderr
    isatty = getattr(stream, "isatty", None)
    if isatty is None or not callable(isatty):
        return False
    return bool(isatty())


def _colorize(color: str, text: str, stream: object = None) -> str:
    if _supports_color(stream):
        return f"{color}{text}{NC}"
    return text


def error(msg: str) -> None:
    """Print error message. The caller decides the exit code."""
    print(_colorize(RED, f"error: {msg}"), file=sys.stderr)


def warn(msg: str) -> None:
    print(_colorize(YELLOW, f"warning: {msg}"), file=sys.stderr)


def success(msg: str) -> None:
    print(_colorize(GREEN, msg), file=sys.stderr)
