"""Logging utilities -- ANSI terminal colors, timestamped log-file lines.

Provides color-coded output for the CLI and the plain-text format used for
``--log`` files, including a ``logging`` handler so library warnings land in
the same file.
"""

import logging
import sys
from datetime import datetime
from typing import Optional, TextIO

# ---------------------------------------------------------------------------
# ANSI color codes
# ---------------------------------------------------------------------------

_RESET = '\033[0m'
_DIM = '\033[2m'

_GREEN = '\033[32m'
_YELLOW = '\033[33m'
_CYAN = '\033[36m'

_BOLD_RED = '\033[1;31m'
_BOLD_CYAN = '\033[1;36m'
_BOLD_WHITE = '\033[1;37m'


def _is_tty():
    """Check if stdout is a terminal (not piped)."""
    try:
        return sys.stdout.isatty()
    except AttributeError:
        return False


# Module-level flag -- set once at import time
_USE_COLOR = _is_tty()


def set_color_enabled(enabled: bool):
    """Override automatic color detection."""
    global _USE_COLOR
    _USE_COLOR = enabled


def _c(code: str, text: str) -> str:
    """Apply ANSI code if color is enabled."""
    if _USE_COLOR:
        return f'{code}{text}{_RESET}'
    return text


# ---------------------------------------------------------------------------
# CLI formatting helpers
# ---------------------------------------------------------------------------

def cli_header(text: str) -> str:
    """Bold cyan header line."""
    return _c(_BOLD_CYAN, text)


def cli_success(text: str) -> str:
    """Green text for a decoded bounding box."""
    return _c(_GREEN, text)


def cli_warning(text: str) -> str:
    """Yellow text for files without usable georeferencing."""
    return _c(_YELLOW, text)


def cli_error(text: str) -> str:
    """Red text for errors."""
    return _c(_BOLD_RED, text)


def cli_info(text: str) -> str:
    return _c(_CYAN, text)


def cli_dim(text: str) -> str:
    return _c(_DIM, text)


def cli_bold(text: str) -> str:
    return _c(_BOLD_WHITE, text)


def cli_separator() -> str:
    """A visual separator line."""
    return _c(_DIM, '-' * 60)


# ---------------------------------------------------------------------------
# Log file formatting (always plain text with timestamps and levels)
# ---------------------------------------------------------------------------

def _timestamp() -> str:
    return datetime.now().strftime('%Y-%m-%d %H:%M:%S')


def log_info(msg: str) -> str:
    """Format a log file INFO line."""
    return f'[{_timestamp()}] [INFO]  {msg}'


def log_warn(msg: str) -> str:
    """Format a log file WARN line."""
    return f'[{_timestamp()}] [WARN]  {msg}'


def log_error(msg: str) -> str:
    """Format a log file ERROR line."""
    return f'[{_timestamp()}] [ERROR] {msg}'


class LogFileFormatter(logging.Formatter):
    """Render ``logging`` records in the log-file line format."""

    _LINES = {
        logging.WARNING: log_warn,
        logging.ERROR: log_error,
        logging.CRITICAL: log_error,
    }

    def format(self, record: logging.LogRecord) -> str:
        line = self._LINES.get(record.levelno, log_info)
        return line(f'{record.name}: {record.getMessage()}')


def attach_log_file(stream: TextIO, level: int = logging.WARNING,
                    logger_name: str = 'tiffgeo') -> logging.Handler:
    """Send package log records to an open log file. Returns the handler."""
    handler = logging.StreamHandler(stream)
    handler.setFormatter(LogFileFormatter())
    handler.setLevel(level)
    logging.getLogger(logger_name).addHandler(handler)
    return handler


def detach_log_file(handler: Optional[logging.Handler],
                    logger_name: str = 'tiffgeo') -> None:
    if handler is not None:
        logging.getLogger(logger_name).removeHandler(handler)
        handler.flush()
