"""
Core logging functionality for the KDE Connect client.

One ``kdeconnect`` logger with a file handler per log type.  The legacy-style
helpers (``print_and_log`` and friends) route raw messages to the matching
file; new code should prefer :func:`get_logger`.
"""

import logging
from pathlib import Path
from typing import Dict, Optional
from . import config

# Re-export log type constants for external modules
LOG__GENERAL = config.LOG__GENERAL
LOG__DEBUG = config.LOG__DEBUG
LOG__USER = config.LOG__USER

_LOG_PATHS: Dict[str, Path] = {
    LOG__GENERAL: config.LOG_DIR / "general.log",
    LOG__DEBUG: config.LOG_DIR / "debug.log",
    LOG__USER: config.LOG_DIR / "usermode.log",
}

# Level each log type is written at
_LOG_LEVELS: Dict[str, int] = {
    LOG__GENERAL: logging.INFO,
    LOG__DEBUG: logging.DEBUG,
    LOG__USER: logging.INFO,
}

# Formatter: raw message only
_formatter = logging.Formatter("%(message)s")

# Create and configure handlers.  A read-only home (CI, sandboxes) simply
# leaves that log type without a file.
_handlers: Dict[str, logging.Handler] = {}
for log_type, path in _LOG_PATHS.items():
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(path, mode="a", encoding="utf-8", delay=True)
    except OSError:
        continue
    handler.setFormatter(_formatter)
    _handlers[log_type] = handler

# Root logger for the package
_logger = logging.getLogger("kdeconnect")
_logger.setLevel(logging.INFO)
for handler in _handlers.values():
    _logger.addHandler(handler)


def _emit(line: str, log_type: str) -> None:
    """Internal helper to emit log records without altering the original message.

    Records below the package logger level (see :func:`set_level`) are dropped.
    """
    level = _LOG_LEVELS.get(log_type, logging.INFO)
    if not _logger.isEnabledFor(level):
        return
    handler = _handlers.get(log_type) or _handlers.get(LOG__GENERAL)
    if handler is None:
        return
    record = logging.LogRecord(
        name=f"kdeconnect.{log_type.lower()}",
        level=level,
        pathname=__file__,
        lineno=0,
        msg=line.rstrip("\n"),
        args=(),
        exc_info=None,
    )
    handler.handle(record)


def logging__debug_log(msg: str) -> None:
    """Write to debug log."""
    _emit(msg, LOG__DEBUG)


def logging__general_log(msg: str) -> None:
    """Write to general log."""
    _emit(msg, LOG__GENERAL)


def logging__usermode_log(msg: str) -> None:
    """Write to usermode log."""
    _emit(msg, LOG__USER)


_log_func_map = {
    LOG__GENERAL: logging__general_log,
    LOG__DEBUG: logging__debug_log,
    LOG__USER: logging__usermode_log,
}


def logging__log_event(log_type: str, string_to_log: str) -> None:
    """Log an event to the specified log type."""
    _log_func_map.get(log_type, logging__general_log)(string_to_log)


def print_and_log(output_string: str, log_type: str = LOG__GENERAL) -> None:
    """Print to stdout and log to the specified log type.

    Debug messages only go to the debug log.
    """
    if log_type != LOG__DEBUG:
        print(output_string)
    logging__log_event(log_type, output_string)


def set_level(level: str) -> None:
    """Set the package logger level from a name such as ``"DEBUG"``."""
    _logger.setLevel(level.upper())


# Modern interface
def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Get a logger with the specified name.

    This is the preferred way to get a logger in new code.
    """
    if name:
        return _logger.getChild(name)
    return _logger
