"""
Logging setup for lexdesk.

The desktop app logs to stdout and to ``log.txt`` in the persistent data
directory. The log of the previous run is kept as ``log.old.txt`` so that a
crash report can still be read after a restart.
"""

import logging
import sys
from pathlib import Path
from typing import Optional

from .paths import get_log_file_path, get_old_log_file_path


DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

QUIET_LOGGERS = ("MARKDOWN",)
"""Third-party loggers kept at WARNING (markdown reports every extension it loads)."""


def rotate_log_files(log_file: Optional[Path] = None) -> None:
    """
    Move the previous run's log to ``<stem>.old<suffix>``.

    Only one old log is kept. Failures are reported on stderr, since logging
    is not configured yet at this point.

    Args:
        log_file: Log of the previous run; the data directory's log.txt
            if None.
    """
    if log_file is None:
        log_file = get_log_file_path()
        old_log_file = get_old_log_file_path()
    else:
        old_log_file = log_file.with_name(f"{log_file.stem}.old{log_file.suffix}")

    if not log_file.exists():
        return

    try:
        old_log_file.unlink(missing_ok=True)
        log_file.rename(old_log_file)
    except OSError as e:
        print(f"Warning: Could not rotate {log_file}: {e}", file=sys.stderr)


def _handler(handler: logging.Handler, level: int, format_string: str) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(format_string))
    return handler


def setup_logging(
    level: int = logging.INFO,
    log_file: Optional[Path] = None,
    format_string: Optional[str] = None,
    log_to_file: bool = True
) -> None:
    """
    Configure the root logger for the catalog.

    Calling it again replaces the previous configuration.

    Args:
        level: Root level, usually taken from AppSettings.log_level.
        log_file: File to write; the data directory's log.txt if None.
        format_string: Record format; DEFAULT_FORMAT if None.
        log_to_file: If False, only stdout is used and nothing is rotated.
    """
    format_string = format_string or DEFAULT_FORMAT
    handlers = [_handler(logging.StreamHandler(sys.stdout), level, format_string)]

    if log_to_file:
        log_file = log_file or get_log_file_path()
        rotate_log_files(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(_handler(logging.FileHandler(log_file, encoding='utf-8', mode='w'), level, format_string))

    logging.basicConfig(level=level, handlers=handlers, format=format_string, force=True)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Get the logger of a lexdesk module (pass ``__name__``)."""
    return logging.getLogger(name)
