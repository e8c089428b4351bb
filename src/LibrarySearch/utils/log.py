"""LibrarySearch logging utilities.

One package logger, `log`, shared by every module. Library callers get no
output until `configure_logging` runs; the CLI calls it once per command.

Line format: `mm-dd HH:MM:SS [LVL] message`, LVL one of DEBG/INFO/WARN/ERRO.
"""

from __future__ import annotations

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Final

LOG_FORMAT: Final = "%(asctime)s [%(levelabbr)s] %(message)s"
DATE_FORMAT: Final = "%m-%d %H:%M:%S"

_LEVEL_ABBREV: Final[dict[int, str]] = {
    logging.DEBUG: "DEBG",
    logging.INFO: "INFO",
    logging.WARNING: "WARN",
    logging.ERROR: "ERRO",
    logging.CRITICAL: "ERRO",
}

log = logging.getLogger("LibrarySearch")
log.addHandler(logging.NullHandler())


class _LevelAbbrevFilter(logging.Filter):
    """Adds `levelabbr` to every record passing through a handler."""

    def filter(self, record: logging.LogRecord) -> bool:  # noqa: A003 - stdlib name
        record.levelabbr = _LEVEL_ABBREV.get(record.levelno, record.levelname[:4])
        return True


def resolve_level(name: str | None) -> int:
    """Map a level name to its logging constant, INFO when unknown."""
    level = logging.getLevelName((name or "INFO").upper())
    return level if isinstance(level, int) else logging.INFO


def _prepare(handler: logging.Handler, level: int) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
    handler.addFilter(_LevelAbbrevFilter())
    return handler


def log_file_path(log_dir: str, action: str) -> Path:
    """Return `<log_dir>/<action>/<action>_<mmddHHMMSS>.log`, creating the dir."""
    action_dir = Path(log_dir or "log") / action
    action_dir.mkdir(parents=True, exist_ok=True)
    return action_dir / f"{action}_{datetime.now():%m%d%H%M%S}.log"


def configure_logging(
    *,
    level: str = "INFO",
    action: str | None = None,
    log_to_file: bool = False,
    log_dir: str = "log",
) -> Path | None:
    """Install fresh handlers on the package logger.

    Console output goes to stderr at `level`, so stdout stays machine
    readable. With `log_to_file` and an `action`, a DEBUG file handler is
    added as well.

    Args:
        level: Logging level name (e.g., INFO, DEBUG).
        action: CLI action name used to build the log file path.
        log_to_file: Whether to mirror logs to a file.
        log_dir: Base directory for log files.

    Returns:
        Path of the log file, or None when not logging to a file.
    """
    console_level = resolve_level(level)
    handlers = [_prepare(logging.StreamHandler(sys.stderr), console_level)]

    log_path = log_file_path(log_dir, action) if log_to_file and action else None
    if log_path is not None:
        handlers.append(_prepare(logging.FileHandler(log_path, encoding="utf-8"), logging.DEBUG))

    for old in list(log.handlers):
        log.removeHandler(old)
        old.close()
    for handler in handlers:
        log.addHandler(handler)
    log.setLevel(logging.DEBUG if log_path else console_level)
    log.propagate = False
    return log_path
