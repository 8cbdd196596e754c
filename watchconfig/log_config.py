"""Logging setup.

- Console handler always (stderr).
- File handler only when a log directory is configured: `watchconfig.log`,
  rotated at midnight, `retention_days` old files kept.
- Level: normalized name, unknown values fall back to INFO.
"""
from __future__ import annotations

import logging
import os
from logging.handlers import TimedRotatingFileHandler

_LOG_FORMAT = "%(asctime)s [%(levelname)-8s] %(name)s: %(message)s"
_LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
_LOG_FILE = "watchconfig.log"

# Handlers installed by us, removed again on reconfiguration.
_file_handler: logging.Handler | None = None
_console_handler: logging.Handler | None = None


def normalize_level(level: str | None) -> str:
    level_str = (level or "INFO").strip().upper()
    if level_str not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
        level_str = "INFO"
    return level_str


def setup_logging(
    level: str = "INFO",
    log_dir: str = "",
    retention_days: int = 30,
) -> None:
    """Configure the root logger; safe to call more than once."""
    global _file_handler, _console_handler

    level_str = normalize_level(level)
    log_level = getattr(logging, level_str, logging.INFO)
    retention_days = max(1, min(365, int(retention_days or 30)))

    root = logging.getLogger()

    if _file_handler and _file_handler in root.handlers:
        root.removeHandler(_file_handler)
        _file_handler.close()
    _file_handler = None
    if _console_handler and _console_handler in root.handlers:
        root.removeHandler(_console_handler)

    formatter = logging.Formatter(_LOG_FORMAT, datefmt=_LOG_DATE_FORMAT)

    ch = logging.StreamHandler()
    ch.setLevel(log_level)
    ch.setFormatter(formatter)
    _console_handler = ch
    root.addHandler(ch)

    log_dir = (log_dir or "").strip()
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)
        fh = TimedRotatingFileHandler(
            os.path.join(log_dir, _LOG_FILE),
            when="midnight",
            interval=1,
            backupCount=retention_days,
            encoding="utf-8",
            utc=True,
        )
        fh.suffix = "%Y-%m-%d"
        fh.setLevel(log_level)
        fh.setFormatter(formatter)
        _file_handler = fh
        root.addHandler(fh)

    root.setLevel(log_level)

    logging.getLogger("uvicorn.access").setLevel(max(log_level, logging.WARNING))
    logging.getLogger("httpx").setLevel(max(log_level, logging.WARNING))

    logging.getLogger("watchconfig").info(
        "Logging configured: level=%s, dir=%s, retention=%d days",
        level_str, log_dir or "(console only)", retention_days,
    )


def get_log_file() -> str | None:
    """Path of the active log file, if file logging is on."""
    if isinstance(_file_handler, TimedRotatingFileHandler):
        return _file_handler.baseFilename
    return None
