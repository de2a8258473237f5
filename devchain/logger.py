"""Process-wide ``devchain`` logger.

One logger per process, built on first use: console output plus a rotating
``devchain.log`` under ``LOG_DIR``. ``LOG_LEVEL`` sets the starting level; the
CLI may raise or lower it with ``--log-level`` via ``set_level``. Entry points
wrap themselves in ``log_exceptions`` so a crash leaves a traceback in the log
file as well as on the terminal.
"""
from __future__ import annotations
import functools
import logging
import os
import threading
from logging.handlers import RotatingFileHandler
from typing import Any, Callable, Optional, TypeVar, cast

LOGGER_NAME = "devchain"
LOG_FILE = "devchain.log"
LOG_FILE_MAX_BYTES = 2 * 1024 * 1024
LOG_FILE_BACKUPS = 5
LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")

_FORMATTER = logging.Formatter(fmt="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
                               datefmt="%Y-%m-%d %H:%M:%S")

_lock = threading.Lock()
_instance: Optional[logging.Logger] = None


def _to_level(name: str) -> int:
    return getattr(logging, name.upper(), logging.INFO)


def _attach(target: logging.Logger, handler: logging.Handler) -> None:
    handler.setLevel(target.level)
    handler.setFormatter(_FORMATTER)
    target.addHandler(handler)


def _build(name: str) -> logging.Logger:
    log = logging.getLogger(name)
    log.setLevel(_to_level(os.getenv("LOG_LEVEL", "INFO")))
    log.propagate = False
    if log.handlers:
        return log

    _attach(log, logging.StreamHandler())
    log_dir = os.getenv("LOG_DIR", "logs")
    try:
        os.makedirs(log_dir, exist_ok=True)
        _attach(log, RotatingFileHandler(os.path.join(log_dir, LOG_FILE), maxBytes=LOG_FILE_MAX_BYTES,
                                         backupCount=LOG_FILE_BACKUPS, encoding="utf-8"))
    except OSError as e:  # pragma: no cover
        log.warning("file logging disabled (%s): %s", log_dir, e)
    return log


def get_logger() -> logging.Logger:
    global _instance
    if _instance is None:
        with _lock:
            if _instance is None:
                _instance = _build(LOGGER_NAME)
    return _instance


def set_level(level_name: str) -> int:
    """Apply ``level_name`` to the logger and every handler it owns; returns the numeric level."""
    log = get_logger()
    level = _to_level(level_name)
    log.setLevel(level)
    for h in log.handlers:
        h.setLevel(level)
    return level


F = TypeVar("F", bound=Callable[..., Any])


def log_exceptions(command: str) -> Callable[[F], F]:
    """Log an escaping exception with its traceback under ``command``, then re-raise it."""
    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except Exception as e:
                get_logger().exception("%s aborted: %s", command, e.__class__.__name__)
                raise
        return cast(F, wrapper)
    return decorator


logger = get_logger()

__all__ = ["LEVELS", "logger", "get_logger", "set_level", "log_exceptions"]
