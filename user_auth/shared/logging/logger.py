"""loguru setup with per-request correlation ids and redaction."""

from __future__ import annotations

import logging
import os
import sys
from contextvars import ContextVar
from typing import Any

from loguru import logger as _logger

from .sensitive_filter import sanitize_record

_FMT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<lvl>{level:<8}</lvl> | "
    "<magenta>{extra[correlation_id]}</magenta> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
    "<lvl>{message}</lvl>"
)

# Quiet third-party loggers that would otherwise echo request lines twice.
_NOISY_LOGGERS = {"werkzeug": logging.WARNING, "urllib3": logging.WARNING}

_CORRELATION_ID: ContextVar[str] = ContextVar("correlation_id", default="-")


def _with_correlation_id(record: dict[str, Any]) -> None:
    record["extra"].setdefault("correlation_id", _CORRELATION_ID.get())


_patched = _logger.patch(_with_correlation_id)


class _InterceptHandler(logging.Handler):
    """Routes stdlib ``logging`` records (SQLAlchemy, redis, werkzeug) into loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = _logger.level(record.levelname).name
        except ValueError:
            level = record.levelno
        _patched.opt(depth=6, exception=record.exc_info).log(level, record.getMessage())


class ContextualLogger:
    """Module-level handle; every call carries the current correlation id."""

    def __getattr__(self, name):  # pragma: no cover
        return getattr(_patched, name)


def set_correlation_id(value: str | None) -> None:
    _CORRELATION_ID.set(value or "-")


def get_correlation_id() -> str:
    return _CORRELATION_ID.get()


def clear_correlation_id() -> None:
    _CORRELATION_ID.set("-")


def setup_logging(level: str | None = None, log_file: str | None = None) -> None:
    level = (level or "INFO").upper()
    sink_options: dict[str, Any] = {
        "level": level,
        "format": _FMT,
        "filter": sanitize_record,
        "backtrace": False,
        "diagnose": False,
    }

    _logger.remove()
    _logger.add(sys.stderr, colorize=True, **sink_options)
    if log_file:
        os.makedirs(os.path.dirname(os.path.abspath(log_file)), exist_ok=True)
        _logger.add(
            log_file,
            colorize=False,
            enqueue=True,
            rotation="10 MB",
            retention=5,
            encoding="utf-8",
            **sink_options,
        )

    logging.basicConfig(handlers=[_InterceptHandler()], level=0, force=True)
    for name, noisy_level in _NOISY_LOGGERS.items():
        logging.getLogger(name).setLevel(noisy_level)


logger = ContextualLogger()

__all__ = [
    "logger",
    "setup_logging",
    "set_correlation_id",
    "clear_correlation_id",
    "get_correlation_id",
]
