from __future__ import annotations

import json
import logging
import time
from typing import Any, Iterable, Optional

from structkit.config import get_config
from structkit.constants import (
    LOG_DEFAULT_LEVEL,                  # logging.WARNING
    LOG_DEFAULT_NAME,                   # "structkit"
    LOG_LEVEL_MAP,                      # str->level
    env_log_json,
    env_log_stderr,
)

# Track configured roots to avoid handler duplication across repeated calls.
_CONFIGURED_ROOTS: set[str] = set()

_RESERVED_ATTRS = {
    "args", "asctime", "created", "exc_info", "exc_text", "filename",
    "funcName", "levelname", "levelno", "lineno", "module", "msecs",
    "msg", "name", "pathname", "process", "processName", "relativeCreated",
    "stack_info", "thread", "threadName", "taskName",
}


def _resolve_level(level: int | str | None) -> int:
    if level is None:
        return get_config().log_level
    if isinstance(level, str):
        return LOG_LEVEL_MAP.get(level.upper(), LOG_DEFAULT_LEVEL)
    return int(level)


class _JsonFormatter(logging.Formatter):
    """
    Minimal JSON formatter with safe extras serialization and optional UTC timestamps.
    """

    def __init__(self, *, use_utc: bool = False) -> None:
        super().__init__()
        self._use_utc = use_utc

    def formatTime(self, record: logging.LogRecord, datefmt: str | None = None) -> str:  # type: ignore[override]
        if self._use_utc:
            return time.strftime("%Y-%m-%dT%H:%M:%S", time.gmtime(record.created))
        return super().formatTime(record, datefmt=datefmt)

    def format(self, record: logging.LogRecord) -> str:  # type: ignore[override]
        payload: dict[str, Any] = {
            "time": self.formatTime(record, datefmt="%Y-%m-%dT%H:%M:%S"),
            "level": record.levelname,
            "name": record.name,
            "message": record.getMessage(),
        }
        for k, v in record.__dict__.items():
            if k in _RESERVED_ATTRS:
                continue
            try:
                json.dumps({k: v})
                payload[k] = v
            except (TypeError, ValueError):
                payload[k] = str(v)

        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)  # type: ignore[arg-type]
        if record.stack_info:
            payload["stack"] = self.formatStack(record.stack_info)

        return json.dumps(payload, ensure_ascii=False)


def _make_stream_handler(level: int, fmt: str, *,
                         use_json: bool, use_utc: bool, datefmt: Optional[str]) -> logging.Handler:
    h = logging.StreamHandler()
    h.setLevel(level)
    if use_json:
        h.setFormatter(_JsonFormatter(use_utc=use_utc))
    else:
        h.setFormatter(logging.Formatter(fmt=fmt, datefmt=datefmt))
    return h


# ---------- public API ----------

def setup_logger(
    name: str = LOG_DEFAULT_NAME,
    level: int | str | None = None,
    *,
    with_console: bool | None = None,
    fmt_console: str = "%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    datefmt_console: Optional[str] = "%Y-%m-%d %H:%M:%S",
    use_json: Optional[bool] = None,
    use_utc: bool = False,
    propagate: bool = True,
    force_reconfigure: bool = False,
    extra_filters: Optional[Iterable[logging.Filter]] = None,
) -> logging.Logger:
    """
    Configure and return the package root logger.

    Idempotent per `name`: subsequent calls update the level and (optionally) reconfigure
    handlers if `force_reconfigure=True`.

    Parameters
    ----------
    name : str
        Logger name (package root).
    level : int | str | None
        Logging level (int or textual). If None, use get_config().log_level,
        which defaults to env STRUCTKIT_LOG_LEVEL.
    with_console : bool | None
        If None, read from env (STRUCTKIT_LOG_STDERR). If True, add a STDERR handler.
    use_json : Optional[bool]
        If None, read from env (STRUCTKIT_LOG_JSON). If True, use the JSON formatter.
    propagate : bool
        Whether records also reach the host application's handlers.
    force_reconfigure : bool
        If True, remove handlers added by a previous call and add them again.

    Returns
    -------
    logging.Logger
        The configured logger instance.
    """
    lvl = _resolve_level(level)

    if with_console is None:
        with_console = env_log_stderr()

    if use_json is None:
        use_json = env_log_json()

    logger = logging.getLogger(name)
    logger.propagate = propagate

    already_configured = name in _CONFIGURED_ROOTS

    if already_configured and not force_reconfigure:
        logger.setLevel(lvl)
        for h in logger.handlers:
            h.setLevel(lvl)
        return logger

    if already_configured:
        _drop_stream_handlers(logger)
        _CONFIGURED_ROOTS.discard(name)

    logger.setLevel(lvl)

    if with_console:
        logger.addHandler(_make_stream_handler(
            lvl, fmt_console, use_json=bool(use_json), use_utc=use_utc,
            datefmt=datefmt_console,
        ))

    if extra_filters:
        for flt in extra_filters:
            logger.addFilter(flt)

    _CONFIGURED_ROOTS.add(name)
    return logger


def _drop_stream_handlers(logger: logging.Logger) -> None:
    # The NullHandler installed by the package __init__ stays in place.
    for h in list(logger.handlers):
        if not isinstance(h, logging.NullHandler):
            logger.removeHandler(h)


def get_logger(name: str = LOG_DEFAULT_NAME) -> logging.Logger:
    """
    Return a logger under the structkit root, configuring the root on first use.
    """
    if LOG_DEFAULT_NAME not in _CONFIGURED_ROOTS:
        setup_logger(name=LOG_DEFAULT_NAME)
    return logging.getLogger(name)


def set_global_level(level: int | str, name: str = LOG_DEFAULT_NAME) -> None:
    """
    Change the level of the root logger and its handlers.
    """
    lvl = _resolve_level(level)
    logger = get_logger(name)
    logger.setLevel(lvl)
    for h in logger.handlers:
        h.setLevel(lvl)


def reset_logging(name: str = LOG_DEFAULT_NAME) -> None:
    """
    Remove the handlers added by setup_logger and mark the logger as unconfigured.
    Useful for test teardown or dynamic reconfiguration.
    """
    logger = logging.getLogger(name)
    _drop_stream_handlers(logger)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
    _CONFIGURED_ROOTS.discard(name)


__all__ = ["setup_logger", "get_logger", "set_global_level", "reset_logging"]
