"""
Structured logging for the cfx-rpc client.

Every module obtains its logger through :func:`get_logger` and passes
structured context through ``extra={...}``. The package logger carries a
NullHandler so nothing is printed unless the application configures
logging, either itself or via :func:`configure_logging`.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Union

ROOT_LOGGER_NAME = "cfx_rpc"

_CONTEXT_EXCLUDE = set(vars(logging.makeLogRecord({})).keys()) | {"message", "asctime"}

logging.getLogger(ROOT_LOGGER_NAME).addHandler(logging.NullHandler())


class _ContextFormatter(logging.Formatter):
    """Formatter that appends ``extra`` fields as ``key=value`` pairs."""

    def format(self, record: logging.LogRecord) -> str:
        base = super().format(record)
        context = {
            key: value
            for key, value in vars(record).items()
            if key not in _CONTEXT_EXCLUDE
        }
        if not context:
            return base
        pairs = " ".join(f"{key}={value!r}" for key, value in sorted(context.items()))
        return f"{base} | {pairs}"


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger inside the package namespace.

    Args:
        name: Usually ``__name__`` of the calling module.

    Returns:
        Logger whose name is rooted at ``cfx_rpc``.
    """
    if name != ROOT_LOGGER_NAME and not name.startswith(ROOT_LOGGER_NAME + "."):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)


def configure_logging(
    level: Union[int, str] = logging.INFO,
    *,
    fmt: str = "%(asctime)s %(levelname)s %(name)s: %(message)s",
    handler: Optional[logging.Handler] = None,
) -> logging.Logger:
    """
    Attach a handler to the package logger.

    Calling it again replaces the handler installed by the previous call.

    Args:
        level: Log level for the package logger.
        fmt: Format string for the default formatter.
        handler: Handler to install (defaults to a StreamHandler).

    Returns:
        The package root logger.
    """
    root = logging.getLogger(ROOT_LOGGER_NAME)
    for existing in list(root.handlers):
        if getattr(existing, "_cfx_rpc_handler", False):
            root.removeHandler(existing)

    handler = handler or logging.StreamHandler()
    handler.setFormatter(_ContextFormatter(fmt))
    handler._cfx_rpc_handler = True  # type: ignore[attr-defined]
    root.addHandler(handler)
    root.setLevel(level)
    return root


def set_level(level: Union[int, str]) -> None:
    """Set the level of the package logger."""
    logging.getLogger(ROOT_LOGGER_NAME).setLevel(level)


def enable_debug() -> None:
    """Shortcut for ``configure_logging(logging.DEBUG)``."""
    configure_logging(logging.DEBUG)


def disable_logging() -> None:
    """Silence the package logger entirely."""
    logging.getLogger(ROOT_LOGGER_NAME).setLevel(logging.CRITICAL + 1)


class LogContext:
    """
    Logger adapter that merges a fixed context into every record.

    Example:
        ```python
        log = LogContext(get_logger(__name__), method="cfx_call")
        log.debug("dispatching", extra={"params": 2})
        ```
    """

    def __init__(self, logger: logging.Logger, **context: Any) -> None:
        self._logger = logger
        self._context: Dict[str, Any] = context

    def _log(self, level: int, msg: str, extra: Optional[Dict[str, Any]] = None) -> None:
        merged = dict(self._context)
        if extra:
            merged.update(extra)
        self._logger.log(level, msg, extra=merged)

    def debug(self, msg: str, extra: Optional[Dict[str, Any]] = None) -> None:
        self._log(logging.DEBUG, msg, extra)

    def info(self, msg: str, extra: Optional[Dict[str, Any]] = None) -> None:
        self._log(logging.INFO, msg, extra)

    def warning(self, msg: str, extra: Optional[Dict[str, Any]] = None) -> None:
        self._log(logging.WARNING, msg, extra)

    def error(self, msg: str, extra: Optional[Dict[str, Any]] = None) -> None:
        self._log(logging.ERROR, msg, extra)
