"""Structured logging helpers with correlation IDs for the export pipeline.

This module provides a LoggerAdapter that injects structured fields
(``correlation_id``, ``operation``, ``status``) into every record, a JSON
formatter for application boundaries, and module-level loggers with a
NullHandler so the package never configures handlers on its own.

Examples
--------
>>> from agentdocs.logging import get_logger
>>> logger = get_logger(__name__)
>>> logger.info("Artifact written", extra={"operation": "knowledge", "status": "success"})
"""

from __future__ import annotations

import contextvars
import json
import logging
import sys
from typing import TYPE_CHECKING, Any, Self

if TYPE_CHECKING:
    from collections.abc import MutableMapping
    from types import TracebackType

__all__ = [
    "CorrelationContext",
    "JsonFormatter",
    "LoggerAdapter",
    "get_correlation_id",
    "get_logger",
    "setup_logging",
    "with_fields",
]

_correlation_id: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "agentdocs_correlation_id", default=None
)

_STANDARD_ATTRS = frozenset(
    {
        "name",
        "msg",
        "args",
        "created",
        "filename",
        "funcName",
        "levelname",
        "levelno",
        "lineno",
        "module",
        "msecs",
        "message",
        "pathname",
        "process",
        "processName",
        "relativeCreated",
        "thread",
        "threadName",
        "taskName",
        "exc_info",
        "exc_text",
        "stack_info",
    }
)


class JsonFormatter(logging.Formatter):
    """Format log records as single-line JSON objects.

    The payload always carries ``ts``, ``level``, ``name`` and ``message``;
    structured fields set through :class:`LoggerAdapter` or ``extra`` are
    appended when they are JSON-friendly scalars or containers.
    """

    def format(self, record: logging.LogRecord) -> str:
        """Render ``record`` as JSON.

        Parameters
        ----------
        record : logging.LogRecord
            Record to format.

        Returns
        -------
        str
            JSON-encoded log entry.
        """
        data: dict[str, object] = {
            "ts": self.formatTime(record, "%Y-%m-%dT%H:%M:%S") + "Z",
            "level": record.levelname,
            "name": record.name,
            "message": record.getMessage(),
        }
        if "correlation_id" not in record.__dict__:
            ctx_correlation_id = _correlation_id.get()
            if ctx_correlation_id is not None:
                data["correlation_id"] = ctx_correlation_id
        for key, value in record.__dict__.items():
            if (
                key not in _STANDARD_ATTRS
                and key not in data
                and not key.startswith("_")
                and value is not None
                and isinstance(value, (str, int, float, bool, list, dict))
            ):
                data[key] = value
        if record.exc_info:
            data["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(data, default=str)


class LoggerAdapter(logging.LoggerAdapter):  # type: ignore[type-arg]
    """Logger adapter that merges bound fields into every record.

    Fields bound at construction (see :func:`with_fields`) are merged under
    any per-call ``extra`` values, the context correlation id is injected
    when missing, and ``operation``/``status`` always get a value so log
    consumers can filter on them.
    """

    logger: logging.Logger

    def process(
        self, msg: object, kwargs: MutableMapping[str, Any]
    ) -> tuple[object, MutableMapping[str, Any]]:
        """Merge structured fields into ``kwargs['extra']``.

        Parameters
        ----------
        msg : object
            Log message.
        kwargs : MutableMapping[str, Any]
            Keyword arguments from the logging call.

        Returns
        -------
        tuple[object, MutableMapping[str, Any]]
            Message and keyword arguments with the merged ``extra`` mapping.
        """
        extra = dict(kwargs.get("extra") or {})
        for key, value in (self.extra or {}).items():
            extra.setdefault(key, value)
        if "correlation_id" not in extra:
            ctx_correlation_id = _correlation_id.get()
            if ctx_correlation_id is not None:
                extra["correlation_id"] = ctx_correlation_id
        extra.setdefault("operation", "unknown")
        kwargs["extra"] = extra
        return msg, kwargs

    def log(self, level: int, msg: object, *args: object, **kwargs: Any) -> None:
        """Log ``msg`` at ``level``, inferring ``status`` from the level."""
        extra = dict(kwargs.get("extra") or {})
        if "status" not in extra and "status" not in (self.extra or {}):
            if level >= logging.ERROR:
                extra["status"] = "error"
            elif level >= logging.WARNING:
                extra["status"] = "warning"
            else:
                extra["status"] = "success"
        kwargs["extra"] = extra
        super().log(level, msg, *args, **kwargs)


def get_logger(name: str) -> LoggerAdapter:
    """Return a structured logger adapter for ``name``.

    A :class:`logging.NullHandler` is attached when the logger has no
    handlers yet; applications configure output via :func:`setup_logging`.

    Parameters
    ----------
    name : str
        Logger name (typically ``__name__``).

    Returns
    -------
    LoggerAdapter
        Adapter with structured context injection.
    """
    logger = logging.getLogger(name)
    if not logger.handlers:
        logger.addHandler(logging.NullHandler())
    return LoggerAdapter(logger, {})


def setup_logging(level: int | str = logging.INFO) -> None:
    """Configure the root logger with :class:`JsonFormatter` on stderr.

    Parameters
    ----------
    level : int | str, optional
        Threshold as a number or level name. Defaults to ``logging.INFO``.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(JsonFormatter())
    logging.basicConfig(level=level, handlers=[handler], force=True)


def with_fields(logger: logging.Logger | LoggerAdapter, **fields: object) -> LoggerAdapter:
    """Return an adapter bound to ``fields``.

    Parameters
    ----------
    logger : logging.Logger | LoggerAdapter
        Base logger; an adapter is unwrapped and its bound fields kept.
    **fields : object
        Structured fields injected into every log call.

    Returns
    -------
    LoggerAdapter
        Adapter with the merged fields.

    Examples
    --------
    >>> from agentdocs.logging import get_logger, with_fields
    >>> adapter = with_fields(get_logger(__name__), operation="bundles")
    >>> adapter.info("Section written", extra={"section": "guides"})
    """
    if isinstance(logger, LoggerAdapter):
        merged = {**(logger.extra or {}), **fields}
        return LoggerAdapter(logger.logger, merged)
    return LoggerAdapter(logger, dict(fields))


def get_correlation_id() -> str | None:
    """Return the correlation id bound to the current context, if any."""
    return _correlation_id.get()


class CorrelationContext:
    """Bind a correlation id for the duration of a ``with`` block.

    The pipeline uses one id per run so every record emitted while
    generating artifacts can be grouped.

    Parameters
    ----------
    correlation_id : str | None
        Identifier to bind; ``None`` clears the binding.
    """

    def __init__(self, correlation_id: str | None) -> None:
        self.correlation_id = correlation_id
        self._token: contextvars.Token[str | None] | None = None

    def __enter__(self) -> Self:
        self._token = _correlation_id.set(self.correlation_id)
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        if self._token is not None:
            _correlation_id.reset(self._token)
        del exc_type, exc_val, exc_tb
