"""JSON-lines logging on top of loguru with trace and context propagation."""

from __future__ import annotations

import json
import os
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import datetime
from typing import IO, Any
from uuid import uuid4

from loguru import logger

from error_enhanced.core.logging.config import LogConfig

_TRACE_ID_VAR: ContextVar[str | None] = ContextVar("error_enhanced_trace_id", default=None)
_CONTEXT_VAR: ContextVar[dict[str, Any]] = ContextVar("error_enhanced_log_context", default={})

# Keys lifted out of ``extra`` to the top level of every JSON line.
PROMOTED_KEYS = ("trace_id", "component", "error_code")


def _patch_record(record: dict[str, Any]) -> None:
    extra = record["extra"]
    for key, value in _CONTEXT_VAR.get().items():
        extra.setdefault(key, value)
    extra.setdefault("trace_id", _TRACE_ID_VAR.get() or uuid4().hex)


def _render(record: dict[str, Any]) -> str:
    extra = record["extra"]
    payload: dict[str, Any] = {
        "timestamp": record["time"].isoformat(),
        "level": record["level"].name,
        "message": record["message"],
    }
    payload.update({key: extra.get(key) for key in PROMOTED_KEYS})

    context = {key: value for key, value in extra.items() if key not in PROMOTED_KEYS}
    if context:
        payload["context"] = context
    if record["exception"] is not None:
        payload["exception"] = str(record["exception"])
    return json.dumps(payload, default=lambda value: value.isoformat() if isinstance(value, datetime) else str(value))


class _StreamSink:
    def __init__(self, stream: IO[str]) -> None:
        self._stream = stream

    def __call__(self, message: Any) -> None:
        self._stream.write(_render(message.record) + "\n")
        self._stream.flush()


class _FileSink:
    def __init__(self, path: str) -> None:
        directory = os.path.dirname(path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        self._path = path

    def __call__(self, message: Any) -> None:
        with open(self._path, "a", encoding="utf-8") as file:
            file.write(_render(message.record) + "\n")


def configure_logging(level: str = "INFO", **options: Any) -> LogConfig:
    """Replace the loguru handlers with JSON-lines sinks.

    Args:
        level: Minimum level for every sink.
        **options: Remaining :class:`LogConfig` fields, e.g. ``console_stream``
            or ``file_output`` and ``file_path``.

    Returns:
        The applied configuration.
    """
    config = LogConfig(level=level, **options)

    handlers: list[dict[str, Any]] = []
    if config.console_output:
        handlers.append({"sink": _StreamSink(config.console_stream or sys.stderr), "level": config.level})
    if config.file_output and config.file_path:
        handlers.append({"sink": _FileSink(config.file_path), "level": config.level})

    logger.configure(handlers=handlers, patcher=_patch_record, extra=dict(config.extra))
    return config


def get_logger(name: str | None = None) -> Any:
    """Return the logger, bound to ``name`` when given."""
    if name:
        return logger.bind(logger_name=name)
    return logger


@contextmanager
def log_context(*, trace_id: str | None = None, **extra: Any) -> Iterator[str]:
    """Attach ``extra`` and a trace id to every record logged inside the block.

    Nested contexts inherit the enclosing trace id unless ``trace_id`` is
    given; records logged outside any context get a fresh id each.
    """
    active_trace = trace_id or _TRACE_ID_VAR.get() or uuid4().hex
    trace_token = _TRACE_ID_VAR.set(active_trace)
    context_token = _CONTEXT_VAR.set({**_CONTEXT_VAR.get(), **extra})
    try:
        yield active_trace
    finally:
        _CONTEXT_VAR.reset(context_token)
        _TRACE_ID_VAR.reset(trace_token)


configure_logging()


__all__ = ["PROMOTED_KEYS", "configure_logging", "get_logger", "log_context", "logger"]
