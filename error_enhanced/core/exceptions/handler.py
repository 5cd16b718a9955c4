"""Shared log-then-rewrap error handling."""

from __future__ import annotations

import traceback
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from datetime import UTC, datetime
from typing import Any

from error_enhanced.core.exceptions.base import EnhancementError, FieldValidationError
from error_enhanced.core.logging import get_logger, log_context

logger = get_logger(__name__)

WrapFactory = Callable[[Exception], EnhancementError]


class ErrorBoundary:
    """Catches failures at a component boundary, logs them and re-raises them wrapped.

    Validation errors and any type listed in ``passthrough`` propagate
    untouched; everything else is converted with the ``wrap`` factory and
    chained to the original cause.
    """

    def __init__(self, component: str):
        self.component = component

    def log_error(self, error: Exception, context: dict[str, Any] | None = None, level: str = "ERROR") -> None:
        """Log ``error`` with structured context."""

        error_context = {
            "component": self.component,
            "error_type": type(error).__name__,
            "error_message": str(error),
            "timestamp": datetime.now(UTC).isoformat(),
            "stack_trace": "".join(traceback.format_exception(error)),
            **(context or {}),
        }
        error_code = error.error_code if isinstance(error, EnhancementError) else None

        with log_context(component=self.component):
            logger.bind(error_code=error_code).opt(depth=2).log(
                level, "{error_message}", error_message=str(error), context=error_context
            )

    @contextmanager
    def guard(
        self,
        operation: str,
        wrap: WrapFactory,
        *,
        passthrough: tuple[type[Exception], ...] = (),
        **context: Any,
    ) -> Iterator[None]:
        """Run the wrapped block, converting unexpected failures with ``wrap``."""

        try:
            yield
        except (FieldValidationError, *passthrough):
            raise
        except Exception as exc:
            wrapped = wrap(exc)
            self.log_error(wrapped, {"operation": operation, "cause": repr(exc), **context})
            raise wrapped from exc


__all__ = ["ErrorBoundary", "WrapFactory"]
