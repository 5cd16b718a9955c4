"""Original error capture and traceback analysis."""

from __future__ import annotations

import traceback
from types import MappingProxyType

from error_enhanced.core.cache import StackTraceCache, get_stack_cache
from error_enhanced.core.enhancers.base import Enhancer
from error_enhanced.core.exceptions import (
    ErrorBoundary,
    ErrorCode,
    ErrorMessageTemplate,
    FieldValidationError,
    StackAnalysisError,
    validation_message,
)
from error_enhanced.core.models.stack import UNKNOWN, StackFrame

_boundary = ErrorBoundary("error_analysis")


def _stack_error(exc: Exception) -> StackAnalysisError:
    message = ErrorMessageTemplate.get_message(
        ErrorCode.STACK_ANALYSIS_ERROR, operation="parse_stack", message=str(exc)
    )
    return StackAnalysisError(message, details={"operation": "parse_stack"})


class StackTraceParser:
    """Turns an exception's traceback into :class:`StackFrame` records."""

    @staticmethod
    def parse(error: BaseException) -> list[StackFrame]:
        """Parse ``error.__traceback__``, outermost frame first.

        An exception that was never raised has no traceback and yields no frames.
        """
        tb = error.__traceback__
        if tb is None:
            return []

        frames: list[StackFrame] = []
        for (frame, _), summary in zip(traceback.walk_tb(tb), traceback.extract_tb(tb), strict=True):
            function_name = frame.f_code.co_qualname or summary.name or UNKNOWN
            column = summary.colno if summary.colno is not None else -1
            frames.append(
                StackFrame(
                    function_name=function_name,
                    file_name=summary.filename or UNKNOWN,
                    line_number=summary.lineno if summary.lineno is not None else -1,
                    column_number=column + 1 if column >= 0 else -1,
                    type_name=function_name.split(".")[0],
                )
            )
        return frames


class ErrorAnalysisEnhancer(Enhancer):
    """Keeps the wrapped original exception and its parsed stack."""

    _field_defaults = MappingProxyType({"_original_error": None, "_parsed_stack": [], "_stack_cache": None})
    _transient_fields = frozenset({"_stack_cache"})

    def __init__(self, stack_cache: StackTraceCache | None = None):
        self._reset_fields()
        self._stack_cache = stack_cache

    @property
    def original_error(self) -> BaseException | None:
        return self._original_error

    @property
    def parsed_stack(self) -> list[StackFrame]:
        return self._parsed_stack

    def set_original_error(self, error: BaseException) -> ErrorAnalysisEnhancer:
        """Store ``error`` and parse its traceback once per exception object.

        Raises:
            FieldValidationError: ``error`` is not an exception.
            StackAnalysisError: The traceback could not be parsed.
        """
        if not isinstance(error, BaseException):
            reason = "is not an exception"
            raise FieldValidationError(
                validation_message("original_error", error, reason), field="original_error", value=error, reason=reason
            )

        cache = self._stack_cache or get_stack_cache()
        with _boundary.guard("parse_stack", _stack_error, error_type=type(error).__name__):
            frames = cache.get_or_parse(error, StackTraceParser.parse)
        self._original_error = error
        self._parsed_stack = frames
        return self
