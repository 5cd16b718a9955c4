"""Core exception classes raised by error_enhanced."""

from typing import Any

from error_enhanced.core.exceptions.codes import ErrorCode


class EnhancementError(Exception):
    """Base class for every error raised by the library."""

    def __init__(
        self,
        message: str,
        error_code: str = ErrorCode.GENERAL_ERROR.value,
        details: dict[str, Any] | None = None,
    ):
        """Initialise the error.

        Args:
            message: Human readable message.
            error_code: Value of an :class:`ErrorCode`.
            details: Extra structured context.
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}


class FieldValidationError(EnhancementError, ValueError):
    """A setter received a value outside the field's valid domain."""

    def __init__(
        self,
        message: str,
        field: str,
        value: Any,
        reason: str,
        valid_values: list[Any] | None = None,
    ):
        details: dict[str, Any] = {"field": field, "value": value, "reason": reason}
        if valid_values is not None:
            details["valid_values"] = valid_values
        super().__init__(message, ErrorCode.VALIDATION_ERROR.value, details)
        self.field = field
        self.value = value
        self.reason = reason
        self.valid_values = valid_values


class SerializationError(EnhancementError):
    """Rendering a composite error into a text format failed."""

    def __init__(self, message: str, format: str, details: dict[str, Any] | None = None):
        super_details = details or {}
        super_details["format"] = format
        super().__init__(message, ErrorCode.SERIALIZATION_ERROR.value, super_details)
        self.format = format


class CommandExecutionError(EnhancementError):
    """An external command could not be run or exited with a failure."""

    def __init__(
        self,
        message: str,
        command: str | None = None,
        exit_code: int | None = None,
        stderr: str | None = None,
    ):
        details: dict[str, Any] = {}
        if command is not None:
            details["command"] = command
        if exit_code is not None:
            details["exit_code"] = exit_code
        super().__init__(message, ErrorCode.COMMAND_EXECUTION_ERROR.value, details)
        self.command = command
        self.exit_code = exit_code
        self.stderr = stderr


class DependencyDiscoveryError(EnhancementError):
    """Dependency discovery failed during one of its phases."""

    def __init__(self, message: str, phase: str, details: dict[str, Any] | None = None):
        super_details = details or {}
        super_details["phase"] = phase
        super().__init__(message, ErrorCode.DEPENDENCY_DISCOVERY_ERROR.value, super_details)
        self.phase = phase


class StackAnalysisError(EnhancementError):
    """Parsing an exception's traceback failed."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message, ErrorCode.STACK_ANALYSIS_ERROR.value, details)


class ConfigurationError(EnhancementError):
    """Configuration could not be loaded or applied."""

    def __init__(self, message: str, source: str | None = None, details: dict[str, Any] | None = None):
        super_details = details or {}
        if source:
            super_details["source"] = source
        super().__init__(message, ErrorCode.CONFIGURATION_ERROR.value, super_details)
