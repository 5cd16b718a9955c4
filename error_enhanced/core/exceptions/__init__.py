"""Exception handling module."""

from error_enhanced.core.exceptions.base import (
    CommandExecutionError,
    ConfigurationError,
    DependencyDiscoveryError,
    EnhancementError,
    FieldValidationError,
    SerializationError,
    StackAnalysisError,
)
from error_enhanced.core.exceptions.codes import ErrorCode
from error_enhanced.core.exceptions.handler import ErrorBoundary
from error_enhanced.core.exceptions.messages import (
    ErrorMessageTemplate,
    format_error_payload,
    validation_message,
)

__all__ = [
    "EnhancementError",
    "FieldValidationError",
    "SerializationError",
    "CommandExecutionError",
    "DependencyDiscoveryError",
    "StackAnalysisError",
    "ConfigurationError",
    "ErrorCode",
    "ErrorBoundary",
    "ErrorMessageTemplate",
    "format_error_payload",
    "validation_message",
]
