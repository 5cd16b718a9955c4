"""Standardised error codes."""

from enum import Enum


class ErrorCode(str, Enum):
    """Error codes carried by every :class:`EnhancementError`."""

    GENERAL_ERROR = "GENERAL_ERROR"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"
    SERIALIZATION_ERROR = "SERIALIZATION_ERROR"
    COMMAND_EXECUTION_ERROR = "COMMAND_EXECUTION_ERROR"
    DEPENDENCY_DISCOVERY_ERROR = "DEPENDENCY_DISCOVERY_ERROR"
    STACK_ANALYSIS_ERROR = "STACK_ANALYSIS_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"
