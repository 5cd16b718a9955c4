"""Standard error message templates."""

from typing import Any

from error_enhanced.core.exceptions.codes import ErrorCode


class ErrorMessageTemplate:
    """Registry of message templates keyed by error code."""

    _templates: dict[ErrorCode, str] = {
        ErrorCode.GENERAL_ERROR: "An unknown error occurred",
        ErrorCode.VALIDATION_ERROR: "Invalid {field}: '{value}' {reason}",
        ErrorCode.CONFIGURATION_ERROR: "Configuration error: {message}",
        ErrorCode.SERIALIZATION_ERROR: "Failed to serialize to {format}: {message}",
        ErrorCode.COMMAND_EXECUTION_ERROR: "Command '{command}' failed: {message}",
        ErrorCode.DEPENDENCY_DISCOVERY_ERROR: "Failed during {phase}: {message}",
        ErrorCode.STACK_ANALYSIS_ERROR: "Failed during {operation}: {message}",
        ErrorCode.INTERNAL_ERROR: "Internal error",
    }

    @classmethod
    def get_message(cls, error_code: ErrorCode, **kwargs: Any) -> str:
        """Render the template for ``error_code``.

        Args:
            error_code: Code whose template is rendered.
            **kwargs: Template variables.

        Returns:
            The formatted message, or a generic message naming the code when
            a template variable is missing.
        """
        template = cls._templates.get(error_code, cls._templates[ErrorCode.GENERAL_ERROR])
        try:
            return template.format(**kwargs)
        except KeyError:
            return f"{cls._templates[ErrorCode.GENERAL_ERROR]} (error code: {error_code.value})"


def validation_message(field: str, value: Any, reason: str, valid_values: list[Any] | None = None) -> str:
    """Build the message used by :class:`FieldValidationError`."""

    message = ErrorMessageTemplate.get_message(ErrorCode.VALIDATION_ERROR, field=field, value=value, reason=reason)
    if valid_values:
        message = f"{message}; valid values: {', '.join(str(item) for item in valid_values)}"
    return message


def format_error_payload(error_code: ErrorCode | str, message: str | None = None, **kwargs: Any) -> dict[str, Any]:
    """Build the structured payload printed for a failed operation.

    Args:
        error_code: Error code, or its string value.
        message: Custom message; rendered from the template when omitted.
        **kwargs: Extra details.

    Returns:
        Payload dictionary with ``code`` and ``message``, plus ``details``
        when any were given.
    """
    code = error_code.value if isinstance(error_code, ErrorCode) else error_code
    if message is None:
        message = ErrorMessageTemplate.get_message(ErrorCode(code), **kwargs)

    payload: dict[str, Any] = {"code": code, "message": message}
    if kwargs:
        payload["details"] = kwargs
    return payload
